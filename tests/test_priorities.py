"""Tests for top priorities: the per-day capacity limit and CRUD."""

from datetime import date

import pytest

from daymark_server.errors import AccessDeniedError, CapacityExceededError, ValidationError
from daymark_server.services.days import DayService
from daymark_server.services.priorities import PriorityService

from .conftest import OTHER_USER_ID, USER_ID

DAY = date(2026, 3, 2)


class TestCapacity:
    """The manual-create path refuses once the limit is reached."""

    async def test_orders_are_count_plus_one(self, session):
        service = PriorityService(session)

        created = [await service.create_priority(USER_ID, DAY, f"Task {i}", 3) for i in range(3)]

        assert [p.order for p in created] == [1, 2, 3]
        assert all(p.completed is False for p in created)

    async def test_fourth_priority_is_rejected(self, session):
        service = PriorityService(session)
        for i in range(3):
            await service.create_priority(USER_ID, DAY, f"Task {i}", 3)

        with pytest.raises(CapacityExceededError) as exc_info:
            await service.create_priority(USER_ID, DAY, "One too many", 3)

        assert exc_info.value.limit == 3
        day = await DayService(session).find_day(USER_ID, DAY)
        assert await service.count_for_day(day.id) == 3

    async def test_completed_priorities_still_count(self, session):
        service = PriorityService(session)
        for i in range(3):
            priority = await service.create_priority(USER_ID, DAY, f"Task {i}", 3)
            await service.toggle_priority(priority.id, USER_ID)

        with pytest.raises(CapacityExceededError):
            await service.create_priority(USER_ID, DAY, "Still full", 3)

    async def test_limit_comes_from_caller(self, session):
        service = PriorityService(session)
        await service.create_priority(USER_ID, DAY, "Only one", 1)

        with pytest.raises(CapacityExceededError):
            await service.create_priority(USER_ID, DAY, "Second", 1)

    async def test_order_can_repeat_after_delete(self, session):
        """Orders are never renumbered, so count + 1 may reuse a live value."""
        service = PriorityService(session)
        first = await service.create_priority(USER_ID, DAY, "A", 3)
        await service.create_priority(USER_ID, DAY, "B", 3)
        await service.delete_priority(first.id, USER_ID)

        third = await service.create_priority(USER_ID, DAY, "C", 3)

        assert third.order == 2

    async def test_empty_title_is_rejected(self, session):
        with pytest.raises(ValidationError):
            await PriorityService(session).create_priority(USER_ID, DAY, "   ", 3)


class TestOwnership:
    async def test_other_user_cannot_update(self, session):
        service = PriorityService(session)
        priority = await service.create_priority(USER_ID, DAY, "Mine", 3)

        with pytest.raises(AccessDeniedError):
            await service.update_priority(priority.id, OTHER_USER_ID, title="Stolen")


class TestPriorityEndpoints:
    """HTTP surface for priorities."""

    async def test_create_and_reject_over_limit(self, client, headers):
        for i in range(3):
            response = await client.post(
                "/api/days/2026-03-02/priorities", json={"title": f"Task {i}"}, headers=headers
            )
            assert response.status_code == 200
            assert response.json()["order"] == i + 1

        response = await client.post(
            "/api/days/2026-03-02/priorities", json={"title": "Task 4"}, headers=headers
        )

        assert response.status_code == 400
        assert "Maximum 3" in response.json()["detail"]

    async def test_rejected_create_leaves_day_unchanged(self, client, headers):
        for i in range(4):
            await client.post(
                "/api/days/2026-03-02/priorities", json={"title": f"Task {i}"}, headers=headers
            )

        response = await client.get("/api/days/2026-03-02", headers=headers)

        assert len(response.json()["priorities"]) == 3

    async def test_update_toggle_and_delete(self, client, headers):
        created = await client.post(
            "/api/days/2026-03-02/priorities", json={"title": "Draft"}, headers=headers
        )
        priority_id = created.json()["id"]

        updated = await client.put(
            f"/api/priorities/{priority_id}", json={"title": "Final"}, headers=headers
        )
        assert updated.json()["title"] == "Final"

        toggled = await client.patch(f"/api/priorities/{priority_id}/complete", headers=headers)
        assert toggled.json()["completed"] is True

        toggled_back = await client.patch(
            f"/api/priorities/{priority_id}/complete", headers=headers
        )
        assert toggled_back.json()["completed"] is False

        deleted = await client.delete(f"/api/priorities/{priority_id}", headers=headers)
        assert deleted.json() == {"status": "deleted", "id": priority_id}

        missing = await client.delete(f"/api/priorities/{priority_id}", headers=headers)
        assert missing.status_code == 404

    async def test_cross_user_access_is_forbidden(self, client, headers, other_headers):
        created = await client.post(
            "/api/days/2026-03-02/priorities", json={"title": "Private"}, headers=headers
        )
        priority_id = created.json()["id"]

        response = await client.patch(
            f"/api/priorities/{priority_id}/complete", headers=other_headers
        )

        assert response.status_code == 403
