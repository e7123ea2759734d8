"""Tests for the Day resolver: date parsing, lazy creation and the day view."""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import func, select

from daymark_server.db.models import Day
from daymark_server.errors import AccessDeniedError, InvalidDateError
from daymark_server.services.days import DayService, parse_date
from daymark_server.services.priorities import PriorityService

from .conftest import OTHER_USER_ID, USER_ID


class TestParseDate:
    """Normalizing date inputs to a date-only key."""

    def test_plain_date_string(self):
        assert parse_date("2026-03-01") == date(2026, 3, 1)

    def test_iso_datetime_keeps_written_date(self):
        """Time and offset are dropped, the calendar date is not shifted."""
        assert parse_date("2026-03-01T23:30:00+05:00") == date(2026, 3, 1)
        assert parse_date("2026-03-01T00:15:00Z") == date(2026, 3, 1)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2026, 3, 1)) == date(2026, 3, 1)
        moment = datetime(2026, 3, 1, 18, 0, tzinfo=timezone.utc)
        assert parse_date(moment) == date(2026, 3, 1)

    @pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2026-13-40", None])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidDateError):
            parse_date(value)


class TestDayService:
    """Find-or-create semantics on (user, date)."""

    async def test_get_or_create_is_idempotent(self, session):
        service = DayService(session)

        first = await service.get_or_create_day(USER_ID, date(2026, 3, 1))
        second = await service.get_or_create_day(USER_ID, date(2026, 3, 1))

        assert first.id == second.id
        count = await session.execute(select(func.count(Day.id)))
        assert count.scalar_one() == 1

    async def test_days_are_scoped_per_user(self, session):
        service = DayService(session)

        mine = await service.get_or_create_day(USER_ID, date(2026, 3, 1))
        theirs = await service.get_or_create_day(OTHER_USER_ID, date(2026, 3, 1))

        assert mine.id != theirs.id
        assert theirs.user_id == OTHER_USER_ID

    async def test_find_day_does_not_create(self, session):
        service = DayService(session)

        assert await service.find_day(USER_ID, date(2026, 3, 1)) is None
        count = await session.execute(select(func.count(Day.id)))
        assert count.scalar_one() == 0

    async def test_insert_ignores_existing_row(self, session):
        service = DayService(session)

        assert await service._insert_day(USER_ID, date(2026, 3, 1)) is True
        assert await service._insert_day(USER_ID, date(2026, 3, 1)) is False

        day = await service.get_or_create_day(USER_ID, date(2026, 3, 1))
        rows = await session.execute(select(Day.id))
        assert rows.scalars().all() == [day.id]

    async def test_concurrent_creator_wins_and_row_is_reused(self, session, monkeypatch):
        """Another request inserts the Day between our lookup and our insert."""
        service = DayService(session)
        existing = Day(user_id=USER_ID, date=date(2026, 3, 1))
        session.add(existing)
        await session.flush()

        real_find = service.find_day
        lookups = []

        async def find_missing_once(user_id, day_date):
            lookups.append(day_date)
            if len(lookups) == 1:
                return None
            return await real_find(user_id, day_date)

        monkeypatch.setattr(service, "find_day", find_missing_once)

        day = await service.get_or_create_day(USER_ID, date(2026, 3, 1))

        assert day.id == existing.id
        assert len(lookups) == 2
        count = await session.execute(select(func.count(Day.id)))
        assert count.scalar_one() == 1

    async def test_verify_day_ownership(self, session):
        service = DayService(session)
        day = await service.get_or_create_day(USER_ID, date(2026, 3, 1))

        assert (await service.verify_day_ownership(day.id, USER_ID)).id == day.id
        with pytest.raises(AccessDeniedError):
            await service.verify_day_ownership(day.id, OTHER_USER_ID)
        with pytest.raises(AccessDeniedError):
            await service.verify_day_ownership("no-such-day", USER_ID)

    async def test_progress_counts_completed(self, session):
        priorities = PriorityService(session)
        first = await priorities.create_priority(USER_ID, date(2026, 3, 1), "Write report", 3)
        await priorities.create_priority(USER_ID, date(2026, 3, 1), "Call bank", 3)
        await priorities.toggle_priority(first.id, USER_ID)

        progress = await DayService(session).get_day_progress(USER_ID, date(2026, 3, 1))

        assert progress.total == 2
        assert progress.completed == 1

    async def test_progress_for_missing_day_is_zero(self, session):
        progress = await DayService(session).get_day_progress(USER_ID, date(2026, 3, 1))

        assert (progress.total, progress.completed) == (0, 0)
        assert await DayService(session).find_day(USER_ID, date(2026, 3, 1)) is None


class TestDayEndpoints:
    """HTTP surface for reading a Day."""

    async def test_get_day_creates_empty_day(self, client, headers):
        response = await client.get("/api/days/2026-03-01", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == "2026-03-01"
        assert body["user_id"] == "user-alice"
        assert body["priorities"] == []
        assert body["discussion_items"] == []
        assert body["time_blocks"] == []
        assert body["quick_note"] is None
        assert body["daily_review"] is None

    async def test_get_day_twice_returns_same_id(self, client, headers):
        first = await client.get("/api/days/2026-03-01", headers=headers)
        second = await client.get("/api/days/2026-03-01", headers=headers)

        assert first.json()["id"] == second.json()["id"]

    async def test_iso_datetime_path_maps_to_same_day(self, client, headers):
        first = await client.get("/api/days/2026-03-01", headers=headers)
        second = await client.get("/api/days/2026-03-01T08:00:00Z", headers=headers)

        assert second.status_code == 200
        assert first.json()["id"] == second.json()["id"]

    async def test_day_view_includes_priorities_in_order(self, client, headers):
        for title in ["First", "Second"]:
            await client.post(
                "/api/days/2026-03-01/priorities", json={"title": title}, headers=headers
            )

        response = await client.get("/api/days/2026-03-01", headers=headers)

        titles = [p["title"] for p in response.json()["priorities"]]
        assert titles == ["First", "Second"]

    async def test_invalid_date_is_rejected(self, client, headers):
        response = await client.get("/api/days/yesterday-ish", headers=headers)

        assert response.status_code == 400
        assert "Invalid date" in response.json()["detail"]

    async def test_missing_identity_is_unauthorized(self, client):
        response = await client.get("/api/days/2026-03-01")

        assert response.status_code == 401

    async def test_progress_endpoint(self, client, headers):
        await client.post(
            "/api/days/2026-03-01/priorities", json={"title": "Ship it"}, headers=headers
        )

        response = await client.get("/api/days/2026-03-01/progress", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"total": 1, "completed": 0}
