"""Tests for discussion items, time blocks and the quick note."""

from datetime import date, datetime, timezone

import pytest

from daymark_server.errors import CapacityExceededError, ValidationError
from daymark_server.services.discussion_items import DiscussionItemService
from daymark_server.services.quick_notes import QuickNoteService
from daymark_server.services.time_blocks import TimeBlockService

from .conftest import USER_ID

DAY = date(2026, 3, 6)


def _at(hour: int) -> datetime:
    return datetime(2026, 3, 6, hour, 0, tzinfo=timezone.utc)


class TestDiscussionItems:
    async def test_limit_per_day(self, session):
        service = DiscussionItemService(session)
        items = [await service.create_item(USER_ID, DAY, f"Topic {i}", 3) for i in range(3)]

        assert [item.order for item in items] == [1, 2, 3]
        with pytest.raises(CapacityExceededError):
            await service.create_item(USER_ID, DAY, "Topic 4", 3)

    async def test_blank_content_is_rejected(self, session):
        with pytest.raises(ValidationError):
            await DiscussionItemService(session).create_item(USER_ID, DAY, "  ", 3)

    async def test_endpoints(self, client, headers, other_headers):
        created = await client.post(
            "/api/days/2026-03-06/discussion-items",
            json={"content": "Budget with Sam"},
            headers=headers,
        )
        item_id = created.json()["id"]

        updated = await client.put(
            f"/api/discussion-items/{item_id}",
            json={"content": "Budget and hiring with Sam"},
            headers=headers,
        )
        assert updated.json()["content"] == "Budget and hiring with Sam"

        forbidden = await client.delete(f"/api/discussion-items/{item_id}", headers=other_headers)
        assert forbidden.status_code == 403

        deleted = await client.delete(f"/api/discussion-items/{item_id}", headers=headers)
        assert deleted.status_code == 200


class TestTimeBlocks:
    async def test_default_type_is_deep_work(self, session):
        block = await TimeBlockService(session).create_time_block(
            USER_ID, DAY, "Write", _at(9), _at(11)
        )

        assert block.type == "Deep Work"

    async def test_end_before_start_is_rejected(self, session):
        with pytest.raises(ValidationError):
            await TimeBlockService(session).create_time_block(
                USER_ID, DAY, "Backwards", _at(11), _at(9)
            )

    async def test_update_checks_span_against_stored_times(self, session):
        service = TimeBlockService(session)
        block = await service.create_time_block(USER_ID, DAY, "Write", _at(9), _at(11))

        with pytest.raises(ValidationError):
            await service.update_time_block(block.id, USER_ID, end_time=_at(8))

    async def test_update_rejects_blank_title(self, session):
        service = TimeBlockService(session)
        block = await service.create_time_block(USER_ID, DAY, "Write", _at(9), _at(11))

        with pytest.raises(ValidationError):
            await service.update_time_block(block.id, USER_ID, title="   ")
        assert block.title == "Write"

        renamed = await service.update_time_block(block.id, USER_ID, title="  Edit  ")
        assert renamed.title == "Edit"

    async def test_list_sorted_by_start(self, session):
        service = TimeBlockService(session)
        await service.create_time_block(USER_ID, DAY, "Afternoon", _at(14), _at(15))
        await service.create_time_block(USER_ID, DAY, "Morning", _at(8), _at(9))

        blocks = await service.list_for_day(USER_ID, DAY)

        assert [b.title for b in blocks] == ["Morning", "Afternoon"]

    async def test_list_for_missing_day_is_empty(self, session):
        assert await TimeBlockService(session).list_for_day(USER_ID, DAY) == []

    async def test_endpoints_accept_camel_case(self, client, headers):
        created = await client.post(
            "/api/days/2026-03-06/time-blocks",
            json={
                "title": "Standup",
                "startTime": "2026-03-06T09:00:00Z",
                "endTime": "2026-03-06T09:15:00Z",
                "type": "Meeting",
            },
            headers=headers,
        )
        assert created.status_code == 200
        assert created.json()["type"] == "Meeting"
        block_id = created.json()["id"]

        listed = await client.get("/api/days/2026-03-06/time-blocks", headers=headers)
        assert [b["id"] for b in listed.json()] == [block_id]

        renamed = await client.put(
            f"/api/time-blocks/{block_id}", json={"title": "Daily standup"}, headers=headers
        )
        assert renamed.json()["title"] == "Daily standup"

        deleted = await client.delete(f"/api/time-blocks/{block_id}", headers=headers)
        assert deleted.json() == {"status": "deleted", "id": block_id}


class TestQuickNote:
    async def test_upsert_keeps_one_note_per_day(self, session):
        service = QuickNoteService(session)
        first = await service.upsert_quick_note(USER_ID, DAY, "Call plumber")
        second = await service.upsert_quick_note(USER_ID, DAY, "Call plumber at 3")

        assert first.id == second.id
        assert second.content == "Call plumber at 3"

    async def test_endpoint(self, client, headers):
        response = await client.put(
            "/api/days/2026-03-06/quick-note", json={"content": "Groceries"}, headers=headers
        )

        assert response.status_code == 200
        day = await client.get("/api/days/2026-03-06", headers=headers)
        assert day.json()["quick_note"]["content"] == "Groceries"
