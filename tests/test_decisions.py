"""Tests for the decision log."""

from datetime import date

import pytest

from daymark_server.errors import NotFoundError, ValidationError
from daymark_server.services.decisions import DecisionService

from .conftest import OTHER_USER_ID, USER_ID


@pytest.fixture
async def decisions(session):
    service = DecisionService(session)
    await service.create_decision(
        USER_ID,
        title="Switch to Postgres",
        decision_date=date(2026, 2, 1),
        decision="Migrate this quarter",
        context="SQLite locks under load",
    )
    await service.create_decision(
        USER_ID,
        title="Hire contractor",
        decision_date=date(2026, 2, 10),
        decision="Two month contract for the mobile app",
    )
    await service.create_decision(
        OTHER_USER_ID,
        title="Postgres for analytics",
        decision_date=date(2026, 2, 5),
        decision="Use a read replica",
    )
    return service


class TestDecisionService:
    async def test_list_newest_first(self, decisions):
        entries = await decisions.list_decisions(USER_ID)

        assert [e.title for e in entries] == ["Hire contractor", "Switch to Postgres"]

    async def test_search_is_case_insensitive_over_context(self, decisions):
        entries = await decisions.list_decisions(USER_ID, search="LOCKS")

        assert [e.title for e in entries] == ["Switch to Postgres"]

    async def test_search_does_not_cross_users(self, decisions):
        entries = await decisions.list_decisions(USER_ID, search="postgres")

        assert [e.title for e in entries] == ["Switch to Postgres"]

    async def test_update_leaves_unset_fields(self, decisions):
        entry = (await decisions.list_decisions(USER_ID, search="contractor"))[0]

        updated = await decisions.update_decision(entry.id, USER_ID, outcome="Delivered on time")

        assert updated.outcome == "Delivered on time"
        assert updated.decision == "Two month contract for the mobile app"

    async def test_other_users_entry_is_not_found(self, decisions):
        entry = (await decisions.list_decisions(USER_ID))[0]

        with pytest.raises(NotFoundError):
            await decisions.get_decision(entry.id, OTHER_USER_ID)

    async def test_blank_decision_is_rejected(self, session):
        with pytest.raises(ValidationError):
            await DecisionService(session).create_decision(
                USER_ID, title="Empty", decision_date=date(2026, 2, 1), decision=" "
            )


class TestDecisionEndpoints:
    async def test_create_search_update_delete(self, client, headers):
        created = await client.post(
            "/api/decisions",
            json={
                "title": "Weekly planning on Sunday",
                "date": "2026-02-15",
                "decision": "Block 30 minutes every Sunday evening",
            },
            headers=headers,
        )
        assert created.status_code == 200
        decision_id = created.json()["id"]
        assert created.json()["date"] == "2026-02-15"

        found = await client.get("/api/decisions", params={"search": "sunday"}, headers=headers)
        assert [e["id"] for e in found.json()] == [decision_id]

        moved = await client.put(
            f"/api/decisions/{decision_id}", json={"date": "2026-02-16"}, headers=headers
        )
        assert moved.json()["date"] == "2026-02-16"

        deleted = await client.delete(f"/api/decisions/{decision_id}", headers=headers)
        assert deleted.status_code == 200

        missing = await client.get(f"/api/decisions/{decision_id}", headers=headers)
        assert missing.status_code == 404
