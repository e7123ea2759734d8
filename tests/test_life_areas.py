"""Tests for life areas: default area, active limit, archive and reorder."""

import pytest

from daymark_server.errors import AccessDeniedError, CapacityExceededError, ValidationError
from daymark_server.services.life_areas import LifeAreaService

from .conftest import OTHER_USER_ID, USER_ID


class TestLifeAreaService:
    async def test_first_list_creates_personal(self, session):
        areas = await LifeAreaService(session).list_life_areas(USER_ID)

        assert [(a.name, a.order) for a in areas] == [("Personal", 1)]

    async def test_active_limit(self, session):
        service = LifeAreaService(session, max_active=3)
        await service.ensure_default_life_area(USER_ID)
        await service.create_life_area(USER_ID, "Work")
        await service.create_life_area(USER_ID, "Health")

        with pytest.raises(CapacityExceededError):
            await service.create_life_area(USER_ID, "Family")

    async def test_archive_frees_a_slot_and_restore_respects_limit(self, session):
        service = LifeAreaService(session, max_active=2)
        personal = await service.ensure_default_life_area(USER_ID)
        work = await service.create_life_area(USER_ID, "Work")

        await service.archive_life_area(work.id, USER_ID)
        await service.create_life_area(USER_ID, "Health")

        with pytest.raises(CapacityExceededError):
            await service.restore_life_area(work.id, USER_ID)
        assert personal.is_archived is False

    async def test_cannot_archive_last_active(self, session):
        service = LifeAreaService(session)
        personal = await service.ensure_default_life_area(USER_ID)

        with pytest.raises(ValidationError):
            await service.archive_life_area(personal.id, USER_ID)

    async def test_reorder(self, session):
        service = LifeAreaService(session)
        personal = await service.ensure_default_life_area(USER_ID)
        work = await service.create_life_area(USER_ID, "Work")

        areas = await service.reorder_life_areas(USER_ID, [work.id, personal.id])

        assert [a.name for a in areas] == ["Work", "Personal"]

    async def test_reorder_rejects_foreign_ids(self, session):
        service = LifeAreaService(session)
        mine = await service.ensure_default_life_area(USER_ID)
        theirs = await service.ensure_default_life_area(OTHER_USER_ID)

        with pytest.raises(ValidationError):
            await service.reorder_life_areas(USER_ID, [mine.id, theirs.id])

    async def test_other_user_is_denied(self, session):
        service = LifeAreaService(session)
        area = await service.ensure_default_life_area(USER_ID)

        with pytest.raises(AccessDeniedError):
            await service.get_life_area(area.id, OTHER_USER_ID)


class TestLifeAreaEndpoints:
    async def test_create_archive_restore(self, client, headers):
        default = await client.get("/api/life-areas/default", headers=headers)
        assert default.json()["name"] == "Personal"

        created = await client.post(
            "/api/life-areas", json={"name": "Work", "color": "#3366ff"}, headers=headers
        )
        assert created.status_code == 200
        area_id = created.json()["id"]
        assert created.json()["order"] == 2

        archived = await client.delete(f"/api/life-areas/{area_id}", headers=headers)
        assert archived.json()["is_archived"] is True

        listed = await client.get("/api/life-areas", headers=headers)
        assert [a["name"] for a in listed.json()] == ["Personal"]

        restored = await client.post(f"/api/life-areas/{area_id}/restore", headers=headers)
        assert restored.json()["is_archived"] is False

    async def test_rename_and_recolor(self, client, headers, other_headers):
        created = await client.post("/api/life-areas", json={"name": "Work"}, headers=headers)
        area_id = created.json()["id"]

        updated = await client.patch(
            f"/api/life-areas/{area_id}",
            json={"name": "Career", "color": "#00aa55"},
            headers=headers,
        )
        assert updated.json()["name"] == "Career"
        assert updated.json()["color"] == "#00aa55"

        forbidden = await client.get(f"/api/life-areas/{area_id}", headers=other_headers)
        assert forbidden.status_code == 403

    async def test_reorder_accepts_camel_case(self, client, headers):
        personal = (await client.get("/api/life-areas", headers=headers)).json()[0]
        work = (
            await client.post("/api/life-areas", json={"name": "Work"}, headers=headers)
        ).json()

        response = await client.post(
            "/api/life-areas/reorder",
            json={"orderedIds": [work["id"], personal["id"]]},
            headers=headers,
        )

        assert response.status_code == 200
        assert [a["name"] for a in response.json()] == ["Work", "Personal"]
