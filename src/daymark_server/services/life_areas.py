"""Life areas: user-defined groupings such as "Work" or "Personal"."""

from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import LifeArea
from daymark_server.errors import (
    AccessDeniedError,
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from daymark_server.logging import log_capacity_rejected

logger = structlog.get_logger(__name__)

DEFAULT_LIFE_AREA_NAME = "Personal"


class LifeAreaService:
    """Life area CRUD with soft delete and an active-count ceiling."""

    def __init__(self, session: AsyncSession, max_active: int = 5):
        self.session = session
        self.max_active = max_active

    async def _active_count(self, user_id: str) -> int:
        result = await self.session.execute(
            select(func.count(LifeArea.id)).where(
                LifeArea.user_id == user_id,
                LifeArea.is_archived.is_(False),
            )
        )
        return result.scalar_one()

    async def _get_owned(self, area_id: str, user_id: str) -> LifeArea:
        area = await self.session.get(LifeArea, area_id)
        if area is None:
            raise NotFoundError("Life Area not found")
        if area.user_id != user_id:
            raise AccessDeniedError("Access denied")
        return area

    async def ensure_default_life_area(self, user_id: str) -> LifeArea:
        """Create the "Personal" area the first time a user has none at all."""
        result = await self.session.execute(
            select(LifeArea).where(LifeArea.user_id == user_id).limit(1)
        )
        existing = result.scalar_one_or_none()
        if existing is not None:
            return existing

        area = LifeArea(user_id=user_id, name=DEFAULT_LIFE_AREA_NAME, order=1)
        self.session.add(area)
        await self.session.flush()
        logger.info("default_life_area_created", user_id=user_id, life_area_id=area.id)
        return area

    async def list_life_areas(self, user_id: str) -> list[LifeArea]:
        """Active areas by order, creating the default one if needed."""
        await self.ensure_default_life_area(user_id)
        result = await self.session.execute(
            select(LifeArea)
            .where(LifeArea.user_id == user_id, LifeArea.is_archived.is_(False))
            .order_by(LifeArea.order)
        )
        return list(result.scalars().all())

    async def get_life_area(self, area_id: str, user_id: str) -> LifeArea:
        return await self._get_owned(area_id, user_id)

    async def get_default_life_area(self, user_id: str) -> LifeArea:
        result = await self.session.execute(
            select(LifeArea)
            .where(LifeArea.user_id == user_id, LifeArea.is_archived.is_(False))
            .order_by(LifeArea.order)
            .limit(1)
        )
        area = result.scalar_one_or_none()
        if area is None:
            return await self.ensure_default_life_area(user_id)
        return area

    async def create_life_area(
        self, user_id: str, name: str, color: Optional[str] = None
    ) -> LifeArea:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name must not be empty")

        if await self._active_count(user_id) >= self.max_active:
            log_capacity_rejected(logger, user_id, "life_area", self.max_active)
            raise CapacityExceededError(
                f"Maximum {self.max_active} life areas allowed", limit=self.max_active
            )

        result = await self.session.execute(
            select(func.max(LifeArea.order)).where(LifeArea.user_id == user_id)
        )
        next_order = (result.scalar_one_or_none() or 0) + 1

        area = LifeArea(user_id=user_id, name=name, color=color or None, order=next_order)
        self.session.add(area)
        await self.session.flush()
        logger.info("life_area_created", user_id=user_id, life_area_id=area.id, order=next_order)
        return area

    async def update_life_area(
        self,
        area_id: str,
        user_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
        order: Optional[int] = None,
    ) -> LifeArea:
        area = await self._get_owned(area_id, user_id)
        if name is not None:
            if not name.strip():
                raise ValidationError("Name must not be empty")
            area.name = name.strip()
        if color is not None:
            area.color = color
        if order is not None:
            area.order = order
        await self.session.flush()
        return area

    async def archive_life_area(self, area_id: str, user_id: str) -> LifeArea:
        """Soft delete. The last active area cannot be archived."""
        area = await self._get_owned(area_id, user_id)
        if not area.is_archived and await self._active_count(user_id) <= 1:
            raise ValidationError("Cannot archive the last remaining life area")

        area.is_archived = True
        await self.session.flush()
        logger.info("life_area_archived", life_area_id=area_id)
        return area

    async def restore_life_area(self, area_id: str, user_id: str) -> LifeArea:
        area = await self._get_owned(area_id, user_id)
        if not area.is_archived:
            return area

        if await self._active_count(user_id) >= self.max_active:
            log_capacity_rejected(logger, user_id, "life_area", self.max_active)
            raise CapacityExceededError(
                f"Cannot restore: maximum {self.max_active} active life areas allowed",
                limit=self.max_active,
            )

        area.is_archived = False
        await self.session.flush()
        logger.info("life_area_restored", life_area_id=area_id)
        return area

    async def reorder_life_areas(self, user_id: str, ordered_ids: list[str]) -> list[LifeArea]:
        """Set order 1..n following ordered_ids, which must all be the user's."""
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Invalid life area IDs")

        result = await self.session.execute(
            select(LifeArea).where(LifeArea.user_id == user_id, LifeArea.id.in_(ordered_ids))
        )
        areas = {area.id: area for area in result.scalars().all()}
        if len(areas) != len(ordered_ids):
            raise ValidationError("Invalid life area IDs")

        for position, area_id in enumerate(ordered_ids, start=1):
            areas[area_id].order = position
        await self.session.flush()

        return await self.list_life_areas(user_id)
