"""Top priorities: capacity enforcement and CRUD."""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import TopPriority
from daymark_server.errors import CapacityExceededError, ValidationError
from daymark_server.logging import log_capacity_rejected
from daymark_server.services.days import DayService, load_owned_child

logger = structlog.get_logger(__name__)


def clean_title(title: Optional[str]) -> str:
    """Strip a priority title, rejecting empty ones."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title must not be empty")
    return cleaned


class PriorityService:
    """Priority capacity enforcer plus owner-checked CRUD."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)

    # --- Capacity ---

    async def count_for_day(self, day_id: str) -> int:
        result = await self.session.execute(
            select(func.count(TopPriority.id)).where(TopPriority.day_id == day_id)
        )
        return result.scalar_one()

    async def next_order(self, day_id: str) -> int:
        """Order for the next insert: current count + 1.

        Read-then-compute, so two concurrent inserts on one Day can get the
        same value. Deletions leave gaps that are never renumbered.
        """
        return await self.count_for_day(day_id) + 1

    async def can_add(self, day_id: str, max_priorities: int) -> bool:
        return await self.count_for_day(day_id) < max_priorities

    async def add_to_day(self, day_id: str, title: str) -> TopPriority:
        """Append an incomplete priority to a Day without checking capacity."""
        priority = TopPriority(
            day_id=day_id,
            title=title,
            completed=False,
            order=await self.next_order(day_id),
        )
        self.session.add(priority)
        # Flush so the next count sees this row
        await self.session.flush()
        return priority

    # --- CRUD ---

    async def list_for_day(self, day_id: str, incomplete_only: bool = False) -> list[TopPriority]:
        """Priorities of a Day, ordered by ``order`` ascending."""
        query = select(TopPriority).where(TopPriority.day_id == day_id)
        if incomplete_only:
            query = query.where(TopPriority.completed.is_(False))
        query = query.order_by(TopPriority.order, TopPriority.created_at)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_priority(
        self,
        user_id: str,
        day_date: date,
        title: str,
        max_priorities: int,
    ) -> TopPriority:
        """Manually add a priority, refusing when the Day is already full."""
        title = clean_title(title)
        day = await self.days.get_or_create_day(user_id, day_date)

        if not await self.can_add(day.id, max_priorities):
            log_capacity_rejected(logger, user_id, "top_priority", max_priorities)
            raise CapacityExceededError(
                f"Maximum {max_priorities} priorities per day", limit=max_priorities
            )

        priority = await self.add_to_day(day.id, title)
        logger.info(
            "priority_created",
            user_id=user_id,
            day_id=day.id,
            priority_id=priority.id,
            order=priority.order,
        )
        return priority

    async def get_priority(self, priority_id: str, user_id: str) -> TopPriority:
        return await load_owned_child(
            self.session, TopPriority, priority_id, user_id, "Priority"
        )

    async def update_priority(
        self,
        priority_id: str,
        user_id: str,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> TopPriority:
        priority = await self.get_priority(priority_id, user_id)
        if title is not None:
            priority.title = clean_title(title)
        if completed is not None:
            priority.completed = completed
        await self.session.flush()
        logger.info("priority_updated", priority_id=priority_id, completed=priority.completed)
        return priority

    async def toggle_priority(self, priority_id: str, user_id: str) -> TopPriority:
        priority = await self.get_priority(priority_id, user_id)
        priority.completed = not priority.completed
        await self.session.flush()
        logger.info("priority_toggled", priority_id=priority_id, completed=priority.completed)
        return priority

    async def delete_priority(self, priority_id: str, user_id: str) -> None:
        priority = await self.get_priority(priority_id, user_id)
        await self.session.delete(priority)
        await self.session.flush()
        logger.info("priority_deleted", priority_id=priority_id)
