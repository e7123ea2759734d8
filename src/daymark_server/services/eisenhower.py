"""Eisenhower matrix tasks and promotion into a Day's priorities."""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import EisenhowerTask, TopPriority
from daymark_server.errors import NotFoundError, ValidationError
from daymark_server.logging import log_task_promoted
from daymark_server.services.days import DayService
from daymark_server.services.priorities import PriorityService

logger = structlog.get_logger(__name__)

MIN_QUADRANT = 1
MAX_QUADRANT = 4


def clamp_quadrant(quadrant: int) -> int:
    """Force a quadrant into [1, 4]. Out-of-range input is not an error."""
    return max(MIN_QUADRANT, min(MAX_QUADRANT, quadrant))


class EisenhowerService:
    """Owner-scoped matrix task operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)
        self.priorities = PriorityService(session)

    async def list_tasks(self, user_id: str) -> list[EisenhowerTask]:
        """All tasks for a user, newest first."""
        result = await self.session.execute(
            select(EisenhowerTask)
            .where(EisenhowerTask.user_id == user_id)
            .order_by(EisenhowerTask.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_task(self, task_id: str, user_id: str) -> EisenhowerTask:
        """Find by id and owner. Someone else's task is reported as missing."""
        result = await self.session.execute(
            select(EisenhowerTask).where(
                EisenhowerTask.id == task_id,
                EisenhowerTask.user_id == user_id,
            )
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def create_task(
        self,
        user_id: str,
        title: str,
        quadrant: int,
        note: Optional[str] = None,
    ) -> EisenhowerTask:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title must not be empty")

        task = EisenhowerTask(
            user_id=user_id,
            title=title,
            note=note,
            quadrant=clamp_quadrant(quadrant),
        )
        self.session.add(task)
        await self.session.flush()
        logger.info("eisenhower_task_created", task_id=task.id, quadrant=task.quadrant)
        return task

    async def update_task(
        self,
        task_id: str,
        user_id: str,
        title: Optional[str] = None,
        note: Optional[str] = None,
        quadrant: Optional[int] = None,
    ) -> EisenhowerTask:
        task = await self.get_task(task_id, user_id)
        if title is not None:
            if not title.strip():
                raise ValidationError("Title must not be empty")
            task.title = title.strip()
        if note is not None:
            task.note = note
        if quadrant is not None:
            task.quadrant = clamp_quadrant(quadrant)
        await self.session.flush()
        logger.info("eisenhower_task_updated", task_id=task_id, quadrant=task.quadrant)
        return task

    async def delete_task(self, task_id: str, user_id: str) -> None:
        task = await self.get_task(task_id, user_id)
        await self.session.delete(task)
        await self.session.flush()
        logger.info("eisenhower_task_deleted", task_id=task_id)

    async def promote_to_daily(self, task_id: str, user_id: str, day_date: date) -> TopPriority:
        """Turn a matrix task into a priority on the given day, then delete the task.

        No capacity check happens here, so promotion can push a Day past its
        limit. The stored quadrant is not looked at or re-clamped. Create and
        delete share the request transaction, so a failure between them rolls
        both back.
        """
        task = await self.get_task(task_id, user_id)
        day = await self.days.get_or_create_day(user_id, day_date)

        priority = await self.priorities.add_to_day(day.id, task.title)

        await self.session.delete(task)
        await self.session.flush()

        log_task_promoted(logger, user_id, task_id, priority.id, day.id)
        return priority
