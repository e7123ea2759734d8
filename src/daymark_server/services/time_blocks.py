"""Time blocks scheduled on a Day."""

from datetime import date, datetime, timezone
from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import FocusSession, TimeBlock
from daymark_server.errors import ValidationError
from daymark_server.services.days import DayService, load_owned_child

logger = structlog.get_logger(__name__)

DEFAULT_BLOCK_TYPE = "Deep Work"


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so stored and incoming values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title must not be empty")
    return cleaned


def _check_span(start_time: datetime, end_time: datetime) -> None:
    if as_utc(end_time) <= as_utc(start_time):
        raise ValidationError("end_time must be after start_time")


class TimeBlockService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)

    async def list_for_day(self, user_id: str, day_date: date) -> list[TimeBlock]:
        """Blocks on the Day ordered by start time. A missing Day yields []."""
        day = await self.days.find_day(user_id, day_date)
        if day is None:
            return []
        result = await self.session.execute(
            select(TimeBlock)
            .where(TimeBlock.day_id == day.id)
            .order_by(TimeBlock.start_time)
        )
        return list(result.scalars().all())

    async def create_time_block(
        self,
        user_id: str,
        day_date: date,
        title: str,
        start_time: datetime,
        end_time: datetime,
        block_type: Optional[str] = None,
    ) -> TimeBlock:
        title = _clean_title(title)
        _check_span(start_time, end_time)

        day = await self.days.get_or_create_day(user_id, day_date)
        block = TimeBlock(
            day_id=day.id,
            title=title,
            start_time=start_time,
            end_time=end_time,
            type=block_type or DEFAULT_BLOCK_TYPE,
        )
        self.session.add(block)
        await self.session.flush()
        logger.info("time_block_created", day_id=day.id, block_id=block.id, type=block.type)
        return block

    async def update_time_block(
        self,
        block_id: str,
        user_id: str,
        title: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        block_type: Optional[str] = None,
    ) -> TimeBlock:
        block = await load_owned_child(self.session, TimeBlock, block_id, user_id, "Time block")

        if title is not None:
            block.title = _clean_title(title)
        if block_type:
            block.type = block_type
        new_start = start_time or block.start_time
        new_end = end_time or block.end_time
        if start_time or end_time:
            _check_span(new_start, new_end)
            block.start_time = new_start
            block.end_time = new_end

        await self.session.flush()
        return block

    async def delete_time_block(self, block_id: str, user_id: str) -> None:
        block = await load_owned_child(self.session, TimeBlock, block_id, user_id, "Time block")
        await self.session.execute(
            delete(FocusSession).where(FocusSession.time_block_id == block.id)
        )
        await self.session.delete(block)
        await self.session.flush()
        logger.info("time_block_deleted", block_id=block_id)
