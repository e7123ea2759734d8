"""Day resolver: find or lazily create the per-user, per-date Day row."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, TypeVar
from uuid import uuid4

import structlog
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from daymark_server.db.models import Day, TopPriority
from daymark_server.errors import AccessDeniedError, InvalidDateError, NotFoundError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Dialects whose INSERT supports ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def parse_date(value: Any) -> date:
    """Normalize a date-ish input to a date-only key.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full ISO
    datetimes (the date component is kept as written, no timezone shift).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(str(value))

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidDateError(value) from None


@dataclass
class DayProgress:
    total: int
    completed: int


async def load_owned_child(
    session: AsyncSession,
    model: type[T],
    child_id: str,
    user_id: str,
    label: str,
) -> T:
    """Load a day-scoped row and check its Day belongs to user_id.

    Raises:
        NotFoundError: no row with that id
        AccessDeniedError: the parent Day belongs to another user
    """
    result = await session.execute(
        select(model, Day.user_id)
        .join(Day, model.day_id == Day.id)  # type: ignore[attr-defined]
        .where(model.id == child_id)  # type: ignore[attr-defined]
    )
    row = result.one_or_none()
    if row is None:
        raise NotFoundError(f"{label} not found")

    child, owner_id = row
    if owner_id != user_id:
        logger.warning("cross_user_access", resource=label, id=child_id, user_id=user_id)
        raise AccessDeniedError("Access denied")
    return child


class DayService:
    """Owner-scoped access to Day rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_day(self, user_id: str, day_date: date) -> Optional[Day]:
        """Get the Day for (user_id, date) without creating it."""
        result = await self.session.execute(
            select(Day).where(Day.user_id == user_id, Day.date == day_date)
        )
        return result.scalar_one_or_none()

    async def get_or_create_day(self, user_id: str, day_date: date) -> Day:
        """Return the Day for (user_id, date), creating an empty one if absent.

        Idempotent: the unique (user_id, date) index plus a conflict-ignoring
        insert means concurrent first calls converge on a single row.
        """
        day = await self.find_day(user_id, day_date)
        if day is not None:
            return day

        created = await self._insert_day(user_id, day_date)
        day = await self.find_day(user_id, day_date)
        if day is None:
            # Insert succeeded or conflicted, either way the row must exist now
            raise RuntimeError(f"Day for {user_id}/{day_date} vanished after insert")

        if created:
            logger.info("day_created", user_id=user_id, date=day_date.isoformat(), day_id=day.id)
        return day

    async def _insert_day(self, user_id: str, day_date: date) -> bool:
        """Insert the Day unless (user_id, date) already exists. True if a row was written."""
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect: {dialect}")

        stmt = (
            insert(Day)
            .values(id=str(uuid4()), user_id=user_id, date=day_date)
            .on_conflict_do_nothing(index_elements=["user_id", "date"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def get_day_view(self, user_id: str, day_date: date) -> Day:
        """Get or create the Day with every child collection loaded."""
        day = await self.get_or_create_day(user_id, day_date)
        result = await self.session.execute(
            select(Day)
            .where(Day.id == day.id)
            .options(
                selectinload(Day.priorities),
                selectinload(Day.discussion_items),
                selectinload(Day.time_blocks),
                selectinload(Day.quick_note),
                selectinload(Day.daily_review),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def get_day_progress(self, user_id: str, day_date: date) -> DayProgress:
        """Count total and completed priorities. A missing Day is not created."""
        day = await self.find_day(user_id, day_date)
        if day is None:
            return DayProgress(total=0, completed=0)

        result = await self.session.execute(
            select(
                func.count(TopPriority.id),
                func.count(TopPriority.id).filter(TopPriority.completed.is_(True)),
            ).where(TopPriority.day_id == day.id)
        )
        total, completed = result.one()
        return DayProgress(total=total, completed=completed)

    async def verify_day_ownership(self, day_id: str, user_id: str) -> Day:
        day = await self.session.get(Day, day_id)
        if day is None or day.user_id != user_id:
            raise AccessDeniedError("Access denied")
        return day
