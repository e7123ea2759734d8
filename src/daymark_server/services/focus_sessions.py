"""Focus sessions: Pomodoro timers attached to a time block."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import Day, FocusSession, TimeBlock
from daymark_server.errors import AccessDeniedError, NotFoundError, ValidationError
from daymark_server.services.days import load_owned_child
from daymark_server.services.time_blocks import as_utc

logger = structlog.get_logger(__name__)

DEFAULT_SESSION_TYPE = "focus"


def parse_moment(value: str) -> datetime:
    """Parse an ISO date or datetime into an aware UTC datetime.

    A bare date means midnight UTC. Naive datetimes are taken as UTC.
    """
    try:
        moment = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid datetime: {value!r}") from None
    return as_utc(moment)


@dataclass
class FocusStats:
    total_sessions: int
    completed_sessions: int
    interrupted_sessions: int
    total_focus_minutes: int
    average_session_minutes: int


class FocusSessionService:
    """Start/end focus sessions and report on them, scoped to the Day owner."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _owned_sessions(self, user_id: str):
        return (
            select(FocusSession)
            .join(TimeBlock, FocusSession.time_block_id == TimeBlock.id)
            .join(Day, TimeBlock.day_id == Day.id)
            .where(Day.user_id == user_id)
        )

    async def _open_session_for_block(self, time_block_id: str) -> Optional[FocusSession]:
        result = await self.session.execute(
            select(FocusSession)
            .where(
                FocusSession.time_block_id == time_block_id,
                FocusSession.ended_at.is_(None),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def start_session(
        self,
        user_id: str,
        time_block_id: str,
        session_type: Optional[str] = None,
        target_duration: Optional[int] = None,
    ) -> FocusSession:
        """Open a session on the block. Only one open session per block."""
        block = await load_owned_child(self.session, TimeBlock, time_block_id, user_id, "Time block")

        if await self._open_session_for_block(block.id) is not None:
            raise ValidationError("There is already an active session for this time block")

        focus = FocusSession(
            time_block_id=block.id,
            started_at=datetime.now(timezone.utc),
            session_type=session_type or DEFAULT_SESSION_TYPE,
            target_duration=target_duration,
        )
        self.session.add(focus)
        await self.session.flush()
        logger.info(
            "focus_session_started",
            user_id=user_id,
            session_id=focus.id,
            time_block_id=block.id,
            session_type=focus.session_type,
        )
        return focus

    async def end_session(
        self,
        user_id: str,
        session_id: str,
        completed: Optional[bool] = None,
        interrupted: Optional[bool] = None,
    ) -> FocusSession:
        """Close an open session and record its length in seconds.

        ``completed`` defaults to True and ``interrupted`` to False.
        """
        result = await self.session.execute(
            select(FocusSession, Day.user_id)
            .join(TimeBlock, FocusSession.time_block_id == TimeBlock.id)
            .join(Day, TimeBlock.day_id == Day.id)
            .where(FocusSession.id == session_id)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError("Session not found")
        focus, owner_id = row
        if owner_id != user_id:
            raise AccessDeniedError("Access denied")
        if focus.ended_at is not None:
            raise ValidationError("Session has already ended")

        ended_at = datetime.now(timezone.utc)
        focus.ended_at = ended_at
        focus.duration = round((ended_at - as_utc(focus.started_at)).total_seconds())
        focus.completed = True if completed is None else completed
        focus.interrupted = False if interrupted is None else interrupted
        await self.session.flush()

        logger.info(
            "focus_session_ended",
            user_id=user_id,
            session_id=focus.id,
            duration=focus.duration,
            completed=focus.completed,
            interrupted=focus.interrupted,
        )
        return focus

    async def get_active_session(self, user_id: str) -> Optional[FocusSession]:
        """The user's most recently started open session, if any."""
        result = await self.session.execute(
            self._owned_sessions(user_id)
            .where(FocusSession.ended_at.is_(None))
            .order_by(FocusSession.started_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_for_time_block(self, user_id: str, time_block_id: str) -> list[FocusSession]:
        await load_owned_child(self.session, TimeBlock, time_block_id, user_id, "Time block")
        result = await self.session.execute(
            select(FocusSession)
            .where(FocusSession.time_block_id == time_block_id)
            .order_by(FocusSession.started_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_date(self, user_id: str, on: Optional[date] = None) -> list[FocusSession]:
        """Sessions started during one UTC calendar day, newest first. Defaults to today."""
        on = on or datetime.now(timezone.utc).date()
        start = datetime.combine(on, time.min, tzinfo=timezone.utc)
        result = await self.session.execute(
            self._owned_sessions(user_id)
            .where(
                FocusSession.started_at >= start,
                FocusSession.started_at < start + timedelta(days=1),
            )
            .order_by(FocusSession.started_at.desc())
        )
        return list(result.scalars().all())

    async def get_stats(self, user_id: str, start: datetime, end: datetime) -> FocusStats:
        """Totals for sessions started within [start, end].

        Open sessions count toward totals with zero focus time.
        """
        if as_utc(end) < as_utc(start):
            raise ValidationError("end must not be before start")

        result = await self.session.execute(
            select(
                func.count(FocusSession.id),
                func.count(FocusSession.id).filter(FocusSession.completed.is_(True)),
                func.count(FocusSession.id).filter(FocusSession.interrupted.is_(True)),
                func.coalesce(func.sum(FocusSession.duration), 0),
            )
            .join(TimeBlock, FocusSession.time_block_id == TimeBlock.id)
            .join(Day, TimeBlock.day_id == Day.id)
            .where(
                Day.user_id == user_id,
                FocusSession.started_at >= as_utc(start),
                FocusSession.started_at <= as_utc(end),
            )
        )
        total, completed, interrupted, seconds = result.one()

        minutes = round(seconds / 60)
        return FocusStats(
            total_sessions=total,
            completed_sessions=completed,
            interrupted_sessions=interrupted,
            total_focus_minutes=minutes,
            average_session_minutes=round(minutes / total) if total else 0,
        )
