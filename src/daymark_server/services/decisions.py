"""Decision log entries."""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import DecisionEntry
from daymark_server.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

# Fields a caller may change through update_decision
_UPDATABLE = ("title", "date", "context", "decision", "outcome")


class DecisionService:
    """Owner-scoped decision log CRUD with text search."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_decisions(self, user_id: str, search: Optional[str] = None) -> list[DecisionEntry]:
        """Decisions newest date first, optionally filtered by a
        case-insensitive substring over title, context and decision."""
        query = select(DecisionEntry).where(DecisionEntry.user_id == user_id)

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    DecisionEntry.title.ilike(pattern),
                    DecisionEntry.context.ilike(pattern),
                    DecisionEntry.decision.ilike(pattern),
                )
            )

        query = query.order_by(DecisionEntry.date.desc(), DecisionEntry.created_at.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_decision(self, decision_id: str, user_id: str) -> DecisionEntry:
        result = await self.session.execute(
            select(DecisionEntry).where(
                DecisionEntry.id == decision_id,
                DecisionEntry.user_id == user_id,
            )
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError("Decision not found")
        return entry

    async def create_decision(
        self,
        user_id: str,
        title: str,
        decision_date: date,
        decision: str,
        context: Optional[str] = None,
        outcome: Optional[str] = None,
    ) -> DecisionEntry:
        if not (title or "").strip():
            raise ValidationError("Title must not be empty")
        if not (decision or "").strip():
            raise ValidationError("Decision must not be empty")

        entry = DecisionEntry(
            user_id=user_id,
            title=title.strip(),
            date=decision_date,
            context=context,
            decision=decision,
            outcome=outcome,
        )
        self.session.add(entry)
        await self.session.flush()
        logger.info("decision_created", decision_id=entry.id, date=decision_date.isoformat())
        return entry

    async def update_decision(self, decision_id: str, user_id: str, **changes) -> DecisionEntry:
        """Apply the given fields; keys set to None are left alone."""
        entry = await self.get_decision(decision_id, user_id)
        for field_name in _UPDATABLE:
            value = changes.get(field_name)
            if value is not None:
                setattr(entry, field_name, value)
        await self.session.flush()
        logger.info("decision_updated", decision_id=decision_id)
        return entry

    async def delete_decision(self, decision_id: str, user_id: str) -> None:
        entry = await self.get_decision(decision_id, user_id)
        await self.session.delete(entry)
        await self.session.flush()
        logger.info("decision_deleted", decision_id=decision_id)
