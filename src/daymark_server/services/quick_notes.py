"""Quick note: one free-text note per Day."""

from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import QuickNote
from daymark_server.services.days import DayService

logger = structlog.get_logger(__name__)


class QuickNoteService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)

    async def upsert_quick_note(self, user_id: str, day_date: date, content: str) -> QuickNote:
        """Replace the Day's note content, creating the note on first save."""
        day = await self.days.get_or_create_day(user_id, day_date)

        result = await self.session.execute(
            select(QuickNote).where(QuickNote.day_id == day.id)
        )
        note = result.scalar_one_or_none()
        if note is None:
            note = QuickNote(day_id=day.id, content=content)
            self.session.add(note)
        else:
            note.content = content

        await self.session.flush()
        logger.info("quick_note_saved", day_id=day.id, length=len(content))
        return note
