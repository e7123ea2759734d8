"""End-of-day review and carry-forward of unfinished priorities."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import DailyReview, TopPriority
from daymark_server.errors import ValidationError
from daymark_server.logging import log_carry_forward
from daymark_server.services.days import DayService
from daymark_server.services.priorities import PriorityService

logger = structlog.get_logger(__name__)


@dataclass
class CarryForwardResult:
    carried: int = 0
    skipped: int = 0
    priorities: list[TopPriority] = field(default_factory=list)


class ReviewService:
    """Daily review upsert and the carry-forward workflow."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)
        self.priorities = PriorityService(session)

    async def upsert_review(
        self,
        user_id: str,
        day_date: date,
        went_well: Optional[str] = None,
        didnt_go_well: Optional[str] = None,
    ) -> DailyReview:
        """Create the Day's review or change only the fields supplied."""
        day = await self.days.get_or_create_day(user_id, day_date)

        result = await self.session.execute(
            select(DailyReview).where(DailyReview.day_id == day.id)
        )
        review = result.scalar_one_or_none()
        if review is None:
            review = DailyReview(
                day_id=day.id,
                went_well=went_well,
                didnt_go_well=didnt_go_well,
            )
            self.session.add(review)
        else:
            if went_well is not None:
                review.went_well = went_well
            if didnt_go_well is not None:
                review.didnt_go_well = didnt_go_well

        await self.session.flush()
        logger.info("daily_review_saved", user_id=user_id, day_id=day.id)
        return review

    async def carry_forward(
        self,
        from_date: date,
        to_date: date,
        user_id: str,
        max_per_day: int,
    ) -> CarryForwardResult:
        """Copy incomplete priorities from one day onto another.

        Items are taken in source ``order`` and copied while the target Day
        has room under ``max_per_day``; the rest are counted as skipped.
        Source priorities are left untouched, so carried items stay visible
        as incomplete on the original day.

        Raises:
            ValidationError: from_date and to_date are the same day
        """
        if from_date == to_date:
            raise ValidationError("to_date must differ from from_date")

        result = CarryForwardResult()

        source_day = await self.days.find_day(user_id, from_date)
        incomplete: list[TopPriority] = []
        if source_day is not None:
            incomplete = await self.priorities.list_for_day(source_day.id, incomplete_only=True)

        target_day = await self.days.get_or_create_day(user_id, to_date)
        existing = await self.priorities.count_for_day(target_day.id)
        remaining = max(0, max_per_day - existing)

        for source in incomplete:
            if remaining > 0:
                copy = await self.priorities.add_to_day(target_day.id, source.title)
                result.priorities.append(copy)
                result.carried += 1
                remaining -= 1
            else:
                result.skipped += 1

        log_carry_forward(
            logger,
            user_id,
            from_date.isoformat(),
            to_date.isoformat(),
            result.carried,
            result.skipped,
        )
        return result
