"""End-of-day review API, including carry-forward of unfinished priorities."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import (
    day_from_path,
    get_current_user_id,
    get_max_top_priorities,
)
from daymark_server.api.schemas import (
    CarryForwardRequest,
    CarryForwardResponse,
    DailyReviewResponse,
    PriorityResponse,
    ReviewBody,
)
from daymark_server.db.session import get_db
from daymark_server.services.days import parse_date
from daymark_server.services.review import ReviewService

router = APIRouter(prefix="/api/days", tags=["review"])


@router.put("/{date_str}/review", response_model=DailyReviewResponse)
async def upsert_review(
    body: ReviewBody,
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DailyReviewResponse:
    review = await ReviewService(db).upsert_review(
        user_id, day_date, went_well=body.went_well, didnt_go_well=body.didnt_go_well
    )
    return DailyReviewResponse.model_validate(review)


@router.post("/{date_str}/review/carry-forward", response_model=CarryForwardResponse)
async def carry_forward(
    body: CarryForwardRequest,
    from_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    max_per_day: int = Depends(get_max_top_priorities),
    db: AsyncSession = Depends(get_db),
) -> CarryForwardResponse:
    """Copy the day's incomplete priorities onto ``to_date`` up to the limit.

    Returns how many were carried and how many did not fit.
    """
    result = await ReviewService(db).carry_forward(
        from_date, parse_date(body.to_date), user_id, max_per_day
    )
    return CarryForwardResponse(
        carried=result.carried,
        skipped=result.skipped,
        priorities=[PriorityResponse.model_validate(p) for p in result.priorities],
    )
