"""Day API - the dashboard's per-date aggregate."""

from datetime import date

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import day_from_path, get_current_user_id
from daymark_server.api.schemas import DayProgressResponse, DayResponse
from daymark_server.db.session import get_db
from daymark_server.services.days import DayService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/days", tags=["days"])


@router.get("/{date_str}", response_model=DayResponse)
async def get_day(
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DayResponse:
    """Get the Day with all of its sections, creating it on first access."""
    day = await DayService(db).get_day_view(user_id, day_date)
    return DayResponse.model_validate(day)


@router.get("/{date_str}/progress", response_model=DayProgressResponse)
async def get_day_progress(
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DayProgressResponse:
    """Completed vs. total priorities. Does not create the Day."""
    progress = await DayService(db).get_day_progress(user_id, day_date)
    return DayProgressResponse(total=progress.total, completed=progress.completed)
