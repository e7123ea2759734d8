"""Focus session (Pomodoro) endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import get_current_user_id
from daymark_server.api.schemas import (
    FocusSessionEnd,
    FocusSessionResponse,
    FocusSessionStart,
    FocusStatsResponse,
)
from daymark_server.db.session import get_db
from daymark_server.services.focus_sessions import FocusSessionService, parse_moment

router = APIRouter(prefix="/api/focus-sessions", tags=["focus-sessions"])


@router.get("/active", response_model=Optional[FocusSessionResponse])
async def get_active_session(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Optional[FocusSessionResponse]:
    """The running session, or null."""
    focus = await FocusSessionService(db).get_active_session(user_id)
    return FocusSessionResponse.model_validate(focus) if focus else None


@router.get("/today", response_model=list[FocusSessionResponse])
async def list_today_sessions(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[FocusSessionResponse]:
    sessions = await FocusSessionService(db).list_for_date(user_id)
    return [FocusSessionResponse.model_validate(s) for s in sessions]


@router.get("/stats", response_model=FocusStatsResponse)
async def get_session_stats(
    start: str = Query(..., description="ISO date or datetime, inclusive"),
    end: str = Query(..., description="ISO date or datetime, inclusive"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FocusStatsResponse:
    stats = await FocusSessionService(db).get_stats(
        user_id, parse_moment(start), parse_moment(end)
    )
    return FocusStatsResponse.model_validate(stats)


@router.get("/time-block/{time_block_id}", response_model=list[FocusSessionResponse])
async def list_block_sessions(
    time_block_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[FocusSessionResponse]:
    sessions = await FocusSessionService(db).list_for_time_block(user_id, time_block_id)
    return [FocusSessionResponse.model_validate(s) for s in sessions]


@router.post("/start", response_model=FocusSessionResponse)
async def start_session(
    body: FocusSessionStart,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FocusSessionResponse:
    """Start a timer on a time block. 400 if the block already has one running."""
    focus = await FocusSessionService(db).start_session(
        user_id,
        body.time_block_id,
        session_type=body.session_type,
        target_duration=body.target_duration,
    )
    return FocusSessionResponse.model_validate(focus)


@router.post("/{session_id}/end", response_model=FocusSessionResponse)
async def end_session(
    session_id: str,
    body: Optional[FocusSessionEnd] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FocusSessionResponse:
    body = body or FocusSessionEnd()
    focus = await FocusSessionService(db).end_session(
        user_id, session_id, completed=body.completed, interrupted=body.interrupted
    )
    return FocusSessionResponse.model_validate(focus)
