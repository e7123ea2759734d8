"""Top priorities API."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import (
    day_from_path,
    get_current_user_id,
    get_max_top_priorities,
)
from daymark_server.api.schemas import (
    DeletedResponse,
    PriorityCreate,
    PriorityResponse,
    PriorityUpdate,
)
from daymark_server.db.session import get_db
from daymark_server.services.priorities import PriorityService

router = APIRouter(prefix="/api", tags=["priorities"])


@router.post("/days/{date_str}/priorities", response_model=PriorityResponse)
async def create_priority(
    body: PriorityCreate,
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    max_priorities: int = Depends(get_max_top_priorities),
    db: AsyncSession = Depends(get_db),
) -> PriorityResponse:
    """Add a priority to the Day. Rejected with 400 once the Day is full."""
    priority = await PriorityService(db).create_priority(
        user_id, day_date, body.title, max_priorities
    )
    return PriorityResponse.model_validate(priority)


@router.put("/priorities/{priority_id}", response_model=PriorityResponse)
async def update_priority(
    priority_id: str,
    body: PriorityUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> PriorityResponse:
    priority = await PriorityService(db).update_priority(
        priority_id, user_id, title=body.title, completed=body.completed
    )
    return PriorityResponse.model_validate(priority)


@router.patch("/priorities/{priority_id}/complete", response_model=PriorityResponse)
async def toggle_priority(
    priority_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> PriorityResponse:
    """Flip the completed flag."""
    priority = await PriorityService(db).toggle_priority(priority_id, user_id)
    return PriorityResponse.model_validate(priority)


@router.delete("/priorities/{priority_id}", response_model=DeletedResponse)
async def delete_priority(
    priority_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DeletedResponse:
    await PriorityService(db).delete_priority(priority_id, user_id)
    return DeletedResponse(id=priority_id)
