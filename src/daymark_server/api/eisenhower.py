"""Eisenhower matrix API - triage tasks and promote them to today's priorities."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import get_current_user_id
from daymark_server.api.schemas import (
    DeletedResponse,
    EisenhowerTaskCreate,
    EisenhowerTaskResponse,
    EisenhowerTaskUpdate,
    PriorityResponse,
    PromoteRequest,
)
from daymark_server.db.session import get_db
from daymark_server.services.days import parse_date
from daymark_server.services.eisenhower import EisenhowerService

router = APIRouter(prefix="/api/eisenhower", tags=["eisenhower"])


@router.get("", response_model=list[EisenhowerTaskResponse])
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[EisenhowerTaskResponse]:
    tasks = await EisenhowerService(db).list_tasks(user_id)
    return [EisenhowerTaskResponse.model_validate(t) for t in tasks]


@router.post("", response_model=EisenhowerTaskResponse)
async def create_task(
    body: EisenhowerTaskCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> EisenhowerTaskResponse:
    """Create a task. Quadrants outside 1-4 are clamped, not rejected."""
    task = await EisenhowerService(db).create_task(
        user_id, body.title, body.quadrant, note=body.note
    )
    return EisenhowerTaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=EisenhowerTaskResponse)
async def update_task(
    task_id: str,
    body: EisenhowerTaskUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> EisenhowerTaskResponse:
    task = await EisenhowerService(db).update_task(
        task_id, user_id, title=body.title, note=body.note, quadrant=body.quadrant
    )
    return EisenhowerTaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=DeletedResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DeletedResponse:
    await EisenhowerService(db).delete_task(task_id, user_id)
    return DeletedResponse(id=task_id)


@router.post("/{task_id}/promote", response_model=PriorityResponse)
async def promote_task(
    task_id: str,
    body: PromoteRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> PriorityResponse:
    """Move a task onto a day's priorities. 404 if the task is missing or not yours."""
    priority = await EisenhowerService(db).promote_to_daily(
        task_id, user_id, parse_date(body.date)
    )
    return PriorityResponse.model_validate(priority)
