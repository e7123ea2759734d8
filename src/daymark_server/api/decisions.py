"""Decision log API."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import get_current_user_id
from daymark_server.api.schemas import (
    DecisionCreate,
    DecisionResponse,
    DecisionUpdate,
    DeletedResponse,
)
from daymark_server.db.session import get_db
from daymark_server.services.days import parse_date
from daymark_server.services.decisions import DecisionService

router = APIRouter(prefix="/api/decisions", tags=["decisions"])


@router.get("", response_model=list[DecisionResponse])
async def list_decisions(
    search: Optional[str] = Query(None, description="Case-insensitive text filter"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[DecisionResponse]:
    entries = await DecisionService(db).list_decisions(user_id, search)
    return [DecisionResponse.model_validate(e) for e in entries]


@router.get("/{decision_id}", response_model=DecisionResponse)
async def get_decision(
    decision_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DecisionResponse:
    entry = await DecisionService(db).get_decision(decision_id, user_id)
    return DecisionResponse.model_validate(entry)


@router.post("", response_model=DecisionResponse)
async def create_decision(
    body: DecisionCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DecisionResponse:
    entry = await DecisionService(db).create_decision(
        user_id,
        title=body.title,
        decision_date=parse_date(body.date),
        decision=body.decision,
        context=body.context,
        outcome=body.outcome,
    )
    return DecisionResponse.model_validate(entry)


@router.put("/{decision_id}", response_model=DecisionResponse)
async def update_decision(
    decision_id: str,
    body: DecisionUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DecisionResponse:
    changes = body.model_dump(exclude_none=True)
    if "date" in changes:
        changes["date"] = parse_date(changes["date"])
    entry = await DecisionService(db).update_decision(decision_id, user_id, **changes)
    return DecisionResponse.model_validate(entry)


@router.delete("/{decision_id}", response_model=DeletedResponse)
async def delete_decision(
    decision_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DeletedResponse:
    await DecisionService(db).delete_decision(decision_id, user_id)
    return DeletedResponse(id=decision_id)
