"""Day section APIs: discussion items, time blocks and the quick note."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import (
    day_from_path,
    get_current_user_id,
    get_max_discussion_items,
)
from daymark_server.api.schemas import (
    DeletedResponse,
    DiscussionItemBody,
    DiscussionItemResponse,
    QuickNoteBody,
    QuickNoteResponse,
    TimeBlockCreate,
    TimeBlockResponse,
    TimeBlockUpdate,
)
from daymark_server.db.session import get_db
from daymark_server.services.discussion_items import DiscussionItemService
from daymark_server.services.quick_notes import QuickNoteService
from daymark_server.services.time_blocks import TimeBlockService

router = APIRouter(prefix="/api", tags=["day-sections"])


# --- Discussion items ---


@router.post("/days/{date_str}/discussion-items", response_model=DiscussionItemResponse)
async def create_discussion_item(
    body: DiscussionItemBody,
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    max_items: int = Depends(get_max_discussion_items),
    db: AsyncSession = Depends(get_db),
) -> DiscussionItemResponse:
    item = await DiscussionItemService(db).create_item(user_id, day_date, body.content, max_items)
    return DiscussionItemResponse.model_validate(item)


@router.put("/discussion-items/{item_id}", response_model=DiscussionItemResponse)
async def update_discussion_item(
    item_id: str,
    body: DiscussionItemBody,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DiscussionItemResponse:
    item = await DiscussionItemService(db).update_item(item_id, user_id, body.content)
    return DiscussionItemResponse.model_validate(item)


@router.delete("/discussion-items/{item_id}", response_model=DeletedResponse)
async def delete_discussion_item(
    item_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DeletedResponse:
    await DiscussionItemService(db).delete_item(item_id, user_id)
    return DeletedResponse(id=item_id)


# --- Time blocks ---


@router.get("/days/{date_str}/time-blocks", response_model=list[TimeBlockResponse])
async def list_time_blocks(
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> list[TimeBlockResponse]:
    blocks = await TimeBlockService(db).list_for_day(user_id, day_date)
    return [TimeBlockResponse.model_validate(b) for b in blocks]


@router.post("/days/{date_str}/time-blocks", response_model=TimeBlockResponse)
async def create_time_block(
    body: TimeBlockCreate,
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> TimeBlockResponse:
    block = await TimeBlockService(db).create_time_block(
        user_id,
        day_date,
        title=body.title,
        start_time=body.start_time,
        end_time=body.end_time,
        block_type=body.type,
    )
    return TimeBlockResponse.model_validate(block)


@router.put("/time-blocks/{block_id}", response_model=TimeBlockResponse)
async def update_time_block(
    block_id: str,
    body: TimeBlockUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> TimeBlockResponse:
    block = await TimeBlockService(db).update_time_block(
        block_id,
        user_id,
        title=body.title,
        start_time=body.start_time,
        end_time=body.end_time,
        block_type=body.type,
    )
    return TimeBlockResponse.model_validate(block)


@router.delete("/time-blocks/{block_id}", response_model=DeletedResponse)
async def delete_time_block(
    block_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DeletedResponse:
    await TimeBlockService(db).delete_time_block(block_id, user_id)
    return DeletedResponse(id=block_id)


# --- Quick note ---


@router.put("/days/{date_str}/quick-note", response_model=QuickNoteResponse)
async def upsert_quick_note(
    body: QuickNoteBody,
    day_date: date = Depends(day_from_path),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> QuickNoteResponse:
    """Save the Day's note (autosaved by the client on every pause in typing)."""
    note = await QuickNoteService(db).upsert_quick_note(user_id, day_date, body.content)
    return QuickNoteResponse.model_validate(note)
