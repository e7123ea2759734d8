"""Discussion items: things to raise with someone today, capped per day."""

from datetime import date

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.db.models import DiscussionItem
from daymark_server.errors import CapacityExceededError, ValidationError
from daymark_server.logging import log_capacity_rejected
from daymark_server.services.days import DayService, load_owned_child

logger = structlog.get_logger(__name__)


def _clean_content(content: str) -> str:
    cleaned = (content or "").strip()
    if not cleaned:
        raise ValidationError("Content must not be empty")
    return cleaned


class DiscussionItemService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.days = DayService(session)

    async def create_item(
        self,
        user_id: str,
        day_date: date,
        content: str,
        max_items: int,
    ) -> DiscussionItem:
        """Append an item to the Day, refusing once max_items is reached."""
        content = _clean_content(content)
        day = await self.days.get_or_create_day(user_id, day_date)

        result = await self.session.execute(
            select(func.count(DiscussionItem.id)).where(DiscussionItem.day_id == day.id)
        )
        count = result.scalar_one()
        if count >= max_items:
            log_capacity_rejected(logger, user_id, "discussion_item", max_items)
            raise CapacityExceededError(
                f"Maximum {max_items} discussion items per day", limit=max_items
            )

        item = DiscussionItem(day_id=day.id, content=content, order=count + 1)
        self.session.add(item)
        await self.session.flush()
        logger.info("discussion_item_created", day_id=day.id, item_id=item.id)
        return item

    async def update_item(self, item_id: str, user_id: str, content: str) -> DiscussionItem:
        item = await load_owned_child(
            self.session, DiscussionItem, item_id, user_id, "Discussion item"
        )
        item.content = _clean_content(content)
        await self.session.flush()
        return item

    async def delete_item(self, item_id: str, user_id: str) -> None:
        item = await load_owned_child(
            self.session, DiscussionItem, item_id, user_id, "Discussion item"
        )
        await self.session.delete(item)
        await self.session.flush()
        logger.info("discussion_item_deleted", item_id=item_id)
