"""Database module exports."""

from daymark_server.db.base import Base
from daymark_server.db.models import (
    DailyReview,
    Day,
    DecisionEntry,
    DiscussionItem,
    EisenhowerTask,
    FocusSession,
    LifeArea,
    QuickNote,
    TimeBlock,
    TopPriority,
)
from daymark_server.db.session import AsyncSessionLocal, get_db

__all__ = [
    "AsyncSessionLocal",
    "Base",
    "DailyReview",
    "Day",
    "DecisionEntry",
    "DiscussionItem",
    "EisenhowerTask",
    "FocusSession",
    "LifeArea",
    "QuickNote",
    "TimeBlock",
    "TopPriority",
    "get_db",
]
