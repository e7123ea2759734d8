"""Service layer: owner-scoped business operations over an AsyncSession."""

from daymark_server.services.days import DayProgress, DayService, parse_date
from daymark_server.services.decisions import DecisionService
from daymark_server.services.discussion_items import DiscussionItemService
from daymark_server.services.eisenhower import EisenhowerService, clamp_quadrant
from daymark_server.services.focus_sessions import FocusSessionService, FocusStats
from daymark_server.services.life_areas import LifeAreaService
from daymark_server.services.priorities import PriorityService
from daymark_server.services.quick_notes import QuickNoteService
from daymark_server.services.review import CarryForwardResult, ReviewService
from daymark_server.services.time_blocks import TimeBlockService

__all__ = [
    "CarryForwardResult",
    "DayProgress",
    "DayService",
    "DecisionService",
    "DiscussionItemService",
    "EisenhowerService",
    "FocusSessionService",
    "FocusStats",
    "LifeAreaService",
    "PriorityService",
    "QuickNoteService",
    "ReviewService",
    "TimeBlockService",
    "clamp_quadrant",
    "parse_date",
]
