"""API endpoints for Daymark server."""

from daymark_server.api.day_sections import router as day_sections_router
from daymark_server.api.days import router as days_router
from daymark_server.api.decisions import router as decisions_router
from daymark_server.api.eisenhower import router as eisenhower_router
from daymark_server.api.focus_sessions import router as focus_sessions_router
from daymark_server.api.health import router as health_router
from daymark_server.api.life_areas import router as life_areas_router
from daymark_server.api.priorities import router as priorities_router
from daymark_server.api.review import router as review_router

__all__ = [
    "day_sections_router",
    "days_router",
    "decisions_router",
    "eisenhower_router",
    "focus_sessions_router",
    "health_router",
    "life_areas_router",
    "priorities_router",
    "review_router",
]
