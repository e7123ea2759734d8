"""Shared FastAPI dependencies: caller identity and per-user limits."""

from datetime import date

from fastapi import Depends, HTTPException, Request

from daymark_server.config import Settings, get_settings
from daymark_server.services.days import parse_date

# --- Identity ---


async def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    """User id supplied by the upstream identity provider.

    The auth proxy authenticates the session and forwards the subject in a
    header; this service trusts it. Missing identity is rejected before any
    business logic runs.
    """
    user_id = request.headers.get(settings.user_id_header, "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


# --- Settings provider ---


def get_max_top_priorities(settings: Settings = Depends(get_settings)) -> int:
    """Capacity ceiling for a Day's top priorities."""
    return settings.max_top_priorities


def get_max_discussion_items(settings: Settings = Depends(get_settings)) -> int:
    return settings.max_discussion_items


def get_max_life_areas(settings: Settings = Depends(get_settings)) -> int:
    return settings.max_life_areas


# --- Path parsing ---


def day_from_path(date_str: str) -> date:
    """Parse the ``{date_str}`` path segment into a date-only key."""
    return parse_date(date_str)
