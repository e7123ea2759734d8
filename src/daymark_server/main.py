"""FastAPI application for Daymark server.

``create_app`` wires routers, middleware and the domain error handler;
``run`` is the ``daymark-server`` console script.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from daymark_server import __version__
from daymark_server.api import (
    day_sections_router,
    days_router,
    decisions_router,
    eisenhower_router,
    focus_sessions_router,
    health_router,
    life_areas_router,
    priorities_router,
    review_router,
)
from daymark_server.config import get_settings
from daymark_server.db.session import engine
from daymark_server.errors import DaymarkError
from daymark_server.logging import RequestLoggingMiddleware, log_request_rejected, setup_logging

logger = structlog.get_logger(__name__)

ROUTERS = (
    health_router,
    days_router,
    priorities_router,
    day_sections_router,
    review_router,
    eisenhower_router,
    focus_sessions_router,
    decisions_router,
    life_areas_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info(
        "daymark_starting",
        version=__version__,
        database=make_url(settings.database_url).render_as_string(hide_password=True),
        limits={
            "top_priorities": settings.max_top_priorities,
            "discussion_items": settings.max_discussion_items,
            "life_areas": settings.max_life_areas,
        },
    )
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("daymark_stopped")


async def handle_daymark_error(request: Request, exc: DaymarkError) -> JSONResponse:
    """Answer a service-layer error with its status and ``{"detail": ...}``."""
    log_request_rejected(logger, request.url.path, exc.status_code, exc.error_type, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Daymark Server",
        description="Day planning: top priorities, daily review, Eisenhower matrix, decision log",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: request logging wraps CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware, user_id_header=settings.user_id_header)

    app.add_exception_handler(DaymarkError, handle_daymark_error)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


def run() -> None:
    """Start uvicorn with logging already configured."""
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    uvicorn.run(
        "daymark_server.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
