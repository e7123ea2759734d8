"""Liveness and readiness probes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server import __version__
from daymark_server.db.session import get_db

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str


async def _database_ok(db: AsyncSession) -> bool:
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("database_probe_failed", error=str(exc))
        return False
    return True


@router.get("/", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    """Always 200. A broken database shows up as ``status: degraded``."""
    ok = await _database_ok(db)
    return HealthResponse(
        status="healthy" if ok else "degraded",
        version=__version__,
        database="healthy" if ok else "unhealthy",
    )


@router.get("/ready")
async def ready(db: AsyncSession = Depends(get_db)) -> dict:
    """503 until the database answers, for load balancer routing."""
    if not await _database_ok(db):
        raise HTTPException(status_code=503, detail="Database not ready")
    return {"ready": True}
