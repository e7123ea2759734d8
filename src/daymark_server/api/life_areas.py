"""Life areas API."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daymark_server.api.deps import get_current_user_id, get_max_life_areas
from daymark_server.api.schemas import (
    LifeAreaCreate,
    LifeAreaReorder,
    LifeAreaResponse,
    LifeAreaUpdate,
)
from daymark_server.db.session import get_db
from daymark_server.services.life_areas import LifeAreaService

router = APIRouter(prefix="/api/life-areas", tags=["life-areas"])


# --- Dependencies ---


def get_life_area_service(
    db: AsyncSession = Depends(get_db),
    max_active: int = Depends(get_max_life_areas),
) -> LifeAreaService:
    return LifeAreaService(db, max_active=max_active)


# --- Endpoints ---


@router.get("", response_model=list[LifeAreaResponse])
async def list_life_areas(
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> list[LifeAreaResponse]:
    """Active life areas by order. A "Personal" area is created for new users."""
    areas = await service.list_life_areas(user_id)
    return [LifeAreaResponse.model_validate(a) for a in areas]


@router.get("/default", response_model=LifeAreaResponse)
async def get_default_life_area(
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    area = await service.get_default_life_area(user_id)
    return LifeAreaResponse.model_validate(area)


@router.post("/reorder", response_model=list[LifeAreaResponse])
async def reorder_life_areas(
    body: LifeAreaReorder,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> list[LifeAreaResponse]:
    areas = await service.reorder_life_areas(user_id, body.ordered_ids)
    return [LifeAreaResponse.model_validate(a) for a in areas]


@router.get("/{area_id}", response_model=LifeAreaResponse)
async def get_life_area(
    area_id: str,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    area = await service.get_life_area(area_id, user_id)
    return LifeAreaResponse.model_validate(area)


@router.post("", response_model=LifeAreaResponse)
async def create_life_area(
    body: LifeAreaCreate,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    area = await service.create_life_area(user_id, body.name, color=body.color)
    return LifeAreaResponse.model_validate(area)


@router.patch("/{area_id}", response_model=LifeAreaResponse)
async def update_life_area(
    area_id: str,
    body: LifeAreaUpdate,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    area = await service.update_life_area(
        area_id, user_id, name=body.name, color=body.color, order=body.order
    )
    return LifeAreaResponse.model_validate(area)


@router.delete("/{area_id}", response_model=LifeAreaResponse)
async def archive_life_area(
    area_id: str,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    """Archive (soft delete). The last active area cannot be archived."""
    area = await service.archive_life_area(area_id, user_id)
    return LifeAreaResponse.model_validate(area)


@router.post("/{area_id}/restore", response_model=LifeAreaResponse)
async def restore_life_area(
    area_id: str,
    user_id: str = Depends(get_current_user_id),
    service: LifeAreaService = Depends(get_life_area_service),
) -> LifeAreaResponse:
    area = await service.restore_life_area(area_id, user_id)
    return LifeAreaResponse.model_validate(area)
