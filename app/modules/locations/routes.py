from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.locations.schemas import LocationCreate, LocationUpdate, LocationResponse
from app.modules.locations.service import LocationService

router = APIRouter(prefix="/locations", tags=["locations"])


def get_location_service(supabase: Client = Depends(get_supabase)) -> LocationService:
    return LocationService(supabase)


@router.get("", response_model=List[LocationResponse])
async def list_locations(
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: LocationService = Depends(get_location_service)
):
    return service.list_for_team(ctx.team_id)


@router.post("", response_model=LocationResponse, status_code=201)
async def create_location(
    location_data: LocationCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: LocationService = Depends(get_location_service)
):
    """Create a location, typically from a places autocomplete pick"""
    return service.create({**location_data.model_dump(), "team_id": ctx.team_id})


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: LocationService = Depends(get_location_service)
):
    return service.get_or_404(location_id, ctx.team_id)


@router.patch("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: str,
    location_data: LocationUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: LocationService = Depends(get_location_service)
):
    updated = service.update(location_id, ctx.team_id, location_data.model_dump(exclude_unset=True))
    if not updated:
        raise NotFoundError("Location not found")
    return updated


@router.delete("/{location_id}", status_code=204)
async def delete_location(
    location_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: LocationService = Depends(get_location_service)
):
    if not service.delete(location_id, ctx.team_id):
        raise NotFoundError("Location not found")
    return None
