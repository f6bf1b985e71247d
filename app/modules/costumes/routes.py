from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.costumes.schemas import CostumeCreate, CostumeUpdate, CostumeResponse
from app.modules.costumes.service import CostumeService

router = APIRouter(prefix="/costumes", tags=["costumes"])


def get_costume_service(supabase: Client = Depends(get_supabase)) -> CostumeService:
    return CostumeService(supabase)


@router.get("", response_model=List[CostumeResponse])
async def list_costumes(
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: CostumeService = Depends(get_costume_service)
):
    """List costume progress entries for the active team"""
    return service.list_for_team(ctx.team_id)


@router.post("", response_model=CostumeResponse, status_code=201)
async def create_costume(
    costume_data: CostumeCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: CostumeService = Depends(get_costume_service)
):
    return service.create({**costume_data.model_dump(), "team_id": ctx.team_id})


@router.get("/{costume_id}", response_model=CostumeResponse)
async def get_costume(
    costume_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: CostumeService = Depends(get_costume_service)
):
    return service.get_or_404(costume_id, ctx.team_id)


@router.patch("/{costume_id}", response_model=CostumeResponse)
async def update_costume(
    costume_id: str,
    costume_data: CostumeUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: CostumeService = Depends(get_costume_service)
):
    """Update progress, todos or details of a costume"""
    updated = service.update(costume_id, ctx.team_id, costume_data.model_dump(exclude_unset=True))
    if not updated:
        raise NotFoundError("Costume not found")
    return updated


@router.delete("/{costume_id}", status_code=204)
async def delete_costume(
    costume_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: CostumeService = Depends(get_costume_service)
):
    if not service.delete(costume_id, ctx.team_id):
        raise NotFoundError("Costume not found")
    return None
