from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.personnel.schemas import PersonnelCreate, PersonnelUpdate, PersonnelResponse
from app.modules.personnel.service import PersonnelService

router = APIRouter(prefix="/personnel", tags=["personnel"])


def get_personnel_service(supabase: Client = Depends(get_supabase)) -> PersonnelService:
    return PersonnelService(supabase)


@router.get("", response_model=List[PersonnelResponse])
async def list_personnel(
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: PersonnelService = Depends(get_personnel_service)
):
    """List the active team's personnel, newest first"""
    return service.list_for_team(ctx.team_id)


@router.post("", response_model=PersonnelResponse, status_code=201)
async def create_personnel(
    personnel_data: PersonnelCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PersonnelService = Depends(get_personnel_service)
):
    return service.create({**personnel_data.model_dump(mode="json"), "team_id": ctx.team_id})


@router.get("/{personnel_id}", response_model=PersonnelResponse)
async def get_personnel(
    personnel_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: PersonnelService = Depends(get_personnel_service)
):
    return service.get_or_404(personnel_id, ctx.team_id)


@router.patch("/{personnel_id}", response_model=PersonnelResponse)
async def update_personnel(
    personnel_id: str,
    personnel_data: PersonnelUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PersonnelService = Depends(get_personnel_service)
):
    updated = service.update(personnel_id, ctx.team_id, personnel_data.model_dump(mode="json", exclude_unset=True))
    if not updated:
        raise NotFoundError("Personnel not found")
    return updated


@router.delete("/{personnel_id}", status_code=204)
async def delete_personnel(
    personnel_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PersonnelService = Depends(get_personnel_service)
):
    if not service.delete(personnel_id, ctx.team_id):
        raise NotFoundError("Personnel not found")
    return None
