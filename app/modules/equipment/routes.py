from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.equipment.schemas import EquipmentCreate, EquipmentUpdate, EquipmentResponse
from app.modules.equipment.service import EquipmentService

router = APIRouter(prefix="/equipment", tags=["equipment"])


def get_equipment_service(supabase: Client = Depends(get_supabase)) -> EquipmentService:
    return EquipmentService(supabase)


@router.get("", response_model=List[EquipmentResponse])
async def list_equipment(
    available_only: bool = False,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: EquipmentService = Depends(get_equipment_service)
):
    """List team equipment. Use available_only=true to hide items marked unavailable."""
    if available_only:
        return service.list_available(ctx.team_id)
    return service.list_for_team(ctx.team_id)


@router.post("", response_model=EquipmentResponse, status_code=201)
async def create_equipment(
    equipment_data: EquipmentCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.create({**equipment_data.model_dump(), "team_id": ctx.team_id})


@router.get("/{equipment_id}", response_model=EquipmentResponse)
async def get_equipment(
    equipment_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.get_or_404(equipment_id, ctx.team_id)


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(
    equipment_id: str,
    equipment_data: EquipmentUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: EquipmentService = Depends(get_equipment_service)
):
    updated = service.update(equipment_id, ctx.team_id, equipment_data.model_dump(exclude_unset=True))
    if not updated:
        raise NotFoundError("Equipment not found")
    return updated


@router.delete("/{equipment_id}", status_code=204)
async def delete_equipment(
    equipment_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: EquipmentService = Depends(get_equipment_service)
):
    if not service.delete(equipment_id, ctx.team_id):
        raise NotFoundError("Equipment not found")
    return None
