import logging
from fastapi import APIRouter, Depends, Query
from supabase import Client
from typing import List, Optional

from app.core.context import AppContext, get_context
from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import IntegrationError
from app.database.supabase_client import get_supabase
from app.modules.costumes.schemas import CostumeResponse
from app.modules.equipment.schemas import EquipmentResponse
from app.modules.props.schemas import PropResponse
from app.modules.shoots.reconciler import AssociationReconciler
from app.modules.shoots.schemas import (
    ShootCreate, ShootUpdate, ShootResponse, ShootStatus,
    ShootResourcesUpdate, ResourcesUpdateResult,
    ReferenceCreate, ReferenceResponse, ParticipantCreate, ParticipantResponse,
    ShootEquipmentCreate, ShootEquipmentResponse, ShootPropCreate, ShootPropResponse,
    ShootCostumeCreate, ShootCostumeResponse, PublicShootResponse
)
from app.modules.shoots.service import ShootService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shoots", tags=["shoots"])
participants_router = APIRouter(prefix="/participants", tags=["shoots"])
references_router = APIRouter(prefix="/references", tags=["shoots"])
public_router = APIRouter(prefix="/public/shoots", tags=["public"])


def get_shoot_service(supabase: Client = Depends(get_supabase)) -> ShootService:
    return ShootService(supabase)


def get_reconciler(supabase: Client = Depends(get_supabase)) -> AssociationReconciler:
    return AssociationReconciler(supabase)


# Shoots

@router.get("", response_model=List[ShootResponse])
async def list_shoots(
    status: Optional[ShootStatus] = Query(None),
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    """List the active team's shoots, newest first"""
    return service.list_shoots(ctx.team_id, status)


@router.post("", response_model=ShootResponse, status_code=201)
async def create_shoot(
    shoot_data: ShootCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    return service.create_shoot(shoot_data.model_dump(mode="json"), ctx.user_id, ctx.team_id)


@router.get("/{shoot_id}", response_model=ShootResponse)
async def get_shoot(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    return service.get_or_404(shoot_id, ctx.team_id)


@router.patch("/{shoot_id}", response_model=ShootResponse)
async def update_shoot(
    shoot_id: str,
    shoot_data: ShootUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    return service.update_shoot(shoot_id, ctx.team_id, shoot_data.model_dump(mode="json", exclude_unset=True))


@router.delete("/{shoot_id}", status_code=204)
def delete_shoot(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    app_context: AppContext = Depends(get_context)
):
    """Delete a shoot and, when one was created, its calendar event"""
    shoot = service.delete_shoot(shoot_id, ctx.team_id)
    if shoot.calendar_event_id and app_context.calendar.configured:
        try:
            app_context.calendar.delete_event(shoot.calendar_event_id)
        except IntegrationError as e:
            logger.warning(f"Calendar event cleanup failed for shoot {shoot_id}: {e.detail}")
    return None


@router.patch("/{shoot_id}/resources", response_model=ResourcesUpdateResult)
async def update_shoot_resources(
    shoot_id: str,
    resources: ShootResourcesUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service),
    reconciler: AssociationReconciler = Depends(get_reconciler)
):
    """Replace the shoot's equipment, props, costumes and participants with the submitted set"""
    service.get_or_404(shoot_id, ctx.team_id)
    return reconciler.apply(shoot_id, ctx.team_id, resources)


# Associated catalog resources

@router.get("/{shoot_id}/equipment", response_model=List[EquipmentResponse])
async def list_shoot_equipment(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.list_equipment(shoot_id, ctx.team_id)


@router.post("/{shoot_id}/equipment", response_model=ShootEquipmentResponse, status_code=201)
async def add_shoot_equipment(
    shoot_id: str,
    data: ShootEquipmentCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.add_equipment(shoot_id, ctx.team_id, data.equipment_id, data.quantity)


@router.get("/{shoot_id}/props", response_model=List[PropResponse])
async def list_shoot_props(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.list_props(shoot_id, ctx.team_id)


@router.post("/{shoot_id}/props", response_model=ShootPropResponse, status_code=201)
async def add_shoot_prop(
    shoot_id: str,
    data: ShootPropCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.add_prop(shoot_id, ctx.team_id, data.prop_id)


@router.get("/{shoot_id}/costumes", response_model=List[CostumeResponse])
async def list_shoot_costumes(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.list_costumes(shoot_id, ctx.team_id)


@router.post("/{shoot_id}/costumes", response_model=ShootCostumeResponse, status_code=201)
async def add_shoot_costume(
    shoot_id: str,
    data: ShootCostumeCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.add_costume(shoot_id, ctx.team_id, data.costume_id)


# Participants and references

@router.get("/{shoot_id}/participants", response_model=List[ParticipantResponse])
async def list_shoot_participants(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.list_participants(shoot_id)


@router.post("/{shoot_id}/participants", response_model=ParticipantResponse, status_code=201)
async def add_shoot_participant(
    shoot_id: str,
    data: ParticipantCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.add_participant(shoot_id, ctx.team_id, data.model_dump())


@router.get("/{shoot_id}/references", response_model=List[ReferenceResponse])
async def list_shoot_references(
    shoot_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.list_references(shoot_id)


@router.post("/{shoot_id}/references", response_model=ReferenceResponse, status_code=201)
async def add_shoot_reference(
    shoot_id: str,
    data: ReferenceCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.get_or_404(shoot_id, ctx.team_id)
    return service.add_reference(shoot_id, data.model_dump())


@participants_router.delete("/{participant_id}", status_code=204)
async def delete_participant(
    participant_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.delete_participant(participant_id, ctx.team_id)
    return None


@references_router.delete("/{reference_id}", status_code=204)
async def delete_reference(
    reference_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: ShootService = Depends(get_shoot_service)
):
    service.delete_reference(reference_id, ctx.team_id)
    return None


# Public sharing (no authentication)

@public_router.get("/{shoot_id}", response_model=PublicShootResponse)
async def get_public_shoot(
    shoot_id: str,
    service: ShootService = Depends(get_shoot_service)
):
    """Read-only view of a shoot its team has marked public"""
    return service.get_public_shoot(shoot_id)
