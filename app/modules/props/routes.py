from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import TeamContext, require_operation
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.props.schemas import PropCreate, PropUpdate, PropResponse
from app.modules.props.service import PropService

router = APIRouter(prefix="/props", tags=["props"])


def get_prop_service(supabase: Client = Depends(get_supabase)) -> PropService:
    return PropService(supabase)


@router.get("", response_model=List[PropResponse])
async def list_props(
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: PropService = Depends(get_prop_service)
):
    return service.list_for_team(ctx.team_id)


@router.post("", response_model=PropResponse, status_code=201)
async def create_prop(
    prop_data: PropCreate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PropService = Depends(get_prop_service)
):
    return service.create({**prop_data.model_dump(), "team_id": ctx.team_id})


@router.get("/{prop_id}", response_model=PropResponse)
async def get_prop(
    prop_id: str,
    ctx: TeamContext = Depends(require_operation("resources:read")),
    service: PropService = Depends(get_prop_service)
):
    return service.get_or_404(prop_id, ctx.team_id)


@router.patch("/{prop_id}", response_model=PropResponse)
async def update_prop(
    prop_id: str,
    prop_data: PropUpdate,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PropService = Depends(get_prop_service)
):
    updated = service.update(prop_id, ctx.team_id, prop_data.model_dump(exclude_unset=True))
    if not updated:
        raise NotFoundError("Prop not found")
    return updated


@router.delete("/{prop_id}", status_code=204)
async def delete_prop(
    prop_id: str,
    ctx: TeamContext = Depends(require_operation("resources:write")),
    service: PropService = Depends(get_prop_service)
):
    if not service.delete(prop_id, ctx.team_id):
        raise NotFoundError("Prop not found")
    return None
