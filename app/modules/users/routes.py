from fastapi import APIRouter, Depends
from supabase import Client
from typing import List

from app.core.dependencies import get_team_service, get_user_id
from app.database.supabase_client import get_supabase
from app.modules.teams.service import TeamService
from app.modules.users.schemas import (
    ProfileUpdate, ProfileResponse, UserTeamResponse, ActiveTeamUpdate
)
from app.modules.users.service import ProfileService

router = APIRouter(prefix="/user", tags=["user"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the caller's profile, creating an empty one on first access"""
    return service.ensure_profile(user_id)


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    user_id: str = Depends(get_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(user_id, profile_data)


@router.get("/teams", response_model=List[UserTeamResponse])
async def list_my_teams(
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Teams the caller belongs to, with role and which one is active"""
    return service.list_user_teams(user_id)


@router.put("/active-team", response_model=List[UserTeamResponse])
async def set_active_team(
    active_team: ActiveTeamUpdate,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Switch the active team; the caller must be a member of it"""
    service.switch_active_team(user_id, active_team.team_id)
    return service.list_user_teams(user_id)
