from fastapi import APIRouter, Depends
from typing import List, Dict

from app.core.dependencies import (
    TeamContext, check_team_membership, get_team_context, get_team_service,
    get_user_id, require_operation
)
from app.core.exceptions import NotFoundError
from app.modules.teams.schemas import (
    TeamCreate, TeamUpdate, TeamResponse, ActiveTeamResponse,
    TeamMemberResponse, MemberRoleUpdate, TeamInviteResponse, JoinTeamRequest
)
from app.modules.teams.service import TeamService

router = APIRouter(prefix="/team", tags=["team"])


# Active team

@router.get("", response_model=ActiveTeamResponse)
async def get_active_team(
    ctx: TeamContext = Depends(get_team_context),
    service: TeamService = Depends(get_team_service)
):
    """Get the caller's active team and their role in it"""
    team = service.get_team_or_404(ctx.team_id)
    return ActiveTeamResponse(**team.model_dump(), role=ctx.role)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    team_data: TeamCreate,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Create a new team owned by the caller; it becomes the active team"""
    return service.create_team(team_data.name, user_id)


@router.patch("", response_model=TeamResponse)
async def update_active_team(
    team_data: TeamUpdate,
    ctx: TeamContext = Depends(require_operation("team:update")),
    service: TeamService = Depends(get_team_service)
):
    """Rename the active team (admin or owner)"""
    return service.update_team(ctx.team_id, team_data.name)


@router.delete("", status_code=200)
async def delete_active_team(
    ctx: TeamContext = Depends(require_operation("team:delete")),
    service: TeamService = Depends(get_team_service)
):
    """Delete the active team (owner, and only if the caller owns another team)"""
    service.delete_team(ctx.team_id, ctx.user_id)
    return {"message": "Team deleted successfully"}


# Joining and leaving. Declared before /{team_id} so the literal paths win.

@router.post("/join", response_model=TeamResponse, status_code=201)
async def join_team(
    join_data: JoinTeamRequest,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Join a team with an invite code; the joined team becomes active"""
    return service.join_team(join_data.invite_code, user_id)


@router.delete("/leave", status_code=200)
async def leave_team(
    ctx: TeamContext = Depends(get_team_context),
    service: TeamService = Depends(get_team_service)
):
    """Leave the active team"""
    service.leave_team(ctx.team_id, ctx.user_id)
    return {"message": "Left team successfully"}


# Explicit team id

@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:read")
    return service.get_team_or_404(team_id)


@router.patch("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: str,
    team_data: TeamUpdate,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:update")
    return service.update_team(team_id, team_data.name)


@router.delete("/{team_id}", status_code=200)
async def delete_team(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:delete")
    service.delete_team(team_id, user_id)
    return {"message": "Team deleted successfully"}


@router.get("/{team_id}/members", response_model=List[TeamMemberResponse])
async def list_members(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:read")
    return service.list_members(team_id)


@router.patch("/{team_id}/members/{member_id}", response_model=TeamMemberResponse)
async def update_member_role(
    team_id: str,
    member_id: str,
    role_data: MemberRoleUpdate,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Change a member's role. Owners may change anyone; admins only plain members."""
    actor = check_team_membership(team_id, user_id, service, operation="team:manage_members")
    return service.update_member_role(team_id, member_id, role_data.role, actor)


@router.delete("/{team_id}/members/{member_id}", status_code=204)
async def remove_member(
    team_id: str,
    member_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    actor = check_team_membership(team_id, user_id, service, operation="team:manage_members")
    service.remove_member(team_id, member_id, actor)
    return None


@router.get("/{team_id}/invite", response_model=TeamInviteResponse)
async def get_invite(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:invite")
    invite = service.get_invite(team_id)
    if not invite:
        raise NotFoundError("No active invite for this team")
    return invite


@router.post("/{team_id}/invite", response_model=TeamInviteResponse, status_code=201)
async def create_invite(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Issue a new invite code, replacing the previous one"""
    check_team_membership(team_id, user_id, service, operation="team:invite")
    return service.create_invite(team_id, user_id)


@router.delete("/{team_id}/invite", status_code=204)
async def revoke_invite(
    team_id: str,
    user_id: str = Depends(get_user_id),
    service: TeamService = Depends(get_team_service)
):
    check_team_membership(team_id, user_id, service, operation="team:invite")
    if not service.revoke_invite(team_id):
        raise NotFoundError("No active invite for this team")
    return None
