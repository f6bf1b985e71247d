"""
Core dependencies for identity resolution and team role checks
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from app.config.permissions_config import has_min_role, min_role_for
from app.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.teams.schemas import TeamMemberResponse
from app.modules.teams.service import TeamService

ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"

security = HTTPBearer(auto_error=False)


@dataclass
class TeamContext:
    """The caller's identity resolved to exactly one team"""
    user_id: str
    team_id: str
    role: str
    user: Dict[str, Any]

    def has_role(self, min_role: str) -> bool:
        return has_min_role(self.role, min_role)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_team_service(supabase: Client = Depends(get_supabase)) -> TeamService:
    return TeamService(supabase)


def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> str:
    """Bearer token first, then the session cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise UnauthorizedError("Missing authentication credentials")
    return token


def get_current_user(
    token: str = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    return auth_service.get_current_user(token)


def get_user_id(user: Dict[str, Any] = Depends(get_current_user)) -> str:
    user_id = user.get("id")
    if not user_id:
        raise UnauthorizedError()
    return user_id


def get_team_context(
    user: Dict[str, Any] = Depends(get_current_user),
    team_service: TeamService = Depends(get_team_service),
) -> TeamContext:
    membership = team_service.resolve_active_membership(user["id"])
    return TeamContext(
        user_id=user["id"],
        team_id=membership.team_id,
        role=membership.role,
        user=user,
    )


def require_team_role(min_role: str):
    """Factory function to create a team role check dependency"""
    def check_role(ctx: TeamContext = Depends(get_team_context)) -> TeamContext:
        if not ctx.has_role(min_role):
            raise ForbiddenError(f"Requires {min_role} role or higher")
        return ctx
    return check_role


def require_operation(operation: str):
    """Role check for an operation group listed in OPERATION_MIN_ROLES"""
    return require_team_role(min_role_for(operation))


def check_team_membership(
    team_id: str,
    user_id: str,
    team_service: TeamService,
    operation: Optional[str] = None,
) -> TeamMemberResponse:
    """Membership of user_id in an explicitly addressed team.

    Non-members get 404 so team ids cannot be discovered; members below the
    minimum role for operation get 403.
    """
    membership = team_service.get_member(team_id, user_id)
    if not membership:
        raise NotFoundError("Team not found")
    min_role = min_role_for(operation) if operation else None
    if min_role and not has_min_role(membership.role, min_role):
        raise ForbiddenError(f"Requires {min_role} role or higher")
    return membership
