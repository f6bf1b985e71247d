from typing import Literal, Optional
from datetime import datetime

from pydantic import field_validator

from app.core.schemas import ApiModel

TeamRole = Literal["owner", "admin", "member"]


class TeamCreate(ApiModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Team name is required")
        return v


class TeamUpdate(TeamCreate):
    pass


class TeamResponse(ApiModel):
    id: str
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ActiveTeamResponse(TeamResponse):
    role: str


class TeamMemberResponse(ApiModel):
    id: str
    team_id: str
    user_id: str
    role: str
    created_at: datetime
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None


class MemberRoleUpdate(ApiModel):
    role: TeamRole


class TeamInviteResponse(ApiModel):
    id: str
    team_id: str
    invite_code: str
    created_by: str
    created_at: datetime


class JoinTeamRequest(ApiModel):
    invite_code: str

    @field_validator("invite_code")
    @classmethod
    def code_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Invite code is required")
        return v
