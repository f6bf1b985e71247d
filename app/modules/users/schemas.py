from typing import Optional
from datetime import datetime

from app.core.schemas import ApiModel


class ProfileUpdate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileResponse(ApiModel):
    id: str
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    active_team_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserTeamResponse(ApiModel):
    id: str
    name: str
    role: str
    created_at: datetime
    is_active: bool


class ActiveTeamUpdate(ApiModel):
    team_id: str
