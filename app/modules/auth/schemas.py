from typing import Optional, Dict, Any

from app.core.schemas import ApiModel
from app.modules.users.schemas import ProfileResponse


class SessionRequest(ApiModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = 3600


class MeResponse(ApiModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    profile: Optional[ProfileResponse] = None
    active_team_id: str
    role: str
