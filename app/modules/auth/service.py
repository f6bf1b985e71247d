import logging
from typing import Dict, Any

from supabase import Client

from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from a Supabase Auth access token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info("Token validation failed: %s", type(e).__name__)
            raise UnauthorizedError("Invalid or expired token") from e
        if not user_response or not user_response.user:
            raise UnauthorizedError("Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
