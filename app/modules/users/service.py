import logging
from typing import Optional

from supabase import Client

from app.core.exceptions import AppError, InternalError
from app.core.repository import utcnow_iso
from app.modules.users.schemas import ProfileUpdate, ProfileResponse

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get profile for an auth user, None if it was never created"""
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return ProfileResponse(**result.data[0])
        except Exception as e:
            logger.exception("Failed to load profile: %s", e)
            raise InternalError("Failed to load profile") from e

    def ensure_profile(self, user_id: str) -> ProfileResponse:
        profile = self.get_profile(user_id)
        if profile:
            return profile
        try:
            result = self.supabase.table("user_profiles").insert({"user_id": user_id}).execute()
            if not result.data:
                raise InternalError("Failed to create profile")
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to create profile: %s", e)
            raise InternalError("Failed to create profile") from e

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        self.ensure_profile(user_id)
        update_data = profile_data.model_dump(exclude_unset=True)
        if not update_data:
            return self.get_profile(user_id)
        update_data["updated_at"] = utcnow_iso()
        try:
            result = self.supabase.table("user_profiles")\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise InternalError("Failed to update profile")
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to update profile: %s", e)
            raise InternalError("Failed to update profile") from e

    def set_active_team(self, user_id: str, team_id: Optional[str]) -> ProfileResponse:
        """Point the profile at team_id, creating the profile on first use"""
        self.ensure_profile(user_id)
        try:
            result = self.supabase.table("user_profiles")\
                .update({"active_team_id": team_id, "updated_at": utcnow_iso()})\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise InternalError("Failed to set active team")
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to set active team: %s", e)
            raise InternalError("Failed to set active team") from e
