import logging
import secrets
from typing import List, Optional

from supabase import Client

from app.config.permissions_config import OWNER, MEMBER, can_modify_member
from app.core.exceptions import AppError, BadRequestError, ForbiddenError, InternalError, NotFoundError
from app.core.repository import utcnow_iso
from app.modules.teams.schemas import TeamResponse, TeamMemberResponse, TeamInviteResponse
from app.modules.users.schemas import UserTeamResponse
from app.modules.users.service import ProfileService

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "My Team"


class TeamService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    # Teams

    def get_team(self, team_id: str) -> Optional[TeamResponse]:
        try:
            result = self.supabase.table("teams")\
                .select("*")\
                .eq("id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return TeamResponse(**result.data[0])
        except Exception as e:
            logger.exception("Failed to load team: %s", e)
            raise InternalError("Failed to load team") from e

    def get_team_or_404(self, team_id: str) -> TeamResponse:
        team = self.get_team(team_id)
        if not team:
            raise NotFoundError("Team not found")
        return team

    def create_team(self, name: str, user_id: str) -> TeamResponse:
        """Create a team owned by user_id and make it the user's active team"""
        try:
            result = self.supabase.table("teams").insert({"name": name}).execute()
            if not result.data:
                raise InternalError("Failed to create team")
            team = TeamResponse(**result.data[0])

            self.add_member(team.id, user_id, OWNER)
            self.profiles.set_active_team(user_id, team.id)
            logger.info("Team %s created by %s", team.id, user_id)
            return team
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to create team: %s", e)
            raise InternalError("Failed to create team") from e

    def update_team(self, team_id: str, name: str) -> TeamResponse:
        try:
            result = self.supabase.table("teams")\
                .update({"name": name, "updated_at": utcnow_iso()})\
                .eq("id", team_id)\
                .execute()
            if not result.data:
                raise NotFoundError("Team not found")
            return TeamResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to update team: %s", e)
            raise InternalError("Failed to update team") from e

    def delete_team(self, team_id: str, user_id: str) -> None:
        """Delete a team the user owns. The user must keep at least one owned team."""
        owned = self.list_owned_team_ids(user_id)
        if team_id not in owned:
            raise ForbiddenError("Only the team owner can delete the team")
        if len(owned) < 2:
            raise BadRequestError(
                "You must own at least one team. Create another team before deleting this one."
            )
        try:
            # Members, invites, catalog and shoot rows go with the team via on delete cascade
            result = self.supabase.table("teams")\
                .delete()\
                .eq("id", team_id)\
                .execute()
            if not result.data:
                raise NotFoundError("Team not found")
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to delete team: %s", e)
            raise InternalError("Failed to delete team") from e

        profile = self.profiles.get_profile(user_id)
        if profile and profile.active_team_id == team_id:
            remaining = [t for t in owned if t != team_id]
            self.profiles.set_active_team(user_id, remaining[0])
        logger.info("Team %s deleted by %s", team_id, user_id)

    # Membership

    def get_member(self, team_id: str, user_id: str) -> Optional[TeamMemberResponse]:
        try:
            result = self.supabase.table("team_members")\
                .select("*")\
                .eq("team_id", team_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return TeamMemberResponse(**result.data[0])
        except Exception as e:
            logger.exception("Failed to load team member: %s", e)
            raise InternalError("Failed to load team member") from e

    def get_member_by_id(self, team_id: str, member_id: str) -> TeamMemberResponse:
        try:
            result = self.supabase.table("team_members")\
                .select("*")\
                .eq("id", member_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.exception("Failed to load team member: %s", e)
            raise InternalError("Failed to load team member") from e
        if not result.data:
            raise NotFoundError("Team member not found")
        return TeamMemberResponse(**result.data[0])

    def list_user_memberships(self, user_id: str) -> List[TeamMemberResponse]:
        try:
            result = self.supabase.table("team_members")\
                .select("*")\
                .eq("user_id", user_id)\
                .execute()
            return [TeamMemberResponse(**m) for m in result.data or []]
        except Exception as e:
            logger.exception("Failed to list memberships: %s", e)
            raise InternalError("Failed to list team memberships") from e

    def list_owned_team_ids(self, user_id: str) -> List[str]:
        return [m.team_id for m in self.list_user_memberships(user_id) if m.role == OWNER]

    def count_owners(self, team_id: str) -> int:
        return len([m for m in self.list_members(team_id, with_profiles=False) if m.role == OWNER])

    def list_members(self, team_id: str, with_profiles: bool = True) -> List[TeamMemberResponse]:
        """List team members, decorated with profile names and avatars"""
        try:
            result = self.supabase.table("team_members")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("created_at")\
                .execute()
            rows = result.data or []
            if with_profiles and rows:
                profiles_result = self.supabase.table("user_profiles")\
                    .select("user_id, first_name, last_name, avatar_url")\
                    .in_("user_id", [r["user_id"] for r in rows])\
                    .execute()
                by_user = {p["user_id"]: p for p in profiles_result.data or []}
                for row in rows:
                    profile = by_user.get(row["user_id"]) or {}
                    row.update({
                        "first_name": profile.get("first_name"),
                        "last_name": profile.get("last_name"),
                        "avatar_url": profile.get("avatar_url"),
                    })
            return [TeamMemberResponse(**m) for m in rows]
        except Exception as e:
            logger.exception("Failed to list team members: %s", e)
            raise InternalError("Failed to list team members") from e

    def add_member(self, team_id: str, user_id: str, role: str = MEMBER) -> TeamMemberResponse:
        try:
            result = self.supabase.table("team_members").insert({
                "team_id": team_id,
                "user_id": user_id,
                "role": role,
            }).execute()
            if not result.data:
                raise InternalError("Failed to add team member")
            return TeamMemberResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to add team member: %s", e)
            raise InternalError("Failed to add team member") from e

    def update_member_role(
        self, team_id: str, member_id: str, new_role: str, actor: TeamMemberResponse
    ) -> TeamMemberResponse:
        target = self.get_member_by_id(team_id, member_id)
        if target.user_id == actor.user_id:
            raise BadRequestError("You cannot change your own role")
        if not can_modify_member(actor.role, target.role):
            raise ForbiddenError(f"Insufficient role to modify a team {target.role}")
        if new_role == OWNER and actor.role != OWNER:
            raise ForbiddenError("Only owners can grant the owner role")
        try:
            result = self.supabase.table("team_members")\
                .update({"role": new_role})\
                .eq("id", member_id)\
                .eq("team_id", team_id)\
                .execute()
            if not result.data:
                raise NotFoundError("Team member not found")
            return TeamMemberResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to update member role: %s", e)
            raise InternalError("Failed to update member role") from e

    def remove_member(self, team_id: str, member_id: str, actor: TeamMemberResponse) -> None:
        target = self.get_member_by_id(team_id, member_id)
        if target.user_id == actor.user_id:
            raise BadRequestError("Use leave team to remove yourself")
        if not can_modify_member(actor.role, target.role):
            raise ForbiddenError(f"Insufficient role to remove a team {target.role}")
        try:
            self.supabase.table("team_members")\
                .delete()\
                .eq("id", member_id)\
                .eq("team_id", team_id)\
                .execute()
        except Exception as e:
            logger.exception("Failed to remove team member: %s", e)
            raise InternalError("Failed to remove team member") from e

    def leave_team(self, team_id: str, user_id: str) -> None:
        member = self.get_member(team_id, user_id)
        if not member:
            raise NotFoundError("Team not found")
        if member.role == OWNER and self.count_owners(team_id) < 2:
            raise BadRequestError("Transfer ownership or delete the team before leaving it")
        try:
            self.supabase.table("team_members")\
                .delete()\
                .eq("id", member.id)\
                .execute()
        except Exception as e:
            logger.exception("Failed to leave team: %s", e)
            raise InternalError("Failed to leave team") from e
        profile = self.profiles.get_profile(user_id)
        if profile and profile.active_team_id == team_id:
            self.profiles.set_active_team(user_id, None)
        logger.info("User %s left team %s", user_id, team_id)

    def list_user_teams(self, user_id: str) -> List[UserTeamResponse]:
        memberships = self.list_user_memberships(user_id)
        if not memberships:
            return []
        profile = self.profiles.get_profile(user_id)
        active_team_id = profile.active_team_id if profile else None
        try:
            result = self.supabase.table("teams")\
                .select("*")\
                .in_("id", [m.team_id for m in memberships])\
                .execute()
        except Exception as e:
            logger.exception("Failed to list teams: %s", e)
            raise InternalError("Failed to list teams") from e
        teams = {t["id"]: t for t in result.data or []}
        return [
            UserTeamResponse(
                id=m.team_id,
                name=teams[m.team_id]["name"],
                role=m.role,
                created_at=teams[m.team_id]["created_at"],
                is_active=m.team_id == active_team_id,
            )
            for m in memberships
            if m.team_id in teams
        ]

    def switch_active_team(self, user_id: str, team_id: str) -> None:
        if not self.get_member(team_id, user_id):
            raise NotFoundError("Team not found")
        self.profiles.set_active_team(user_id, team_id)

    # Active team resolution

    def resolve_active_membership(self, user_id: str) -> TeamMemberResponse:
        """Return the membership for the user's active team, provisioning one if needed.

        1. The profile's active_team_id, if the user is still a member of it.
        2. Otherwise any membership the user has; it becomes the active team.
        3. Otherwise a new personal team owned by the user.
        """
        profile = self.profiles.get_profile(user_id)
        if profile and profile.active_team_id:
            membership = self.get_member(profile.active_team_id, user_id)
            if membership:
                return membership

        memberships = self.list_user_memberships(user_id)
        if memberships:
            membership = memberships[0]
            self.profiles.set_active_team(user_id, membership.team_id)
            return membership

        first_name = profile.first_name if profile else None
        team_name = f"{first_name}'s Team" if first_name else DEFAULT_TEAM_NAME
        team = self.create_team(team_name, user_id)
        logger.info("Provisioned personal team %s for %s", team.id, user_id)
        return self.get_member(team.id, user_id)

    def get_user_team_id(self, user_id: str) -> str:
        return self.resolve_active_membership(user_id).team_id

    # Invites

    def get_invite(self, team_id: str) -> Optional[TeamInviteResponse]:
        try:
            result = self.supabase.table("team_invites")\
                .select("*")\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return TeamInviteResponse(**result.data[0])
        except Exception as e:
            logger.exception("Failed to load invite: %s", e)
            raise InternalError("Failed to load invite") from e

    def create_invite(self, team_id: str, user_id: str) -> TeamInviteResponse:
        """Issue a fresh invite code; any previous code for the team stops working"""
        try:
            self.supabase.table("team_invites")\
                .delete()\
                .eq("team_id", team_id)\
                .execute()
            result = self.supabase.table("team_invites").insert({
                "team_id": team_id,
                "invite_code": secrets.token_urlsafe(8),
                "created_by": user_id,
            }).execute()
            if not result.data:
                raise InternalError("Failed to create invite")
            return TeamInviteResponse(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            logger.exception("Failed to create invite: %s", e)
            raise InternalError("Failed to create invite") from e

    def revoke_invite(self, team_id: str) -> bool:
        try:
            result = self.supabase.table("team_invites")\
                .delete()\
                .eq("team_id", team_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            logger.exception("Failed to revoke invite: %s", e)
            raise InternalError("Failed to revoke invite") from e

    def join_team(self, invite_code: str, user_id: str) -> TeamResponse:
        try:
            result = self.supabase.table("team_invites")\
                .select("*")\
                .eq("invite_code", invite_code)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.exception("Failed to look up invite: %s", e)
            raise InternalError("Failed to look up invite") from e
        if not result.data:
            raise NotFoundError("Invalid invite code")
        invite = TeamInviteResponse(**result.data[0])

        if self.get_member(invite.team_id, user_id):
            raise BadRequestError("You are already a member of this team")

        team = self.get_team_or_404(invite.team_id)
        self.add_member(team.id, user_id, MEMBER)
        self.profiles.set_active_team(user_id, team.id)
        logger.info("User %s joined team %s", user_id, team.id)
        return team
