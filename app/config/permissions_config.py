"""
Team role configuration.

Every team-owned resource is gated by the caller's role in the active team.
Roles are strictly ordered: owner > admin > member.
"""

OWNER = "owner"
ADMIN = "admin"
MEMBER = "member"

ROLE_HIERARCHY = {
    MEMBER: 1,
    ADMIN: 2,
    OWNER: 3,
}

# Minimum role per operation group
OPERATION_MIN_ROLES = {
    "resources:read": MEMBER,
    "resources:write": ADMIN,
    "team:read": MEMBER,
    "team:update": ADMIN,
    "team:invite": ADMIN,
    "team:manage_members": ADMIN,  # further restricted by can_modify_member
    "team:delete": OWNER,
}


def has_min_role(role: str, min_role: str) -> bool:
    """True if role ranks at or above min_role. Unknown roles never pass."""
    if role not in ROLE_HIERARCHY or min_role not in ROLE_HIERARCHY:
        return False
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[min_role]


def min_role_for(operation: str) -> str:
    return OPERATION_MIN_ROLES[operation]


def can_modify_member(actor_role: str, target_role: str) -> bool:
    """Owners may act on anyone; admins only on plain members."""
    if actor_role == OWNER:
        return True
    if actor_role == ADMIN:
        return target_role == MEMBER
    return False
