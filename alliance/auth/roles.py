"""User roles and the static policy built on them."""

import enum
from collections.abc import Collection
from typing import assert_never


class UserRole(str, enum.Enum):
    """Privilege tiers, lowest first."""

    USER = "USER"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"


# Roles accepted when an action names no explicit allow-list.
DEFAULT_ALLOWED_ROLES: frozenset[UserRole] = frozenset({UserRole.USER, UserRole.ADMIN})


def rank(role: UserRole) -> int:
    """Position of a role in the total order USER < ADMIN < SUPERADMIN."""
    match role:
        case UserRole.USER:
            return 0
        case UserRole.ADMIN:
            return 1
        case UserRole.SUPERADMIN:
            return 2
        case _:
            assert_never(role)


def is_superadmin(role: UserRole) -> bool:
    return role is UserRole.SUPERADMIN


def is_role_allowed(role: UserRole, allowed_roles: Collection[UserRole] | None) -> bool:
    """
    Evaluate the access policy for one role.

    SUPERADMIN passes every check, even against an allow-list that leaves it out.
    Otherwise an explicit allow-list (an empty one included) is authoritative, and
    without one the default allow-list applies.
    """
    if is_superadmin(role):
        return True
    if allowed_roles is not None:
        return role in allowed_roles
    return role in DEFAULT_ALLOWED_ROLES


def can_view_settings(role: UserRole) -> bool:
    """Whether the Settings entry is shown in navigation."""
    match role:
        case UserRole.ADMIN | UserRole.SUPERADMIN:
            return True
        case UserRole.USER:
            return False
        case _:
            assert_never(role)


def can_manage_users(role: UserRole) -> bool:
    """Whether a role may view and edit users other than itself."""
    match role:
        case UserRole.ADMIN | UserRole.SUPERADMIN:
            return True
        case UserRole.USER:
            return False
        case _:
            assert_never(role)


def can_grant(actor_role: UserRole, target_role: UserRole) -> bool:
    """Whether an actor may assign target_role to someone (only SUPERADMIN grants SUPERADMIN)."""
    match target_role:
        case UserRole.SUPERADMIN:
            return is_superadmin(actor_role)
        case UserRole.USER | UserRole.ADMIN:
            return can_manage_users(actor_role)
        case _:
            assert_never(target_role)
