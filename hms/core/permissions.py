"""
Core permissions utilities for role-based access control.
"""
from enum import Enum
from typing import Dict, Iterable, List, Set
from ..auth.models import UserRole
from ..auth.exceptions import PermissionDeniedException

class Permission(str, Enum):
    """
    Permission types for role-based access control.
    """
    # Profile permissions
    READ_PROFILE = "read:profile"

    # Doctor permissions
    READ_DOCTORS = "read:doctors"
    CREATE_DOCTOR = "create:doctor"
    UPDATE_DOCTOR = "update:doctor"
    DELETE_DOCTOR = "delete:doctor"


# Role-based permission mapping
ROLE_PERMISSIONS: Dict[UserRole, List[Permission]] = {
    UserRole.ADMIN: [
        Permission.READ_PROFILE,
        Permission.READ_DOCTORS,
        Permission.CREATE_DOCTOR,
        Permission.UPDATE_DOCTOR,
        Permission.DELETE_DOCTOR,
    ],
    UserRole.DOCTOR: [
        Permission.READ_PROFILE,
        Permission.READ_DOCTORS,
    ],
    UserRole.PATIENT: [
        Permission.READ_PROFILE,
        Permission.READ_DOCTORS,
    ],
}


def authorities_of(role: UserRole) -> Set[Permission]:
    """
    Get permissions for a specific role.

    Args:
        role: User role

    Returns:
        Set[Permission]: Set of permissions for the role
    """
    return set(ROLE_PERMISSIONS.get(UserRole(role), []))


def has_permission(role: UserRole, permission: Permission) -> bool:
    return permission in authorities_of(role)


def require_roles(actor, allowed_roles: Iterable[UserRole]) -> None:
    """
    Gate an operation on the actor's role.

    Args:
        actor: Authenticated user (anything with a ``role`` attribute)
        allowed_roles: Roles permitted to continue

    Raises:
        PermissionDeniedException: If the actor is missing or its role is not allowed
    """
    allowed = {UserRole(role) for role in allowed_roles}
    role = getattr(actor, "role", None)
    if role is None or UserRole(role) not in allowed:
        raise PermissionDeniedException(
            f"Access denied. Required roles: {sorted(r.value for r in allowed)}"
        )
