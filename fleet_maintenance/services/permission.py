"""
Role-Based Access Control (RBAC) — static policy table.

PERMISSION_MATRIX is the single source of truth for who may do what. Every
domain service calls check_permission() before a mutation instead of
re-encoding role lists.

Usage:
    from fleet_maintenance.services.permission import allow, check_permission

    # Boolean check
    if allow("jobs", "edit", user["role"]):
        ...

    # Raises UnauthorizedError if not allowed
    check_permission("ships", "delete", current_user)

Evaluation is fail-closed: no role, an unknown resource or an unknown
action all deny.
"""

import logging

from fleet_maintenance.core.exceptions import UnauthorizedError
from fleet_maintenance.models.constants import ROLE_ADMIN, ROLE_ENGINEER, ROLE_INSPECTOR

logger = logging.getLogger(__name__)

ACTIONS = ("view", "create", "edit", "delete")

_ALL = frozenset({ROLE_ADMIN, ROLE_INSPECTOR, ROLE_ENGINEER})
_ADMIN = frozenset({ROLE_ADMIN})
_ADMIN_INSPECTOR = frozenset({ROLE_ADMIN, ROLE_INSPECTOR})

PERMISSION_MATRIX: dict[str, dict[str, frozenset[str]]] = {
    "ships": {
        "view": _ALL,
        "create": _ADMIN,
        "edit": _ADMIN,
        "delete": _ADMIN,
    },
    "components": {
        "view": _ALL,
        "create": _ADMIN_INSPECTOR,
        "edit": _ADMIN_INSPECTOR,
        "delete": _ADMIN,
    },
    "jobs": {
        "view": _ALL,
        "create": _ADMIN_INSPECTOR,
        "edit": _ALL,
        "delete": _ADMIN,
    },
    "users": {
        "view": _ADMIN,
        "create": _ADMIN,
        "edit": _ADMIN,
        "delete": _ADMIN,
    },
    "notifications": {
        "view": _ALL,
        "create": _ADMIN,
        "edit": _ALL,
        "delete": _ALL,
    },
}


def allow(resource: str, action: str, role: str | None) -> bool:
    """Return True if ``role`` may perform ``action`` on ``resource``."""
    if not role:
        return False
    actions = PERMISSION_MATRIX.get(resource)
    if actions is None:
        return False
    return role in actions.get(action, frozenset())


def check_permission(resource: str, action: str, user: dict | None) -> None:
    """
    Assert the user may perform the action; raise UnauthorizedError if not.

    Args:
        resource: Resource name (ships, components, jobs, users, notifications)
        action: view / create / edit / delete
        user: User record, or None when nobody is logged in

    Raises:
        UnauthorizedError: If the policy table denies the action.
    """
    role = user.get("role") if user else None
    if not allow(resource, action, role):
        logger.warning(
            "Permission denied: %s/%s for role=%s",
            resource, action, role,
            extra={"resource": resource, "action": action, "role": role},
        )
        raise UnauthorizedError(resource, action, role)


def get_permissions(role: str | None) -> dict[str, dict[str, bool]]:
    """Full resource x action grid for a role (all False without a role)."""
    return {
        resource: {action: allow(resource, action, role) for action in ACTIONS}
        for resource in PERMISSION_MATRIX
    }
