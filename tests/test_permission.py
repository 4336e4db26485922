"""Permission engine — static policy table, fail-closed evaluation."""

import pytest

from fleet_maintenance.core.exceptions import UnauthorizedError
from fleet_maintenance.models.constants import USER_ROLES
from fleet_maintenance.services.permission import (
    ACTIONS,
    PERMISSION_MATRIX,
    allow,
    check_permission,
    get_permissions,
)

A, I, E = "Admin", "Inspector", "Engineer"

EXPECTED = {
    "ships": {"view": {A, I, E}, "create": {A}, "edit": {A}, "delete": {A}},
    "components": {"view": {A, I, E}, "create": {A, I}, "edit": {A, I}, "delete": {A}},
    "jobs": {"view": {A, I, E}, "create": {A, I}, "edit": {A, I, E}, "delete": {A}},
    "users": {"view": {A}, "create": {A}, "edit": {A}, "delete": {A}},
    "notifications": {"view": {A, I, E}, "create": {A}, "edit": {A, I, E}, "delete": {A, I, E}},
}

ALL_CASES = [
    (resource, action, role)
    for resource in EXPECTED
    for action in ACTIONS
    for role in USER_ROLES
]


class TestAllow:
    @pytest.mark.parametrize("resource,action,role", ALL_CASES)
    def test_matches_policy_table(self, resource, action, role):
        assert allow(resource, action, role) is (role in EXPECTED[resource][action])

    def test_matrix_covers_exactly_the_known_resources(self):
        assert set(PERMISSION_MATRIX) == set(EXPECTED)

    @pytest.mark.parametrize("role", [A, I, E])
    def test_unknown_resource_denies(self, role):
        assert allow("fleets", "view", role) is False

    @pytest.mark.parametrize("role", [None, ""])
    def test_missing_role_denies(self, role):
        assert allow("ships", "view", role) is False

    def test_unknown_action_denies(self):
        assert allow("ships", "archive", A) is False

    def test_unknown_role_denies(self):
        assert allow("ships", "view", "Captain") is False


class TestCheckPermission:
    def test_allowed_returns_none(self):
        assert check_permission("ships", "create", {"id": "1", "role": A}) is None

    def test_denied_raises_with_context(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            check_permission("ships", "create", {"id": "3", "role": E})
        err = exc_info.value
        assert err.resource == "ships"
        assert err.action == "create"
        assert err.role == E
        assert "Unauthorized" in str(err)

    def test_anonymous_raises(self):
        with pytest.raises(UnauthorizedError):
            check_permission("ships", "view", None)


class TestGetPermissions:
    def test_inspector_grid(self):
        grid = get_permissions(I)
        assert grid["components"] == {"view": True, "create": True, "edit": True, "delete": False}
        assert grid["ships"] == {"view": True, "create": False, "edit": False, "delete": False}
        assert grid["users"]["view"] is False

    def test_no_role_is_all_false(self):
        grid = get_permissions(None)
        assert all(not allowed for actions in grid.values() for allowed in actions.values())
