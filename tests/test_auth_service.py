"""Session service — login, logout, restore and permission helpers."""

import pytest

from fleet_maintenance.core.exceptions import AuthenticationError
from fleet_maintenance.services.auth_service import SessionService


class TestLogin:
    def test_engineer_login(self, store):
        session = SessionService(store)
        user = session.login("engineer@entnt.in", "engine123")
        assert user["role"] == "Engineer"
        assert user["id"] == "3"
        assert session.is_authenticated
        assert session.error is None

    def test_password_not_kept_in_session(self, store):
        session = SessionService(store)
        session.login("admin@entnt.in", "admin123")
        assert "password" not in session.current_user
        assert "password" not in store.get_session()

    def test_wrong_password(self, store):
        session = SessionService(store)
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            session.login("admin@entnt.in", "wrong")
        assert session.current_user is None
        assert session.error == "Invalid email or password"
        assert store.get_session() is None

    def test_unknown_email_same_message(self, store):
        session = SessionService(store)
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            session.login("nobody@entnt.in", "admin123")

    def test_email_match_is_exact(self, store):
        session = SessionService(store)
        with pytest.raises(AuthenticationError):
            session.login("ADMIN@entnt.in", "admin123")

    def test_success_clears_previous_error(self, store):
        session = SessionService(store)
        with pytest.raises(AuthenticationError):
            session.login("admin@entnt.in", "wrong")
        session.login("admin@entnt.in", "admin123")
        assert session.error is None


class TestSessionLifecycle:
    def test_restored_on_construction(self, store):
        SessionService(store).login("inspector@entnt.in", "inspect123")
        restored = SessionService(store)
        assert restored.role == "Inspector"

    def test_logout(self, store):
        session = SessionService(store)
        session.login("admin@entnt.in", "admin123")
        session.logout()
        assert session.current_user is None
        assert session.role is None
        assert SessionService(store).current_user is None

    def test_corrupt_session_starts_anonymous(self, store):
        store.backend.set_item(store.key_for("current_user"), "not-json")
        assert SessionService(store).current_user is None


class TestPermissionHelpers:
    def test_anonymous_has_no_permissions(self, store):
        session = SessionService(store)
        assert session.check_permission("ships", "view") is False
        assert session.permissions()["jobs"]["view"] is False

    def test_inspector(self, store):
        session = SessionService(store)
        session.login("inspector@entnt.in", "inspect123")
        assert session.check_permission("components", "create") is True
        assert session.check_permission("ships", "delete") is False
        assert session.permissions()["notifications"]["delete"] is True
