"""
Session / Auth Service.

Two states: Anonymous (``current_user is None``) and Authenticated(user).

Credential check is demo grade on purpose: exact email match, plaintext
password equality, no lockout and no hashing. A persisted session is
restored on construction without re-validating credentials.
"""

import logging

from fleet_maintenance.core.exceptions import AuthenticationError
from fleet_maintenance.models.constants import USERS
from fleet_maintenance.services.permission import allow, get_permissions

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _public(user):
    """User record without its password, as stored in the session slot."""
    return {k: v for k, v in user.items() if k != "password"}


class SessionService:
    """Holds the single active session and persists it through the store."""

    def __init__(self, store):
        self.store = store
        self.error: str | None = None
        self._user = store.get_session()
        if self._user:
            logger.info("Restored session for %s", self._user.get("email"))

    # ── State ─────────────────────────────────────────────────────────────

    @property
    def current_user(self):
        return self._user

    @property
    def is_authenticated(self):
        return self._user is not None

    @property
    def role(self):
        return self._user.get("role") if self._user else None

    # ── Transitions ───────────────────────────────────────────────────────

    def login(self, email, password):
        """
        Authenticate and persist the session.

        Returns:
            The logged-in user (without password).

        Raises:
            AuthenticationError: unknown email or wrong password. The session
                stays Anonymous and ``error`` holds the message.
        """
        user = next((u for u in self.store.get_all(USERS) if u.get("email") == email), None)
        if user is None or user.get("password") != password:
            self.error = INVALID_CREDENTIALS
            self._user = None
            logger.warning("Failed login for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        self._user = _public(user)
        self.error = None
        self.store.set_session(self._user)
        logger.info("User %s logged in as %s", email, user.get("role"))
        return self._user

    def logout(self):
        if self._user:
            logger.info("User %s logged out", self._user.get("email"))
        self.store.clear_session()
        self._user = None
        self.error = None

    # ── Permission helpers for the UI ─────────────────────────────────────

    def check_permission(self, resource, action):
        """Boolean permission check for the current user."""
        return allow(resource, action, self.role)

    def permissions(self):
        return get_permissions(self.role)
