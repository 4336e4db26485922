"""
User Service — read-only access to seeded users.

Users have no mutation path; roles are fixed at seeding time.
"""

import logging

from fleet_maintenance.models.constants import ROLE_ENGINEER, USERS
from fleet_maintenance.services.base import CollectionService

logger = logging.getLogger(__name__)


class UserService(CollectionService):
    collection = USERS
    resource = "users"
    id_prefix = "u"

    def list(self):
        """All users. Admin only."""
        self._require("view")
        return super().list()

    def get_by_email(self, email):
        user = next((u for u in self._items if u.get("email") == email), None)
        return dict(user) if user is not None else None

    def list_engineers(self):
        """Users a job can be assigned to. Open to every caller."""
        return [
            {k: v for k, v in user.items() if k != "password"}
            for user in self._filter_by("role", ROLE_ENGINEER)
        ]
