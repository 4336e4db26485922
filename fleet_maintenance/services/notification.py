"""
Fleet Maintenance Core
Notification Service.

Central service for the in-app notification feed. Notifications are only
ever created by system side effects (job create/update hooks); the UI can
read, mark read and dismiss them.

The unread count is always computed from the cache, never stored.
"""

import logging

from fleet_maintenance.models.constants import NOTIFICATIONS
from fleet_maintenance.services.base import CollectionService
from fleet_maintenance.utils.helpers import isoformat_now

logger = logging.getLogger(__name__)


class NotificationService(CollectionService):
    collection = NOTIFICATIONS
    resource = "notifications"
    id_prefix = "n"

    # ── Query ─────────────────────────────────────────────────────────────

    def list(self):
        """Notifications, newest first."""
        return sorted(super().list(), key=lambda n: n.get("created_at") or "", reverse=True)

    def list_unread(self):
        return [n for n in self.list() if not n.get("read")]

    def unread_count(self):
        return sum(1 for n in self._items if not n.get("read"))

    # ── Create (system only) ──────────────────────────────────────────────

    def create(self, notification_type, message, related_id=None):
        """
        Append a notification. Not permission-checked: callers are hooks.

        Returns:
            The stored notification.
        """
        data = {
            "type": notification_type,
            "message": message,
            "read": False,
            "created_at": isoformat_now(),
        }
        if related_id is not None:
            data["related_id"] = related_id
        notification = self._insert(data)
        logger.info("Notification %s: %s", notification_type, message,
                    extra={"resource": self.resource, "entity_id": notification["id"]})
        return notification

    # ── Actions ───────────────────────────────────────────────────────────

    def mark_read(self, notification_id):
        """Mark one notification read. Unknown ids are a no-op (returns None)."""
        self._require("edit")
        return self._merge(notification_id, {"read": True})

    def mark_all_read(self):
        """Mark every unread notification read. Returns how many changed."""
        self._require("edit")
        unread = [n["id"] for n in self._items if not n.get("read")]
        if not unread:
            return 0
        items = [{**n, "read": True} for n in self._items]
        self.store.replace_all(self.collection, items)
        self._items = items
        logger.info("Marked %d notifications read", len(unread))
        return len(unread)

    def dismiss(self, notification_id):
        """Delete one notification. Unknown ids are a no-op (returns False)."""
        self._require("delete")
        return self._remove(notification_id)

    def clear_all(self):
        self._require("delete")
        self.store.replace_all(self.collection, [])
        self._items = []
        logger.info("Cleared all notifications")
