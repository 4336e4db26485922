"""
Collection service base — shared cache + store plumbing for domain services.

Transaction policy: every mutating method writes through the store first and
then replaces the matching cache entry with the record the store returned,
so cache and store agree before the method returns.

Callers get copies: records returned by reads and writes are fresh dicts, so
editing one never reaches the cache without going through the store.

Cascade policy: a child service registers a purge handler on its parent via
register_cascade(). The parent's delete path runs all handlers (children
first) before removing its own record, which yields Jobs -> Components ->
Ships. Cascades are best-effort: children already purged stay purged if a
later step fails. Relocation handlers (register_relocation) run after a
record moves to a new parent so dependents can follow it.
"""

import logging

from fleet_maintenance.services.permission import check_permission
from fleet_maintenance.utils.helpers import new_id

logger = logging.getLogger(__name__)


class CollectionService:
    """Base class: one persisted collection, one in-memory cache."""

    collection = ""     # store collection name
    resource = ""       # permission table resource
    id_prefix = ""

    def __init__(self, store, session):
        self.store = store
        self.session = session
        self._items: list[dict] = store.get_all(self.collection)
        self._cascade_handlers = []
        self._relocation_handlers = []

    # ── Reads ─────────────────────────────────────────────────────────────

    def list(self):
        return [dict(item) for item in self._items]

    def get_by_id(self, item_id):
        item = self._find(item_id)
        return dict(item) if item is not None else None

    def _find(self, item_id):
        return next((item for item in self._items if item.get("id") == item_id), None)

    def _filter_by(self, field, value):
        return [dict(item) for item in self._items if item.get(field) == value]

    def reload(self):
        """Re-read the collection from the store."""
        self._items = self.store.get_all(self.collection)

    # ── Permission ────────────────────────────────────────────────────────

    def _require(self, action):
        check_permission(self.resource, action, self.session.current_user)

    # ── Cascade ───────────────────────────────────────────────────────────

    def register_cascade(self, handler):
        """Register ``handler(parent_ids)`` to purge dependents before delete."""
        self._cascade_handlers.append(handler)

    def _run_cascade(self, parent_ids):
        for handler in self._cascade_handlers:
            handler(parent_ids)

    def register_relocation(self, handler):
        """Register ``handler(item_id, field, value)`` for parent reference changes."""
        self._relocation_handlers.append(handler)

    def _run_relocation(self, item_id, field, value):
        for handler in self._relocation_handlers:
            handler(item_id, field, value)

    # ── Store write-through ───────────────────────────────────────────────

    def _insert(self, data):
        record = {**data, "id": new_id(self.id_prefix)}
        self.store.add(self.collection, record)
        self._items.append(record)
        return dict(record)

    def _merge(self, item_id, partial):
        record = self.store.update(self.collection, item_id, partial)
        if record is None:
            return None
        self._items = [record if item.get("id") == item_id else item for item in self._items]
        return dict(record)

    def _remove(self, item_id):
        removed = self.store.delete(self.collection, item_id)
        if removed:
            for index, item in enumerate(self._items):
                if item.get("id") == item_id:
                    del self._items[index]
                    break
        return removed

    def _purge(self, item_ids):
        """Remove many records without permission checks (cascade path)."""
        ids = set(item_ids)
        if not ids:
            return 0
        self._run_cascade(ids)
        count = 0
        for item_id in ids:
            if self._remove(item_id):
                count += 1
        if count:
            logger.info("Cascade removed %d %s", count, self.collection)
        return count

    def _delete(self, item_id):
        """Permission-checked delete with cascade; True if the target existed."""
        self._require("delete")
        if self._find(item_id) is None:
            return False
        self._run_cascade({item_id})
        removed = self._remove(item_id)
        if removed:
            logger.info("Deleted %s %s", self.resource, item_id,
                        extra={"resource": self.resource, "entity_id": item_id})
        return removed
