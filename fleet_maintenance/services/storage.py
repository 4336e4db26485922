"""
Record Store — key-value backed persistence for the fleet collections.

Provides:
  - generic get_all / add / update / delete / replace_all over named
    collections, each stored as one JSON array under a stable key
  - a single session slot holding the logged-in user (or nothing)
  - idempotent first-run seeding

Backends only know about string keys and string values:
  - DatabaseBackend: one row per key in ``storage_entries`` (Flask-SQLAlchemy)
  - MemoryBackend: a plain dict owned by the backend instance

Reads are fail-soft: an absent key, unparseable JSON or a backend error all
yield an empty collection. Writes raise StorageUnavailableError.
"""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from fleet_maintenance.core.exceptions import StorageUnavailableError
from fleet_maintenance.models.constants import COLLECTIONS, SESSION_KEY

logger = logging.getLogger(__name__)


# ── Backends ─────────────────────────────────────────────────────────────────


class MemoryBackend:
    """Process-local dict storage for tests and throwaway sessions."""

    def __init__(self, initial=None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = value

    def remove_item(self, key):
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class DatabaseBackend:
    """Stores each key as a StorageEntry row. Requires an app context."""

    def __init__(self, db):
        self.db = db

    def get_item(self, key):
        from fleet_maintenance.models.storage import StorageEntry
        try:
            entry = self.db.session.get(StorageEntry, key)
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise StorageUnavailableError(key, exc) from exc
        return entry.value if entry is not None else None

    def set_item(self, key, value):
        from fleet_maintenance.models.storage import StorageEntry
        try:
            entry = self.db.session.get(StorageEntry, key)
            if entry is None:
                entry = StorageEntry(key=key, value=value)
                self.db.session.add(entry)
            else:
                entry.value = value
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise StorageUnavailableError(key, exc) from exc

    def remove_item(self, key):
        from fleet_maintenance.models.storage import StorageEntry
        try:
            entry = self.db.session.get(StorageEntry, key)
            if entry is not None:
                self.db.session.delete(entry)
                self.db.session.commit()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise StorageUnavailableError(key, exc) from exc

    def keys(self):
        from fleet_maintenance.models.storage import StorageEntry
        return [row.key for row in self.db.session.query(StorageEntry.key).all()]


def build_backend(name, db=None):
    """Return the backend configured by ``STORAGE_BACKEND``."""
    if name == "memory":
        return MemoryBackend()
    if name == "database":
        if db is None:
            raise ValueError("database storage backend requires a db handle")
        return DatabaseBackend(db)
    raise ValueError(f"Unknown storage backend: {name!r}")


# ── Record store ─────────────────────────────────────────────────────────────


class RecordStore:
    """Typed-collection facade over a string key-value backend."""

    def __init__(self, backend, key_prefix="fleet_"):
        self.backend = backend
        self.key_prefix = key_prefix

    def key_for(self, collection):
        return f"{self.key_prefix}{collection}"

    # ── Raw access ────────────────────────────────────────────────────────

    def _read_json(self, key):
        try:
            raw = self.backend.get_item(key)
        except StorageUnavailableError as exc:
            logger.warning("Storage read failed for %s, treating as empty: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Corrupt JSON under %s, treating as empty", key)
            return None

    def _write_json(self, key, value):
        self.backend.set_item(key, json.dumps(value, ensure_ascii=False))

    # ── Collections ───────────────────────────────────────────────────────

    def get_all(self, collection):
        data = self._read_json(self.key_for(collection))
        if not isinstance(data, list):
            return []
        return data

    def replace_all(self, collection, items):
        self._write_json(self.key_for(collection), list(items))

    def add(self, collection, item):
        """Append ``item``. The caller owns id assignment and uniqueness."""
        items = self.get_all(collection)
        items.append(item)
        self.replace_all(collection, items)
        return item

    def update(self, collection, item_id, partial):
        """Merge ``partial`` into the record with ``item_id``.

        Returns:
            The merged record, or None if no record has that id.
        """
        items = self.get_all(collection)
        for index, item in enumerate(items):
            if item.get("id") == item_id:
                merged = {**item, **partial, "id": item_id}
                items[index] = merged
                self.replace_all(collection, items)
                return merged
        return None

    def delete(self, collection, item_id):
        """Remove the first record with ``item_id``; True if one was removed."""
        items = self.get_all(collection)
        for index, item in enumerate(items):
            if item.get("id") == item_id:
                del items[index]
                self.replace_all(collection, items)
                return True
        return False

    # ── Session slot ──────────────────────────────────────────────────────

    def get_session(self):
        data = self._read_json(self.key_for(SESSION_KEY))
        if not isinstance(data, dict):
            return None
        return data

    def set_session(self, user):
        self._write_json(self.key_for(SESSION_KEY), user)

    def clear_session(self):
        self.backend.remove_item(self.key_for(SESSION_KEY))

    # ── Seeding ───────────────────────────────────────────────────────────

    def ensure_seeded(self, dataset=None):
        """Write default data for every collection whose key is absent.

        Presence of the key is what counts: an existing empty array or even
        corrupt content is never overwritten.

        Returns:
            List of collection names that were seeded.

        Raises:
            StorageUnavailableError: backend could not be read or written.
        """
        if dataset is None:
            from fleet_maintenance.services.seed import default_dataset
            dataset = default_dataset()

        seeded = []
        for collection in COLLECTIONS:
            key = self.key_for(collection)
            if self.backend.get_item(key) is not None:
                continue
            self._write_json(key, dataset.get(collection, []))
            seeded.append(collection)

        if seeded:
            logger.info("Seeded default data for: %s", ", ".join(seeded))
        return seeded
