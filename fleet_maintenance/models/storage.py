"""
Fleet Maintenance Core
Key-value storage model.

Models:
    - StorageEntry: one row per storage key holding a JSON document
"""

from datetime import datetime, timezone

from fleet_maintenance.models import db


class StorageEntry(db.Model):
    """
    Named string-keyed entry.

    Each collection (users, ships, ...) and the session slot is one row;
    ``value`` holds the serialised JSON document for that key.
    """

    __tablename__ = "storage_entries"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False, default="")
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<StorageEntry {self.key}: {len(self.value or '')} bytes>"
