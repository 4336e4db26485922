"""Ship service — fleet CRUD with IMO invariant and cascade delete.

Deleting a ship purges its components (and, through the component
service's own cascade, their jobs) before the ship itself is removed.
"""
import logging
import re

from fleet_maintenance.core.exceptions import ValidationError
from fleet_maintenance.models.constants import IMO_PATTERN, SHIPS
from fleet_maintenance.services.base import CollectionService

logger = logging.getLogger(__name__)

_IMO_RE = re.compile(IMO_PATTERN)


def validate_imo(imo):
    """Raise ValidationError unless ``imo`` is exactly seven digits."""
    if not isinstance(imo, str) or not _IMO_RE.match(imo):
        raise ValidationError("IMO number must be exactly 7 digits", details={"imo": imo})


class ShipService(CollectionService):
    collection = SHIPS
    resource = "ships"
    id_prefix = "s"

    def create(self, data):
        """Create a ship. Admin only.

        Returns:
            The stored ship including its generated id.
        """
        self._require("create")
        validate_imo(data.get("imo"))
        ship = self._insert(data)
        logger.info("Created ship %s (%s)", ship["id"], ship.get("name"),
                    extra={"resource": self.resource, "entity_id": ship["id"]})
        return ship

    def update(self, ship_id, partial):
        """Merge ``partial`` into a ship. Returns None if the ship is missing."""
        self._require("edit")
        if "imo" in partial:
            validate_imo(partial["imo"])
        ship = self._merge(ship_id, partial)
        if ship is not None:
            logger.info("Updated ship %s: %s", ship_id, sorted(partial))
        return ship

    def delete(self, ship_id):
        return self._delete(ship_id)

    def search(self, term):
        """Case-insensitive match on name and flag; substring match on IMO."""
        if not term:
            return self.list()
        needle = term.lower()
        return [
            dict(ship) for ship in self._items
            if needle in (ship.get("name") or "").lower()
            or term in (ship.get("imo") or "")
            or needle in (ship.get("flag") or "").lower()
        ]
