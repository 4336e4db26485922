"""Component service — installed equipment per ship.

- create/update: Admin or Inspector; ``ship_id`` must name an existing ship
- delete: Admin; purges the component's jobs first
- moving to another ship carries the component's jobs along
- record_maintenance: internal side effect of a job being completed
"""
import logging

from fleet_maintenance.core.exceptions import ValidationError
from fleet_maintenance.models.constants import COMPONENT_OPERATIONAL, COMPONENTS
from fleet_maintenance.services.base import CollectionService

logger = logging.getLogger(__name__)


class ComponentService(CollectionService):
    collection = COMPONENTS
    resource = "components"
    id_prefix = "c"

    def __init__(self, store, session, ships):
        super().__init__(store, session)
        self.ships = ships
        ships.register_cascade(self._purge_for_ships)

    def list_for_ship(self, ship_id):
        return self._filter_by("ship_id", ship_id)

    def _check_ship(self, ship_id):
        if self.ships.get_by_id(ship_id) is None:
            raise ValidationError(f"Ship {ship_id} does not exist", details={"ship_id": ship_id})

    def create(self, data):
        self._require("create")
        self._check_ship(data.get("ship_id"))
        component = self._insert(data)
        logger.info("Created component %s on ship %s", component["id"], component.get("ship_id"),
                    extra={"resource": self.resource, "entity_id": component["id"]})
        return component

    def update(self, component_id, partial):
        """Merge ``partial`` into a component. Returns None if missing."""
        self._require("edit")
        previous = self._find(component_id)
        if previous is None:
            return None
        if "ship_id" in partial:
            self._check_ship(partial["ship_id"])
        moved = "ship_id" in partial and partial["ship_id"] != previous.get("ship_id")

        component = self._merge(component_id, partial)
        if component is None:
            return None
        logger.info("Updated component %s: %s", component_id, sorted(partial))
        if moved:
            logger.info("Component %s moved to ship %s", component_id, component["ship_id"],
                        extra={"resource": self.resource, "entity_id": component_id})
            self._run_relocation(component_id, "ship_id", component["ship_id"])
        return component

    def delete(self, component_id):
        return self._delete(component_id)

    def record_maintenance(self, component_id, when):
        """Mark a component freshly maintained. No permission check.

        Called from the job completion hook, which may run on behalf of an
        Engineer who cannot edit components directly.
        """
        component = self._merge(component_id, {
            "last_maintenance_date": when,
            "status": COMPONENT_OPERATIONAL,
        })
        if component is None:
            logger.warning("Completed job references missing component %s", component_id)
        return component

    def filter(self, search=None, ship_id=None, category=None, status=None):
        """Subset of components matching every given criterion."""
        needle = search.lower() if search else None
        result = []
        for component in self._items:
            if needle and needle not in (component.get("name") or "").lower() \
                    and needle not in (component.get("serial_number") or "").lower():
                continue
            if ship_id and component.get("ship_id") != ship_id:
                continue
            if category and component.get("category") != category:
                continue
            if status and component.get("status") != status:
                continue
            result.append(dict(component))
        return result

    def _purge_for_ships(self, ship_ids):
        self._purge([c["id"] for c in self._items if c.get("ship_id") in ship_ids])
