"""Job service — scheduled maintenance work on ship components.

Access rules on top of the policy table:
  - an Engineer may only edit jobs assigned to them; this check runs
    before the generic jobs/edit check and raises UnauthorizedError too

Post-commit hooks (``post_commit_hooks``), run in order after every create
and update has been persisted, each called as ``hook(previous, current)``
with ``previous=None`` on create:
  1. complete_component — transition to Completed marks the component
     Operational and stamps its last maintenance date
  2. emit_notification — job_created on create; job_completed or
     job_updated when the status changed
"""
import logging

from fleet_maintenance.core.exceptions import UnauthorizedError, ValidationError
from fleet_maintenance.models.constants import (
    JOB_COMPLETED,
    JOBS,
    NOTIFY_JOB_COMPLETED,
    NOTIFY_JOB_CREATED,
    NOTIFY_JOB_UPDATED,
    ROLE_ENGINEER,
)
from fleet_maintenance.services.base import CollectionService
from fleet_maintenance.utils.helpers import isoformat_now

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = ("id", "created_at")


def status_changed(previous, current):
    return previous is not None and previous.get("status") != current.get("status")


class JobService(CollectionService):
    collection = JOBS
    resource = "jobs"
    id_prefix = "j"

    def __init__(self, store, session, ships, components, users, notifications):
        super().__init__(store, session)
        self.ships = ships
        self.components = components
        self.users = users
        self.notifications = notifications
        components.register_cascade(self._purge_for_components)
        components.register_relocation(self._follow_component)
        self.post_commit_hooks = [self.complete_component, self.emit_notification]

    # ── Lookups ───────────────────────────────────────────────────────────

    def list_for_ship(self, ship_id):
        return self._filter_by("ship_id", ship_id)

    def list_for_component(self, component_id):
        return self._filter_by("component_id", component_id)

    def list_for_engineer(self, engineer_id):
        return self._filter_by("assigned_engineer_id", engineer_id)

    def filter(self, search=None, ship_id=None, status=None, priority=None,
               component_id=None, engineer_id=None):
        """Subset of jobs matching every given criterion.

        ``search`` matches the component name, the ship name or the job
        description, case-insensitively.
        """
        needle = search.lower() if search else None
        result = []
        for job in self._items:
            if needle and not self._matches_search(job, needle):
                continue
            if ship_id and job.get("ship_id") != ship_id:
                continue
            if status and job.get("status") != status:
                continue
            if priority and job.get("priority") != priority:
                continue
            if component_id and job.get("component_id") != component_id:
                continue
            if engineer_id and job.get("assigned_engineer_id") != engineer_id:
                continue
            result.append(dict(job))
        return result

    def _matches_search(self, job, needle):
        component = self.components.get_by_id(job.get("component_id")) or {}
        ship = self.ships.get_by_id(job.get("ship_id")) or {}
        haystacks = (component.get("name"), ship.get("name"), job.get("description"))
        return any(needle in value.lower() for value in haystacks if value)

    # ── Validation ────────────────────────────────────────────────────────

    def _check_references(self, job):
        component = self.components.get_by_id(job.get("component_id"))
        if component is None:
            raise ValidationError(
                f"Component {job.get('component_id')} does not exist",
                details={"component_id": job.get("component_id")},
            )
        if job.get("ship_id") != component.get("ship_id"):
            raise ValidationError(
                "Job ship must be the component's ship",
                details={"ship_id": job.get("ship_id"), "component_ship_id": component.get("ship_id")},
            )
        engineer = self.users.get_by_id(job.get("assigned_engineer_id"))
        if engineer is None or engineer.get("role") != ROLE_ENGINEER:
            raise ValidationError(
                "Jobs must be assigned to an engineer",
                details={"assigned_engineer_id": job.get("assigned_engineer_id")},
            )

    def _check_ownership(self, job_id):
        user = self.session.current_user
        if not user or user.get("role") != ROLE_ENGINEER:
            return
        job = self.get_by_id(job_id)
        if job is None or job.get("assigned_engineer_id") != user.get("id"):
            logger.warning("Engineer %s tried to edit job %s not assigned to them", user.get("id"), job_id)
            raise UnauthorizedError(
                "jobs", "edit", ROLE_ENGINEER,
                reason="Unauthorized: You can only update jobs assigned to you",
            )

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, data):
        """Create a job, stamping created_at/updated_at. Admin or Inspector.

        ``completed_date`` is stamped only for jobs created as Completed; a
        caller-supplied value is dropped.
        """
        self._require("create")
        data = dict(data)
        if not data.get("ship_id"):
            component = self.components.get_by_id(data.get("component_id")) or {}
            data["ship_id"] = component.get("ship_id")
        self._check_references(data)

        now = isoformat_now()
        data["created_at"] = now
        data["updated_at"] = now
        data.pop("completed_date", None)
        if data.get("status") == JOB_COMPLETED:
            data["completed_date"] = now
        job = self._insert(data)
        logger.info("Created job %s on component %s", job["id"], job.get("component_id"),
                    extra={"resource": self.resource, "entity_id": job["id"]})
        self._run_hooks(None, job)
        return job

    def update(self, job_id, partial):
        """Merge ``partial`` into a job and run post-commit hooks.

        ``completed_date`` is only written when the status moves to
        Completed; a value supplied in ``partial`` is ignored otherwise.

        Returns:
            The updated job, or None if it does not exist.
        """
        self._check_ownership(job_id)
        self._require("edit")
        previous = self.get_by_id(job_id)
        if previous is None:
            return None

        changes = {k: v for k, v in partial.items() if k not in _IMMUTABLE_FIELDS}
        changes.pop("completed_date", None)
        if any(field in changes for field in ("component_id", "ship_id", "assigned_engineer_id")):
            self._check_references({**previous, **changes})

        now = isoformat_now()
        changes["updated_at"] = now
        if changes.get("status") == JOB_COMPLETED and previous.get("status") != JOB_COMPLETED:
            changes["completed_date"] = now

        job = self._merge(job_id, changes)
        if job is None:
            return None
        logger.info("Updated job %s: %s", job_id, sorted(partial))
        self._run_hooks(previous, job)
        return job

    def update_status(self, job_id, status):
        return self.update(job_id, {"status": status})

    def delete(self, job_id):
        return self._delete(job_id)

    # ── Post-commit hooks ─────────────────────────────────────────────────

    def _run_hooks(self, previous, current):
        for hook in self.post_commit_hooks:
            hook(previous, current)

    def complete_component(self, previous, current):
        if not status_changed(previous, current) or current.get("status") != JOB_COMPLETED:
            return
        self.components.record_maintenance(current.get("component_id"), current.get("completed_date"))

    def emit_notification(self, previous, current):
        ship = self.ships.get_by_id(current.get("ship_id")) or {}
        component = self.components.get_by_id(current.get("component_id")) or {}
        target = f"{ship.get('name', 'Unknown ship')} - {component.get('name', 'Unknown component')}"

        if previous is None:
            self.notifications.create(
                NOTIFY_JOB_CREATED,
                f"New {current.get('type')} job created for {target}",
                related_id=current["id"],
            )
        elif status_changed(previous, current):
            if current.get("status") == JOB_COMPLETED:
                self.notifications.create(
                    NOTIFY_JOB_COMPLETED,
                    f"Maintenance job completed for {target}",
                    related_id=current["id"],
                )
            else:
                self.notifications.create(
                    NOTIFY_JOB_UPDATED,
                    f"Job status updated to {current.get('status')} for {target}",
                    related_id=current["id"],
                )

    # ── Cascade ───────────────────────────────────────────────────────────

    def _purge_for_components(self, component_ids):
        self._purge([j["id"] for j in self._items if j.get("component_id") in component_ids])

    def _follow_component(self, component_id, field, value):
        """Keep a moved component's jobs on the component's ship."""
        if field != "ship_id":
            return
        now = isoformat_now()
        for job in self._filter_by("component_id", component_id):
            if job.get("ship_id") != value:
                self._merge(job["id"], {"ship_id": value, "updated_at": now})
                logger.info("Job %s follows component %s to ship %s", job["id"], component_id, value)
