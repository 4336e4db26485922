"""
Fleet services container — the in-process interface used by a UI.

Builds every service around ONE explicitly passed RecordStore and wires the
cascade and hook relationships between them:

    ships ──cascade──▶ components ──cascade──▶ jobs
    jobs ──hooks──▶ components.record_maintenance, notifications.create

Usage:
    store = RecordStore(MemoryBackend())
    store.ensure_seeded()
    fleet = FleetServices(store)
    fleet.login("admin@entnt.in", "admin123")
    fleet.create_ship({...})
"""

import logging

from fleet_maintenance.models.constants import ROLE_ENGINEER
from fleet_maintenance.services import calendar_service, dashboard_service
from fleet_maintenance.services.auth_service import SessionService
from fleet_maintenance.services.component_service import ComponentService
from fleet_maintenance.services.job_service import JobService
from fleet_maintenance.services.notification import NotificationService
from fleet_maintenance.services.ship_service import ShipService
from fleet_maintenance.services.user_service import UserService

logger = logging.getLogger(__name__)


class FleetServices:
    """Owns the session and the domain services for one store."""

    def __init__(self, store, upcoming_window_days=dashboard_service.UPCOMING_WINDOW_DAYS):
        self.store = store
        self.upcoming_window_days = upcoming_window_days
        self.session = SessionService(store)
        self.users = UserService(store, self.session)
        self.notifications = NotificationService(store, self.session)
        self.ships = ShipService(store, self.session)
        self.components = ComponentService(store, self.session, self.ships)
        self.jobs = JobService(
            store, self.session, self.ships, self.components, self.users, self.notifications,
        )
        logger.debug(
            "Fleet services ready: %d ships, %d components, %d jobs",
            len(self.ships.list()), len(self.components.list()), len(self.jobs.list()),
        )

    # ── Session ───────────────────────────────────────────────────────────

    def login(self, email, password):
        return self.session.login(email, password)

    def logout(self):
        self.session.logout()

    @property
    def current_user(self):
        return self.session.current_user

    def check_permission(self, resource, action):
        return self.session.check_permission(resource, action)

    def permissions(self):
        return self.session.permissions()

    # ── Users ─────────────────────────────────────────────────────────────

    def list_users(self):
        return self.users.list()

    def list_engineers(self):
        return self.users.list_engineers()

    # ── Ships ─────────────────────────────────────────────────────────────

    def list_ships(self):
        return self.ships.list()

    def get_ship(self, ship_id):
        return self.ships.get_by_id(ship_id)

    def search_ships(self, term):
        return self.ships.search(term)

    def create_ship(self, data):
        return self.ships.create(data)

    def update_ship(self, ship_id, partial):
        return self.ships.update(ship_id, partial)

    def delete_ship(self, ship_id):
        return self.ships.delete(ship_id)

    # ── Components ────────────────────────────────────────────────────────

    def list_components(self):
        return self.components.list()

    def get_component(self, component_id):
        return self.components.get_by_id(component_id)

    def components_for_ship(self, ship_id):
        return self.components.list_for_ship(ship_id)

    def filter_components(self, **criteria):
        return self.components.filter(**criteria)

    def create_component(self, data):
        return self.components.create(data)

    def update_component(self, component_id, partial):
        return self.components.update(component_id, partial)

    def delete_component(self, component_id):
        return self.components.delete(component_id)

    # ── Jobs ──────────────────────────────────────────────────────────────

    def list_jobs(self):
        return self.jobs.list()

    def get_job(self, job_id):
        return self.jobs.get_by_id(job_id)

    def jobs_for_ship(self, ship_id):
        return self.jobs.list_for_ship(ship_id)

    def jobs_for_component(self, component_id):
        return self.jobs.list_for_component(component_id)

    def jobs_for_engineer(self, engineer_id):
        return self.jobs.list_for_engineer(engineer_id)

    def filter_jobs(self, **criteria):
        return self.jobs.filter(**criteria)

    def create_job(self, data):
        return self.jobs.create(data)

    def update_job(self, job_id, partial):
        return self.jobs.update(job_id, partial)

    def update_job_status(self, job_id, status):
        return self.jobs.update_status(job_id, status)

    def delete_job(self, job_id):
        return self.jobs.delete(job_id)

    # ── Notifications ─────────────────────────────────────────────────────

    def list_notifications(self):
        return self.notifications.list()

    def unread_notifications(self):
        return self.notifications.list_unread()

    def unread_count(self):
        return self.notifications.unread_count()

    def mark_read(self, notification_id):
        return self.notifications.mark_read(notification_id)

    def mark_all_read(self):
        return self.notifications.mark_all_read()

    def dismiss(self, notification_id):
        return self.notifications.dismiss(notification_id)

    def clear_all(self):
        self.notifications.clear_all()

    # ── Dashboard & calendar ──────────────────────────────────────────────

    def compute_dashboard_stats(self, now=None):
        return dashboard_service.compute_stats(
            self.ships.list(), self.components.list(), self.jobs.list(),
            now=now, window_days=self.upcoming_window_days,
        )

    def engineer_summary(self, engineer_id=None):
        """Per-status counts for ``engineer_id`` (defaults to the current user)."""
        if engineer_id is None and self.current_user:
            engineer_id = self.current_user.get("id")
        return dashboard_service.engineer_summary(self.jobs.list(), engineer_id)

    def recent_jobs(self, limit=5):
        return dashboard_service.recent_jobs(self.jobs.list(), limit=limit)

    def calendar_jobs(self):
        """Jobs grouped by scheduled day; Engineers only see their own."""
        jobs = self.jobs.list()
        user = self.current_user
        if user and user.get("role") == ROLE_ENGINEER:
            jobs = [job for job in jobs if job.get("assigned_engineer_id") == user.get("id")]
        return calendar_service.group_jobs_by_date(jobs)
