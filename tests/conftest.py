"""
Shared pytest fixtures for the fleet maintenance test suite.

Provides:
    - app: Flask application (session-scoped, in-memory SQLite)
    - session: Per-test app context with freshly recreated tables (autouse)
    - store: RecordStore on the database backend, seeded with default data
    - fleet: FleetServices wired around ``store``, nobody logged in
    - admin / inspector / engineer: ``fleet`` with that role logged in
    - login_as: helper logging one of the seeded users into any FleetServices
"""

import pytest

from fleet_maintenance import create_app
from fleet_maintenance.models import db as _db
from fleet_maintenance.services.fleet import FleetServices
from fleet_maintenance.services.storage import DatabaseBackend, RecordStore

CREDENTIALS = {
    "Admin": ("admin@entnt.in", "admin123"),
    "Inspector": ("inspector@entnt.in", "inspect123"),
    "Engineer": ("engineer@entnt.in", "engine123"),
}


def _login_as(fleet, role):
    """Log the seeded user with ``role`` into ``fleet`` and return the user."""
    fleet.logout()
    email, password = CREDENTIALS[role]
    return fleet.login(email, password)


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(autouse=True)
def session(app):
    """Per-test: open app context on empty tables, rollback afterwards."""
    with app.app_context():
        _db.drop_all()
        _db.create_all()
        yield
        _db.session.rollback()


# ── Store & services ─────────────────────────────────────────────────────


@pytest.fixture()
def store():
    """Seeded record store on the database backend."""
    s = RecordStore(DatabaseBackend(_db))
    s.ensure_seeded()
    return s


@pytest.fixture()
def fleet(store):
    """Fleet services with no active session."""
    return FleetServices(store)


@pytest.fixture()
def login_as():
    """The login helper, for tests that build their own FleetServices."""
    return _login_as


@pytest.fixture()
def admin(fleet):
    _login_as(fleet, "Admin")
    return fleet


@pytest.fixture()
def inspector(fleet):
    _login_as(fleet, "Inspector")
    return fleet


@pytest.fixture()
def engineer(fleet):
    _login_as(fleet, "Engineer")
    return fleet
