"""
Fleet Maintenance Core
Flask Application Factory.

Usage:
    from fleet_maintenance import create_app, get_fleet
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config

    with app.app_context():
        fleet = get_fleet()
        fleet.login("admin@entnt.in", "admin123")
"""

import logging
import os

from flask import Flask, current_app
from flask_migrate import Migrate

from fleet_maintenance.config import config
from fleet_maintenance.logging_config import configure_logging
from fleet_maintenance.models import db

logger = logging.getLogger(__name__)

migrate = Migrate()


def build_fleet(app):
    """Build the store for ``app``'s config, seed it and wire the services.

    Must run inside an app context when the database backend is used.
    """
    from fleet_maintenance.services.fleet import FleetServices
    from fleet_maintenance.services.storage import RecordStore, build_backend

    backend = build_backend(app.config["STORAGE_BACKEND"], db=db)
    store = RecordStore(backend, key_prefix=app.config["STORAGE_KEY_PREFIX"])
    if app.config.get("SEED_DEFAULT_DATA", True):
        store.ensure_seeded()
    return FleetServices(store, upcoming_window_days=app.config["UPCOMING_WINDOW_DAYS"])


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance with the fleet services
        attached as ``app.extensions["fleet"]``.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name])

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    os.makedirs(app.instance_path, exist_ok=True)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)

    # ── Import models so Alembic can detect them ─────────────────────────
    from fleet_maintenance.models import storage as _storage_models  # noqa: F401

    with app.app_context():
        db.create_all()
        app.extensions["fleet"] = build_fleet(app)

    logger.info("Fleet maintenance core ready (config=%s, storage=%s)",
                config_name, app.config["STORAGE_BACKEND"])
    return app


def get_fleet():
    """Fleet services of the current app."""
    return current_app.extensions["fleet"]
