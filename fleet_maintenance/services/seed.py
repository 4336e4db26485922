"""
Default dataset written on first run.

Three users (one per role), two ships, three components and three jobs
forming a consistent graph: every component points at a seeded ship, every
job at a seeded component of the same ship and at the seeded engineer.
Job dates are relative to the moment of seeding.
"""

from datetime import timedelta

from fleet_maintenance.models.constants import (
    COMPONENTS,
    JOBS,
    NOTIFICATIONS,
    NOTIFY_COMPONENT_ALERT,
    NOTIFY_JOB_CREATED,
    NOTIFY_JOB_UPDATED,
    SHIPS,
    USERS,
)
from fleet_maintenance.utils.helpers import utcnow


def default_users():
    return [
        {"id": "1", "role": "Admin", "email": "admin@entnt.in", "password": "admin123", "name": "Admin User"},
        {"id": "2", "role": "Inspector", "email": "inspector@entnt.in", "password": "inspect123",
         "name": "Inspector User"},
        {"id": "3", "role": "Engineer", "email": "engineer@entnt.in", "password": "engine123",
         "name": "Engineer User"},
    ]


def default_ships():
    return [
        {
            "id": "s1",
            "name": "Ever Given",
            "imo": "9811000",
            "flag": "Panama",
            "status": "Active",
            "registration_date": "2018-05-15",
            "last_inspection_date": "2024-01-20",
            "capacity": 20124,
            "description": "Container ship operated by Evergreen Marine",
        },
        {
            "id": "s2",
            "name": "Maersk Alabama",
            "imo": "9164263",
            "flag": "USA",
            "status": "Under Maintenance",
            "registration_date": "2010-03-08",
            "last_inspection_date": "2023-11-15",
            "capacity": 1092,
            "description": "Container ship operated by Maersk Line Limited",
        },
    ]


def default_components():
    return [
        {
            "id": "c1",
            "ship_id": "s1",
            "name": "Main Engine",
            "serial_number": "ME-1234",
            "install_date": "2020-01-10",
            "last_maintenance_date": "2024-03-12",
            "status": "Operational",
            "manufacturer": "Wärtsilä",
            "category": "Engine",
            "next_maintenance_date": "2024-09-12",
            "description": "MAN B&W 11G95ME-C9 two-stroke diesel engine",
        },
        {
            "id": "c2",
            "ship_id": "s1",
            "name": "Radar System",
            "serial_number": "RAD-5678",
            "install_date": "2021-07-18",
            "last_maintenance_date": "2023-12-01",
            "status": "Needs Maintenance",
            "manufacturer": "Furuno",
            "category": "Navigation",
            "next_maintenance_date": "2024-06-01",
            "description": "X-band radar system with ARPA functionality",
        },
        {
            "id": "c3",
            "ship_id": "s2",
            "name": "Auxiliary Generator",
            "serial_number": "AG-9012",
            "install_date": "2019-05-20",
            "last_maintenance_date": "2024-02-15",
            "status": "Operational",
            "manufacturer": "Caterpillar",
            "category": "Electrical",
            "next_maintenance_date": "2024-08-15",
            "description": "Diesel generator providing auxiliary power",
        },
    ]


def default_jobs(now=None):
    now = now or utcnow()
    current = now.isoformat()
    next_week = (now + timedelta(days=7)).isoformat()
    last_week = (now - timedelta(days=7)).isoformat()
    return [
        {
            "id": "j1",
            "component_id": "c1",
            "ship_id": "s1",
            "type": "Inspection",
            "priority": "High",
            "status": "Open",
            "assigned_engineer_id": "3",
            "scheduled_date": next_week,
            "description": "Regular inspection of main engine",
            "estimated_duration": 4,
            "created_at": current,
            "updated_at": current,
        },
        {
            "id": "j2",
            "component_id": "c2",
            "ship_id": "s1",
            "type": "Maintenance",
            "priority": "Medium",
            "status": "In Progress",
            "assigned_engineer_id": "3",
            "scheduled_date": current,
            "description": "Calibration of radar system",
            "estimated_duration": 2,
            "created_at": last_week,
            "updated_at": current,
        },
        {
            "id": "j3",
            "component_id": "c3",
            "ship_id": "s2",
            "type": "Repair",
            "priority": "Critical",
            "status": "In Progress",
            "assigned_engineer_id": "3",
            "scheduled_date": last_week,
            "description": "Fix auxiliary generator malfunction",
            "estimated_duration": 8,
            "created_at": last_week,
            "updated_at": current,
        },
    ]


def default_notifications(now=None):
    current = (now or utcnow()).isoformat()
    return [
        {
            "id": "n1",
            "type": NOTIFY_JOB_CREATED,
            "message": "New maintenance job created for Ever Given - Main Engine",
            "read": False,
            "created_at": current,
            "related_id": "j1",
        },
        {
            "id": "n2",
            "type": NOTIFY_JOB_UPDATED,
            "message": "Job status updated to In Progress for Maersk Alabama - Auxiliary Generator",
            "read": False,
            "created_at": current,
            "related_id": "j3",
        },
        {
            "id": "n3",
            "type": NOTIFY_COMPONENT_ALERT,
            "message": "Radar System on Ever Given needs maintenance",
            "read": True,
            "created_at": current,
            "related_id": "c2",
        },
    ]


def default_dataset(now=None):
    """Return ``{collection: [records]}`` for every seeded collection."""
    now = now or utcnow()
    return {
        USERS: default_users(),
        SHIPS: default_ships(),
        COMPONENTS: default_components(),
        JOBS: default_jobs(now),
        NOTIFICATIONS: default_notifications(now),
    }
