"""
Dashboard Metrics Service

Aggregates fleet metrics for the dashboard from a snapshot of the current
ships / components / jobs:
  - fleet and component counts
  - job counts per status
  - overdue and upcoming jobs
  - per-engineer job summary
  - most recently touched jobs

Everything is recomputed on each call; nothing is cached across mutations.
"""

import logging
from datetime import timedelta

from fleet_maintenance.models.constants import (
    COMPONENT_NEEDS_MAINTENANCE,
    JOB_CANCELLED,
    JOB_COMPLETED,
    JOB_DELAYED,
    JOB_IN_PROGRESS,
    JOB_OPEN,
    SHIP_ACTIVE,
    SHIP_UNDER_MAINTENANCE,
)
from fleet_maintenance.utils.helpers import parse_datetime, utcnow

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 7


def _count(items, field, value):
    return sum(1 for item in items if item.get(field) == value)


def is_overdue(job, now):
    """Scheduled before ``now`` and not Completed.

    Cancelled jobs DO count as overdue; the dashboard has always counted
    them that way.
    """
    scheduled = parse_datetime(job.get("scheduled_date"))
    return scheduled is not None and scheduled < now and job.get("status") != JOB_COMPLETED


def is_upcoming(job, now, window_days=UPCOMING_WINDOW_DAYS):
    """Scheduled in ``(now, now + window]`` and not Completed."""
    scheduled = parse_datetime(job.get("scheduled_date"))
    if scheduled is None or job.get("status") == JOB_COMPLETED:
        return False
    return now < scheduled <= now + timedelta(days=window_days)


def compute_stats(ships, components, jobs, now=None, window_days=UPCOMING_WINDOW_DAYS):
    """High-level fleet KPIs."""
    now = now or utcnow()
    return {
        "total_ships": len(ships),
        "active_ships": _count(ships, "status", SHIP_ACTIVE),
        "under_maintenance_ships": _count(ships, "status", SHIP_UNDER_MAINTENANCE),
        "total_components": len(components),
        "components_needing_maintenance": _count(components, "status", COMPONENT_NEEDS_MAINTENANCE),
        "open_jobs": _count(jobs, "status", JOB_OPEN),
        "in_progress_jobs": _count(jobs, "status", JOB_IN_PROGRESS),
        "completed_jobs": _count(jobs, "status", JOB_COMPLETED),
        "overdue_jobs": sum(1 for job in jobs if is_overdue(job, now)),
        "upcoming_jobs": sum(1 for job in jobs if is_upcoming(job, now, window_days)),
    }


def engineer_summary(jobs, engineer_id):
    """Job counts per status for the jobs assigned to one engineer."""
    mine = [job for job in jobs if job.get("assigned_engineer_id") == engineer_id]
    return {
        "total": len(mine),
        "open": _count(mine, "status", JOB_OPEN),
        "in_progress": _count(mine, "status", JOB_IN_PROGRESS),
        "completed": _count(mine, "status", JOB_COMPLETED),
        "delayed": _count(mine, "status", JOB_DELAYED),
        "cancelled": _count(mine, "status", JOB_CANCELLED),
    }


def recent_jobs(jobs, limit=5):
    """Jobs ordered by ``updated_at``, newest first."""
    def _key(job):
        updated = parse_datetime(job.get("updated_at"))
        return updated.timestamp() if updated else float("-inf")

    return sorted(jobs, key=_key, reverse=True)[:limit]
