"""Calendar helpers — group scheduled jobs by day for month/week views.

Rendering the grid is the presentation layer's business; this module only
supplies the days and the jobs that fall on them.
"""
import calendar
from datetime import date, timedelta

from fleet_maintenance.utils.helpers import parse_datetime

MAINTENANCE_INTERVAL_MONTHS = 6


def _scheduled_day(job):
    scheduled = parse_datetime(job.get("scheduled_date"))
    return scheduled.date() if scheduled else None


def group_jobs_by_date(jobs):
    """Return ``{"YYYY-MM-DD": [job, ...]}`` keyed by the UTC scheduled day."""
    grouped: dict[str, list[dict]] = {}
    for job in jobs:
        day = _scheduled_day(job)
        if day is None:
            continue
        grouped.setdefault(day.isoformat(), []).append(job)
    return grouped


def jobs_between(jobs, start, end):
    """Jobs scheduled on any day from ``start`` to ``end`` inclusive."""
    result = []
    for job in jobs:
        day = _scheduled_day(job)
        if day is not None and start <= day <= end:
            result.append(job)
    return result


def month_days(year, month):
    days_in_month = calendar.monthrange(year, month)[1]
    return [date(year, month, day) for day in range(1, days_in_month + 1)]


def week_days(start):
    """Seven consecutive days beginning at ``start``."""
    return [start + timedelta(days=offset) for offset in range(7)]


def week_start(day):
    """Sunday on or before ``day`` (weeks run Sunday to Saturday)."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def next_maintenance_date(last_maintenance_date, months=MAINTENANCE_INTERVAL_MONTHS):
    """Last maintenance plus ``months``, clamped to the end of shorter months.

    Returns an ISO date string, or None if the input cannot be parsed.
    """
    last = parse_datetime(last_maintenance_date)
    if last is None:
        return None
    month_index = last.month - 1 + months
    year = last.year + month_index // 12
    month = month_index % 12 + 1
    day = min(last.day, calendar.monthrange(year, month)[1])
    return date(year, month, day).isoformat()
