"""Shared utility functions.

utcnow:          single clock used by services (patched in tests)
parse_datetime:  ISO date / datetime string -> aware datetime, None on bad input
new_id:          prefixed unique identifier for new records
"""
import logging
import uuid
from datetime import date, datetime, timezone

logger = logging.getLogger(__name__)


def utcnow():
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_now():
    return utcnow().isoformat()


def parse_datetime(value):
    """Parse an ISO date or datetime string to an aware datetime.

    Returns None for empty/invalid input. Supports:
    - YYYY-MM-DD (midnight UTC)
    - YYYY-MM-DDTHH:MM:SS[.ffffff][+HH:MM]
    - trailing 'Z' as UTC
    Naive values are taken to be UTC.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except (ValueError, TypeError):
            logger.debug("Unparseable datetime value: %r", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def new_id(prefix):
    """Return ``prefix`` followed by a random hex suffix (e.g. ``s3f9a0c1b2d4e``)."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"
