"""
Structured logging configuration.

- Development / testing: one-line colored output
- Production: JSON lines
- Log level: LOG_LEVEL env variable

Services attach context through ``extra=``; the fields they emit are
``resource``, ``action``, ``role`` and ``entity_id``.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

SERVICE_FIELDS = ("resource", "action", "role", "entity_id")


def service_context(record: logging.LogRecord) -> dict:
    """The service fields present on ``record``."""
    return {
        key: getattr(record, key)
        for key in SERVICE_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(service_context(record))
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ReadableFormatter(logging.Formatter):
    """Colored single-line formatter, e.g. ``12:00:01 INFO  ...: msg [ships/s1]``."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        context = service_context(record)
        tag = "/".join(
            str(context[key]) for key in ("resource", "action", "entity_id") if key in context
        )
        suffix = f" [{tag}]" if tag else ""
        color = self.COLORS.get(record.levelname, "")
        line = (f"{color}{datetime.now():%H:%M:%S} {record.levelname:<8}{self.RESET} "
                f"{record.name}: {record.getMessage()}{suffix}")
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(app):
    """
    Install a single stderr handler on the root logger.

    JSON in production, readable otherwise. LOG_LEVEL defaults to INFO in
    production and DEBUG elsewhere.
    """
    is_testing = app.config.get("TESTING", False)
    is_prod = not app.config.get("DEBUG", False) and not is_testing

    level_name = os.getenv("LOG_LEVEL", "INFO" if is_prod else "DEBUG")
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if is_prod else ReadableFormatter())
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for noisy in ("werkzeug", "sqlalchemy.engine", "alembic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    app.logger.setLevel(level)
