"""Structured Logging - JSON formatter and setup for graphload's log records.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Traversal extra fields (entity_type, relationship, depth, ...) surfaced when present
    - JSON format by default, human-readable on request

Design Decisions:
    - JSONFormatter on the standard library: no logging dependency forced on host apps
    - setup_logging is opt-in; the library itself only creates module loggers
    - configure_logging reads level and format from Settings for hosts without their own setup
"""

import logging
import json
from datetime import datetime, timezone

from graphload.config import Settings, get_settings

_EXTRA_FIELDS = (
    "entity_type", "relationship", "depth", "error_code", "roots",
    "entities_visited", "collections_loaded", "references_loaded",
    "revisits_skipped",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a handler to the graphload logger and return it."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    package_logger = logging.getLogger("graphload")
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """setup_logging driven by GRAPHLOAD_LOG_LEVEL / GRAPHLOAD_LOG_FORMAT."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
