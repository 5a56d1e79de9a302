"""
Structured logging for exclusion events.

Outputs one JSON object per excluded field on the
``versionator.exclusions`` logger, so exclusion decisions can be grepped
or shipped to a log store alongside the service that serves the schema.

Usage:
    from versionator.logger import ExclusionLogger

    log = ExclusionLogger(service_name="orders-api")
    log.log_field_excluded(since="2.0", requested="1.0", until="9999", path="address.zip")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from versionator.config import VersionatorConfig, get_config

EXCLUSION_LOGGER_NAME = "versionator.exclusions"

_exclusion_logger = logging.getLogger(EXCLUSION_LOGGER_NAME)
_exclusion_logger.setLevel(logging.INFO)

# Default handler outputs JSON lines to stderr, keeping stdout for results
if not _exclusion_logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _exclusion_logger.addHandler(handler)
_exclusion_logger.propagate = False

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(config: Optional[VersionatorConfig] = None) -> None:
    """Apply the configured level and format to the ``versionator`` logger."""
    if config is None:
        config = get_config()

    root = logging.getLogger("versionator")
    root.setLevel(config.log_level.upper())

    handler = logging.StreamHandler(sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root.handlers = [handler]


class ExclusionLogger:
    """
    Structured logger for exclusion events.

    Each entry carries the service name, the event type, and the
    event-specific attributes.
    """

    def __init__(
        self,
        service_name: str = "versionator",
        extra_labels: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize exclusion logger.

        Args:
            service_name: Service name for log attribution
            extra_labels: Additional labels attached to every entry
        """
        self.service_name = service_name
        self.extra_labels = extra_labels or {}
        self._logger = _exclusion_logger

    def _emit(self, event: str, **extra_fields: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": "info",
            "event": event,
            "service": self.service_name,
        }
        entry.update(extra_fields)

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        log_line = json.dumps(entry, default=str)

        self._logger.info(log_line)

    def log_field_excluded(
        self,
        since: str,
        requested: str,
        until: str,
        path: str,
    ) -> None:
        """Log a field excluded at the requested version."""
        self._emit(
            event="field.excluded",
            since=since,
            requested=requested,
            until=until,
            path=path,
        )

