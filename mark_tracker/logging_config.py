"""Structured JSON logging configuration for the mark tracker."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from mark_tracker.config import SERVICE_ID


class StructuredFormatter(logging.Formatter):
    """Format log records as structured JSON events."""

    _DEFAULT_KEYS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message"}

    def format(self, record: logging.LogRecord) -> str:
        event = {
            "service_id": SERVICE_ID,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "event": record.getMessage(),
            "logger": record.name,
        }

        # Merge extra fields (passed via logger.info("msg", extra={...}))
        for key, value in record.__dict__.items():
            if key not in self._DEFAULT_KEYS and key not in event:
                event[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            event["exception"] = self.formatException(record.exc_info)

        return json.dumps(event, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the process.

    Records go to stderr, keeping stdout for command output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
