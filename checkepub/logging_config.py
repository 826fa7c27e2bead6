"""Structured JSON logging configuration for checkepub."""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime, timezone

from checkepub.config import SERVICE_ID, get_log_level


class StructuredFormatter(logging.Formatter):
    """Format log records as structured JSON events.

    Records emitted off the main thread (the base64 encoder worker, or a
    check running in a thread pool) carry a ``thread`` field so events from
    concurrent checks can be told apart.
    """

    _DEFAULT_KEYS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__)

    def format(self, record: logging.LogRecord) -> str:
        event = {
            "service_id": SERVICE_ID,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "event": record.getMessage(),
            "logger": record.name,
        }

        if record.threadName and record.threadName != threading.main_thread().name:
            event["thread"] = record.threadName

        # Merge extra fields (passed via logger.info("msg", extra={...}))
        for key, value in record.__dict__.items():
            if key not in self._DEFAULT_KEYS and key not in event:
                event[key] = value

        if record.exc_info and record.exc_info[1]:
            event["exception"] = self.formatException(record.exc_info)

        return json.dumps(event, default=str)


def configure_logging(level: str | None = None, *, verbose: bool = False) -> None:
    """Send structured JSON logs to stderr; stdout carries the check result.

    Args:
        level: Root log level name. Defaults to ``LOG_LEVEL`` from the
            environment; unknown names fall back to WARNING.
        verbose: Log at DEBUG and let httpx report each request it sends.
    """
    if verbose:
        level = "DEBUG"
    elif level is None:
        level = get_log_level()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
