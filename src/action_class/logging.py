"""Logging configuration for action processes.

Two output styles are supported:

- ``actions``: records are forwarded to the host as workflow commands, so they
  show up as annotations and debug lines in the job log
- ``json``: structured JSON lines on stdout, useful when running locally
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from action_class.host import Host

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ActionsLogHandler(logging.Handler):
    """Forward log records to the host's log channel."""

    def __init__(self, host: Host, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.host = host

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self.host.error(message)
            elif record.levelno >= logging.WARNING:
                self.host.warning(message)
            elif record.levelno >= logging.INFO:
                self.host.info(message)
            else:
                self.host.debug(message)
        except Exception:
            self.handleError(record)


def configure_logging(level: str, fmt: str = "json", host: Host | None = None) -> None:
    """Configure root logging.

    Args:
        level: Root logging level name.
        fmt: ``json`` for JSON lines on stdout, ``actions`` to forward to ``host``.
        host: Host receiving records when ``fmt`` is ``actions``.
    """

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler: logging.Handler
    if fmt == "actions" and host is not None:
        handler = ActionsLogHandler(host)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())
