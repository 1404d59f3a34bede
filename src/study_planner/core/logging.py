"""Structured JSON logging for the study planner service."""

from __future__ import annotations

import json
import logging
import logging.config
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import UNBOUND, get_request_id, get_user_id

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_STANDARD_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}
_CONTEXT_ATTRS = ("request_id", "user_id")
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonLogFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def __init__(self, *, static_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self._static_fields,
        }
        for attr in _CONTEXT_ATTRS:
            entry[attr] = getattr(record, attr, UNBOUND)
        for key, value in record.__dict__.items():
            if key in _STANDARD_RECORD_ATTRS or key in entry:
                continue
            entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Copy the request correlation id and the caller id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = get_request_id()
        record.user_id = get_user_id()
        return True


def configure_logging(settings: Settings) -> None:
    """Route the root, server and driver loggers to one JSON stdout handler."""

    level = logging.getLevelNamesMapping().get(settings.log_level, logging.INFO)
    logging.captureWarnings(True)

    server_loggers = {
        name: {"handlers": ["stdout"], "level": level, "propagate": False}
        for name in _SERVER_LOGGERS
    }
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "static_fields": {
                        "service": settings.project_name,
                        "environment": settings.environment,
                        "version": settings.version,
                    },
                }
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                    "filters": ["request_context"],
                    "level": level,
                }
            },
            "root": {"handlers": ["stdout"], "level": level},
            "loggers": {
                **server_loggers,
                # The driver logs every command at DEBUG.
                "pymongo": {"level": max(level, logging.INFO)},
                "passlib": {"level": logging.ERROR},
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestContextFilter", "configure_logging"]
