"""
Structured Logging
==================

JSON logging on stdout with a per-request correlation ID, plus the
minimal logger interface accepted by the Missive client.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional, Protocol
from uuid import uuid4

SERVICE_NAME = "missive-drafts"

# Correlation ID of the HTTP request being served, if any
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(),
            "severity": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id

        entry.update(getattr(record, "fields", {}))

        if record.exc_info:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(entry, default=str, ensure_ascii=False)


class InfoLogger(Protocol):
    """Anything with an ``info`` method can receive the delivery summary."""

    def info(self, message: str) -> Any:
        ...


class NullLogger:
    """Logger that discards everything, used when none is injected."""

    def info(self, message: str, **kwargs: Any) -> None:
        pass


class StructuredLogger:
    """
    Logger taking structured fields as keyword arguments.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Draft created", to_email="jane@example.com")
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(JsonFormatter())
            self._logger.addHandler(handler)
            self._logger.propagate = False

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._logger.log(level, message, exc_info=exc_info, extra={"fields": fields})

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module."""
    return StructuredLogger(name)


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the correlation ID for the current context.

    Args:
        request_id: Incoming ID. A new UUID is generated when empty.

    Returns:
        The request ID that was set.
    """
    rid = request_id or str(uuid4())
    request_id_var.set(rid)
    return rid


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()
