"""Logging utilities for the secure store."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import orjson

_DEFAULT_LEVEL = os.environ.get("USEC_LOG_LEVEL", "INFO")
CONTEXT_PREFIX = "ctx_"


def log_context(**fields: Any) -> dict[str, Any]:
    """Build ``extra=`` for a log call; the JSON formatter nests these under ``context``."""
    return {f"{CONTEXT_PREFIX}{key}": value for key, value in fields.items()}


def _printable(value: Any) -> Any:
    # orjson rejects strings holding lone surrogates, which app names may carry
    if isinstance(value, str):
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with store context fields grouped."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": _printable(record.getMessage()),
        }
        context = {
            key[len(CONTEXT_PREFIX) :]: _printable(value)
            for key, value in record.__dict__.items()
            if key.startswith(CONTEXT_PREFIX)
        }
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int = _DEFAULT_LEVEL, use_json: bool = True) -> None:
    """Send all logs to stderr, leaving stdout to command output such as a loaded payload."""
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.handlers = [handler]


__all__ = ["JsonFormatter", "configure_logging", "log_context"]
