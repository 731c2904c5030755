from __future__ import annotations

import contextvars
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

_tune_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("tune_context", default={})

# Per-record fields passed through ``extra=`` that belong in the JSON payload.
TUNE_FIELDS = ("strategy", "channel", "attempt", "selector", "url", "session_id")


class ORJSONFormatter(logging.Formatter):
    """One JSON object per record, carrying the active tune context."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - fmt
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_tune_context.get())
        for key in TUNE_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode()


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """Send JSON records to stderr and, optionally, to ``log_file``."""

    root = logging.getLogger()
    root.setLevel(log_level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = ORJSONFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


def set_tune_context(**kwargs: Any) -> contextvars.Token[dict[str, Any]]:
    """Layer channel/strategy metadata over the current context.

    Returns the token to hand to :func:`reset_tune_context`.
    """

    return _tune_context.set({**_tune_context.get(), **kwargs})


def reset_tune_context(token: contextvars.Token[dict[str, Any]]) -> None:
    _tune_context.reset(token)
