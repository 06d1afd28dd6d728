"""Lightweight logging configuration utilities."""
from __future__ import annotations

import logging
import sys

_STANDARD_LOG_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends log-record extras to the output."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_LOG_ATTRS and not key.startswith("_")
        }
        if extras:
            formatted = f"{formatted} | {extras}"
        return formatted


def configure_logging(level: str = "INFO") -> None:
    """Configure root logger for CLI applications.

    Records go to stderr; stdout is reserved for the verdict.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ExtraFormatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
