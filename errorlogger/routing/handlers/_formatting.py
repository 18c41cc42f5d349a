"""Shared formatting helpers for the notification handlers."""

from __future__ import annotations

import logging

_LEVEL_COLORS: dict[int, str] = {
    logging.CRITICAL: "danger",
    logging.ERROR: "danger",
    logging.WARNING: "warning",
    logging.INFO: "good",
}
_DEFAULT_COLOR = "#e3e4e6"


def level_color(record: logging.LogRecord) -> str:
    """Return the Slack attachment color for the record's level.

    >>> level_color(logging.makeLogRecord({"levelno": logging.ERROR}))
    'danger'
    """
    for levelno in sorted(_LEVEL_COLORS, reverse=True):
        if record.levelno >= levelno:
            return _LEVEL_COLORS[levelno]
    return _DEFAULT_COLOR


def record_attributes(record: logging.LogRecord) -> dict[str, str]:
    """Return the record fields forwarded to remote services."""
    return {
        "message": record.getMessage(),
        "level": record.levelname,
        "logger": record.name,
        "module": record.module,
        "line": str(record.lineno),
    }
