"""
Log formatters for keypage.

Both formatters know two groups of structured fields: request context
(``request_id``, ``trace_id``, ``route``) and the page summary the service
attaches to every served page. Anything else passed as an extra lands under
``extra``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = ("request_id", "trace_id", "route")

PAGE_FIELDS = (
    "direction",
    "page_size",
    "item_count",
    "has_more_scanned",
    "has_next",
    "has_previous",
    "duration_ms",
)

# Attributes every LogRecord carries
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def split_record(record: logging.LogRecord) -> tuple[dict, dict, dict]:
    """Return the (context, page, extra) fields attached to a record."""
    context: dict[str, Any] = {}
    page: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _RECORD_ATTRS or key.startswith("_") or value is None:
            continue
        if key in CONTEXT_FIELDS:
            context[key] = value
        elif key in PAGE_FIELDS:
            page[key] = value
        else:
            extra[key] = value
    return context, page, extra


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Example output:
        {"timestamp": "...", "level": "DEBUG", "logger": "keypage.service",
         "message": "Page fetched", "request_id": "abc",
         "page": {"direction": "next", "item_count": 10, ...}}
    """

    def __init__(self, include_extra: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        context, page, extra = split_record(record)
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **context,
        }
        if page:
            entry["page"] = page
        if extra and self.include_extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """
    Single-line text for local development.

    Example output:
        2024-01-01 12:00:00 DEBUG    keypage.service [request_id=abc] Page fetched item_count=10 has_next=True
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        context, page, extra = split_record(record)

        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        parts = [_timestamp(record).strftime("%Y-%m-%d %H:%M:%S"), level, record.name]
        if context:
            parts.append("[" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]")
        parts.append(record.getMessage())
        parts.extend(f"{k}={v}" for k, v in {**page, **extra}.items())

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
