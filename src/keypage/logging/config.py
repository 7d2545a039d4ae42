"""
Logger setup for keypage.

Every keypage logger lives under the ``keypage`` namespace, so one call to
``configure_logging`` at startup controls them all. Applications that already
configure the standard ``logging`` tree can skip it entirely.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import Enum
from typing import Any, TextIO

from keypage.logging.context import ContextFilter
from keypage.logging.formatters import JSONFormatter, TextFormatter

ROOT_LOGGER = "keypage"

# Keyword arguments the standard library consumes itself
_LOGGING_KWARGS = ("exc_info", "stack_info", "stacklevel", "extra")


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class KeypageLogger(logging.LoggerAdapter):
    """
    Adapter accepting structured fields as keyword arguments.

    Example:
        logger = get_logger(__name__)
        logger.debug("Page fetched", item_count=10, has_next=True)
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = {k: kwargs.pop(k) for k in list(kwargs) if k not in _LOGGING_KWARGS}
        kwargs["extra"] = {**kwargs.get("extra", {}), **fields}
        return msg, kwargs


def get_logger(name: str) -> KeypageLogger:
    """Get a structured logger, typically ``get_logger(__name__)``."""
    return KeypageLogger(logging.getLogger(name), {})


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    format: LogFormat | str = LogFormat.JSON,
    output: TextIO | None = None,
    use_colors: bool = True,
) -> logging.Handler:
    """
    Route the ``keypage`` logger tree to a single stream handler.

    Replaces any handler installed by an earlier call and stops propagation
    to the root logger. Returns the installed handler.
    """
    level = LogLevel(level.upper()) if isinstance(level, str) else level
    format = LogFormat(format.lower()) if isinstance(format, str) else format

    handler = logging.StreamHandler(output or sys.stderr)
    if format == LogFormat.JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(use_colors=use_colors))
    handler.addFilter(ContextFilter())

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level.value)
    logger.propagate = False
    return handler
