"""
keypage structured logging.
"""

from keypage.logging.config import (
    KeypageLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)
from keypage.logging.context import ContextFilter, get_log_context, log_context
from keypage.logging.formatters import JSONFormatter, TextFormatter

__all__ = [
    "configure_logging",
    "get_logger",
    "KeypageLogger",
    "LogLevel",
    "LogFormat",
    "JSONFormatter",
    "TextFormatter",
    "ContextFilter",
    "get_log_context",
    "log_context",
]
