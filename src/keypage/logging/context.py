"""
Request-scoped logging fields.

The FastAPI integration opens a scope per request; every record logged
inside it picks up the scope's fields through ``ContextFilter``.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

_fields: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "keypage_log_fields"
)


def get_log_context() -> dict[str, Any]:
    """Fields of the innermost open scope."""
    return dict(_fields.get({}))


@contextmanager
def log_context(**fields: Any) -> Iterator[dict[str, Any]]:
    """
    Open a logging scope.

    Scopes nest: an inner scope sees the outer fields plus its own, and the
    outer fields come back when it closes. ``None`` values are dropped.

    Example:
        with log_context(request_id="abc", route="/api/products"):
            await service.paginate(request)
    """
    merged = {**_fields.get({}), **{k: v for k, v in fields.items() if v is not None}}
    token = _fields.set(merged)
    try:
        yield merged
    finally:
        _fields.reset(token)


class ContextFilter(logging.Filter):
    """Copy the current scope's fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _fields.get({}).items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
