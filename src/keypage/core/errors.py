"""
Error taxonomy for keypage.

All keypage errors inherit from KeypageError and include:
- A unique error code for programmatic handling
- A human-readable message
- Optional retry hints for the caller

Request-level sort fields and filter operators never raise: unknown values
fall back to the configured defaults.
"""

from typing import Any


class KeypageError(Exception):
    """
    Base class for all keypage errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        retry_hints: Suggestions for how to fix the request
        details: Additional error context
    """

    code: str = "KEYPAGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        retry_hints: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.retry_hints = retry_hints or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "retry_hints": self.retry_hints,
            "details": self.details,
        }


class MalformedCursorError(KeypageError):
    """The cursor token does not decode to a valid pagination state."""

    code = "MALFORMED_CURSOR"

    def __init__(
        self,
        reason: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Invalid cursor: {reason}",
            retry_hints=[
                "Pass a cursor exactly as returned in nextCursor/previousCursor",
                "Omit the cursor to start a new traversal from the first page",
            ],
            details={"reason": reason},
            **kwargs,
        )


class UnknownFieldError(KeypageError):
    """A condition, sort or projection names a field the store does not have."""

    code = "UNKNOWN_FIELD"

    def __init__(
        self,
        field: str,
        model: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Field '{field}' does not exist on '{model}'",
            details={"field": field, "model": model},
            **kwargs,
        )


class UnsupportedOperatorError(KeypageError):
    """A condition uses an operator the store cannot evaluate."""

    code = "UNSUPPORTED_OPERATOR"

    def __init__(
        self,
        op: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Unsupported condition operator: {op}",
            retry_hints=["Supported operators: eq, gt, gte, lt, lte"],
            details={"op": op},
            **kwargs,
        )
