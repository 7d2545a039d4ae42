"""
Opaque cursor tokens for keyset pagination.

A cursor carries the whole traversal session (filter, sort, anchor), so a
client never resends filter or sort parameters once it holds one. Tokens are
URL-safe base64 of canonical JSON. They are not signed: a forged but
well-formed token is accepted as valid state.
"""

import base64
import json
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID

from keypage.core.dsl import PageState
from keypage.core.errors import MalformedCursorError


def _identity(value: Any) -> Any:
    return value


class CursorCodec:
    """
    Encodes and decodes pagination cursors.

    Decoding restores the anchor identifier through ``id_parser`` so that it
    comes back as the record store's native identifier type rather than
    whatever JSON produced.
    """

    def __init__(self, id_parser: Callable[[Any], Any] | None = None) -> None:
        """
        Initialize the codec.

        Args:
            id_parser: Converts a decoded identifier to the store's native type
        """
        self.id_parser = id_parser or _identity

    def encode(self, state: PageState) -> str:
        """Encode pagination state to an opaque, URL-safe token."""
        payload = self._serialize_value(state.model_dump(mode="python"))
        json_str = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        return base64.urlsafe_b64encode(json_str.encode()).decode().rstrip("=")

    def decode(self, cursor: str) -> PageState:
        """
        Decode a token produced by ``encode``.

        Raises:
            MalformedCursorError: If the token is not validly formed
        """
        if not cursor:
            raise MalformedCursorError("empty cursor")

        try:
            padded = cursor + "=" * (-len(cursor) % 4)
            json_str = base64.urlsafe_b64decode(padded.encode("ascii")).decode()
            raw_data = self._deserialize_value(json.loads(json_str))
            if not isinstance(raw_data, dict):
                raise ValueError("cursor payload is not an object")

            anchor = raw_data.get("anchor")
            if isinstance(anchor, dict) and anchor.get("id") is not None:
                anchor["id"] = self.id_parser(anchor["id"])

            return PageState.model_validate(raw_data)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise MalformedCursorError(str(e)) from e

    def _serialize_value(self, value: Any) -> Any:
        """Serialize a value for JSON encoding."""
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return {"_dt": value.isoformat()}
        if isinstance(value, date):
            return {"_d": value.isoformat()}
        if isinstance(value, Decimal):
            return {"_dec": str(value)}
        if isinstance(value, UUID):
            return {"_uuid": str(value)}
        return value

    def _deserialize_value(self, value: Any) -> Any:
        """Deserialize a value from JSON."""
        if isinstance(value, list):
            return [self._deserialize_value(v) for v in value]
        if not isinstance(value, dict):
            return value
        if len(value) == 1:
            if "_dt" in value:
                return datetime.fromisoformat(value["_dt"])
            if "_d" in value:
                return date.fromisoformat(value["_d"])
            if "_dec" in value:
                return Decimal(value["_dec"])
            if "_uuid" in value:
                return UUID(value["_uuid"])
        return {k: self._deserialize_value(v) for k, v in value.items()}

