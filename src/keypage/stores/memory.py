"""
In-memory record store.

Evaluates the keypage condition DSL over a list of dicts. Comparisons against
missing or None values are false, matching SQL NULL semantics.
"""

import operator
from collections.abc import Callable, Iterable
from typing import Any

from keypage.core.conditions import Condition
from keypage.core.dsl import SortDirection
from keypage.core.errors import UnsupportedOperatorError
from keypage.stores.base import RecordStore, StoreQuery

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": operator.eq,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


class InMemoryStore(RecordStore):
    """
    Record store backed by a Python list.

    Usage:
        store = InMemoryStore([{"id": 1, "price": 10}, ...])
        service = PaginationService(store)
    """

    def __init__(
        self,
        records: Iterable[dict[str, Any]] = (),
        id_field: str = "id",
        id_type: Callable[[Any], Any] | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            records: Initial records; each must carry ``id_field``
            id_field: Name of the unique identifier field
            id_type: Converter applied to identifiers decoded from cursors;
                defaults to the type of the first record's identifier
        """
        self.id_field = id_field
        self.id_type = id_type
        self.records: list[dict[str, Any]] = [dict(r) for r in records]
        self.queries: list[StoreQuery] = []

    async def fetch(self, query: StoreQuery) -> list[dict[str, Any]]:
        self.queries.append(query)
        rows = [r for r in self.records if self.matches(r, query.condition)]

        # Stable sorts applied from the least significant key
        for clause in reversed(query.sort):
            rows.sort(
                key=lambda r, f=clause.field: (r.get(f) is not None, r.get(f)),
                reverse=clause.direction == SortDirection.DESC,
            )

        if query.limit is not None:
            rows = rows[: query.limit]

        if query.projection is not None:
            return [{f: r[f] for f in query.projection if f in r} for r in rows]
        return [dict(r) for r in rows]

    def coerce_id(self, value: Any) -> Any:
        id_type = self.id_type
        if id_type is None and self.records:
            id_type = type(self.records[0][self.id_field])
        if id_type is None or value is None:
            return value
        if isinstance(id_type, type) and isinstance(value, id_type):
            return value
        return id_type(value)

    def matches(self, record: dict[str, Any], condition: Condition) -> bool:
        """Evaluate a condition against a single record."""
        if not condition:
            return True
        if "and" in condition:
            return all(self.matches(record, c) for c in condition["and"])
        if "or" in condition:
            return any(self.matches(record, c) for c in condition["or"])

        op = condition.get("op")
        compare = _OPERATORS.get(op)
        if compare is None:
            raise UnsupportedOperatorError(str(op))

        actual = record.get(condition["field"])
        expected = condition["value"]
        if actual is None or expected is None:
            return False
        try:
            return compare(actual, expected)
        except TypeError:
            # Incomparable types never match, as in a typed SQL column
            return False
