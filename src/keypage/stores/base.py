"""
Abstract record store interface.

The pagination engine never manages connections or schemas; it hands a
``StoreQuery`` to a pre-connected store and gets back plain dict records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from keypage.core.conditions import Condition
from keypage.core.dsl import OrderClause


@dataclass(frozen=True)
class StoreQuery:
    """
    A range/sort/limit query against a record store.

    Mirrors the find(condition).sort(spec).limit(n).project(fields) chain of
    a document store.
    """

    # Condition in the keypage condition DSL ({} matches everything)
    condition: Condition = field(default_factory=dict)

    # Physical scan order
    sort: tuple[OrderClause, ...] = ()

    # Maximum number of records to return (None for no limit)
    limit: int | None = None

    # Fields to return (None means every field)
    projection: tuple[str, ...] | None = None


class RecordStore(ABC):
    """
    Abstract base class for record stores.

    Stores are responsible for:
    1. Evaluating conditions built from eq/gt/gte/lt/lte leaves and and/or
    2. Sorting, limiting and projecting results
    3. Restoring identifiers decoded from cursors to their native type

    Store failures (timeouts, lost connections) propagate unchanged.
    """

    id_field: str = "id"

    @abstractmethod
    async def fetch(self, query: StoreQuery) -> list[dict[str, Any]]:
        """
        Execute a query and return records in scan order.
        """
        ...

    def coerce_id(self, value: Any) -> Any:
        """
        Convert a decoded identifier to the store's native identifier type.

        Raises ValueError or TypeError when the value cannot be converted.
        """
        return value
