"""
Exact page boundaries via existence probes.

Fetching ``page_size + 1`` rows only says whether more rows exist in the
direction just scanned. The two probes here answer both directions exactly,
independent of navigation direction and page size.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

from keypage.core.conditions import (
    build_relative_condition,
    combine_conditions,
    filter_condition,
    make_anchor,
)
from keypage.core.dsl import FilterClause, SortSpec
from keypage.stores.base import RecordStore, StoreQuery


@dataclass(frozen=True)
class Boundaries:
    """Whether records exist before the first and after the last item."""

    has_previous: bool = False
    has_next: bool = False


async def exists_beyond(
    store: RecordStore,
    filter: list[FilterClause],
    sort: SortSpec,
    record: dict[str, Any],
    want_after: bool,
    id_field: str = "id",
) -> bool:
    """Check whether any filtered record lies after/before ``record``."""
    condition = build_relative_condition(
        sort, make_anchor(record, sort, id_field), want_after, id_field
    )
    query = StoreQuery(
        condition=combine_conditions(filter_condition(filter), condition),
        limit=1,
        projection=(id_field,),
    )
    return len(await store.fetch(query)) > 0


async def check_boundaries(
    store: RecordStore,
    filter: list[FilterClause],
    sort: SortSpec,
    items: list[dict[str, Any]],
    id_field: str = "id",
    parallel: bool = False,
) -> Boundaries:
    """
    Determine hasPrevious/hasNext for a page in canonical display order.

    An empty page has no anchor to probe from, so both flags are false and
    no query is issued.
    """
    if not items:
        return Boundaries()

    first, last = items[0], items[-1]
    if parallel:
        has_previous, has_next = await asyncio.gather(
            exists_beyond(store, filter, sort, first, False, id_field),
            exists_beyond(store, filter, sort, last, True, id_field),
        )
    else:
        has_previous = await exists_beyond(store, filter, sort, first, False, id_field)
        has_next = await exists_beyond(store, filter, sort, last, True, id_field)

    return Boundaries(has_previous=has_previous, has_next=has_next)
