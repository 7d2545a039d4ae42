"""
Page query execution.

Backward paging is not a separate code path: it scans in the inverted
canonical order and reverses the result for display.
"""

from dataclasses import dataclass, field
from typing import Any

from keypage.core.conditions import (
    build_relative_condition,
    combine_conditions,
    filter_condition,
)
from keypage.core.dsl import (
    Anchor,
    FilterClause,
    NavDirection,
    OrderClause,
    SortDirection,
    SortSpec,
)
from keypage.stores.base import RecordStore, StoreQuery


@dataclass
class ScanResult:
    """Records of one page in canonical display order."""

    items: list[dict[str, Any]] = field(default_factory=list)

    # More records existed in the scanned direction. A hint only; the
    # boundary checker gives the authoritative answer.
    has_more_scanned: bool = False


def scan_order(
    sort: SortSpec,
    direction: NavDirection,
    id_field: str = "id",
) -> tuple[OrderClause, ...]:
    """
    Physical ORDER BY for a scan.

    The canonical direction is negated when paging backward and applied to
    both the primary field and the identifier tie-breaker.
    """
    sign = -sort.dir.sign if direction == NavDirection.PREV else sort.dir.sign
    effective = SortDirection.from_sign(sign)
    if sort.field == id_field:
        return (OrderClause(field=id_field, direction=effective),)
    return (
        OrderClause(field=sort.field, direction=effective),
        OrderClause(field=id_field, direction=effective),
    )


async def fetch_page(
    store: RecordStore,
    filter: list[FilterClause],
    sort: SortSpec,
    direction: NavDirection,
    anchor: Anchor | None,
    page_size: int,
    id_field: str = "id",
) -> ScanResult:
    """
    Fetch one page relative to ``anchor``.

    Args:
        store: Record store to query
        filter: Effective filter of the traversal
        sort: Canonical sort of the traversal
        direction: next scans after the anchor, prev scans before it
        anchor: Last record seen, or None for the first page
        page_size: Already-clamped page size
        id_field: Name of the unique identifier field

    Returns:
        ScanResult with at most ``page_size`` records in canonical order
    """
    paging = build_relative_condition(
        sort, anchor, want_after=direction == NavDirection.NEXT, id_field=id_field
    )
    query = StoreQuery(
        condition=combine_conditions(filter_condition(filter), paging),
        sort=scan_order(sort, direction, id_field),
        limit=page_size + 1,
    )

    rows = await store.fetch(query)
    has_more = len(rows) > page_size
    items = rows[:page_size]
    if direction == NavDirection.PREV:
        items.reverse()

    return ScanResult(items=items, has_more_scanned=has_more)
