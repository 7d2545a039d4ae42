"""
Resolution of the effective sort, filter, direction and page size.

Resolvers never raise: unknown sort fields, unknown operators and unparsable
operands degrade to safe defaults. When a decoded cursor is present its sort
and filter win over request parameters, pinning them for the whole session.
"""

import math
from typing import Any

from keypage.config import PaginationConfig
from keypage.core.dsl import (
    FilterClause,
    FilterOp,
    NavDirection,
    PageRequest,
    PageState,
    SortDirection,
    SortSpec,
)

RANGE_OP_MAP: dict[str, FilterOp] = {
    "gt": FilterOp.GT,
    "gte": FilterOp.GTE,
    "lt": FilterOp.LT,
    "lte": FilterOp.LTE,
}


def resolve_direction(raw: str | None) -> NavDirection:
    """Anything other than ``prev`` navigates forward."""
    return NavDirection.PREV if raw == NavDirection.PREV.value else NavDirection.NEXT


def resolve_page_size(raw: Any, config: PaginationConfig) -> int:
    """Parse the requested page size and clamp it to ``[1, max_page_size]``."""
    size = config.page_size
    if raw is not None and raw != "" and not isinstance(raw, bool):
        try:
            size = int(raw)
        except (TypeError, ValueError):
            size = config.page_size
    return min(max(1, size), config.max_page_size)


def resolve_sort(
    request: PageRequest,
    state: PageState | None,
    config: PaginationConfig,
) -> SortSpec:
    """
    Determine the canonical sort of the traversal.

    The cursor's sort spec always wins so that a mid-traversal sort change
    cannot desynchronize the anchor. The field is re-validated even then,
    because a forged cursor is accepted as state.
    """
    if state is not None:
        raw_field: str | None = state.sort.field
        raw_dir: str | None = state.sort.dir.value
    else:
        raw_field = request.sort_field
        raw_dir = request.sort_dir

    field = raw_field if raw_field in config.sort_fields else config.id_field
    direction = (
        SortDirection.DESC
        if (raw_dir or "").lower() == SortDirection.DESC.value
        else SortDirection.ASC
    )
    return SortSpec(field=field, dir=direction)


def parse_number(raw: Any) -> int | float | None:
    """Parse a finite number, preferring int for integral text."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else None

    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def resolve_filter(
    request: PageRequest,
    state: PageState | None,
    config: PaginationConfig,
) -> list[FilterClause]:
    """
    Determine the effective filter.

    A cursor's filter is returned unchanged; request filter parameters are
    ignored in that case. Otherwise at most one equality and one range
    predicate are built from the request.
    """
    if state is not None:
        return list(state.filter)

    clauses: list[FilterClause] = []
    if request.filter_value:
        clauses.append(
            FilterClause(field=config.filter_field, op=FilterOp.EQ, value=str(request.filter_value))
        )

    op = RANGE_OP_MAP.get(request.range_op or "")
    operand = parse_number(request.range_value)
    if op is not None and operand is not None:
        clauses.append(FilterClause(field=config.range_field, op=op, value=operand))

    return clauses
