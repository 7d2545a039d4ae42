"""
Keyset conditions relative to an anchor record.

Conditions use the plain-dict query DSL understood by every record store:

    {"field": "price", "op": "gt", "value": 10}
    {"and": [...]}
    {"or": [...]}
    {}                      # matches every record

For a traversal sorted by (price ASC, id ASC) the records strictly after an
anchor are:

    (price > anchor.price) OR (price = anchor.price AND id > anchor.id)

which is the lexicographic comparison of the pair (price, id). The same
builder answers both the paging scan and the boundary probes.
"""

from typing import Any

from keypage.core.dsl import Anchor, FilterClause, FilterOp, SortSpec

Condition = dict[str, Any]


def comparison_op(sort: SortSpec, want_after: bool) -> FilterOp:
    """
    Operator selecting records after/before the anchor in canonical order.

    Under ascending order "after" is ``gt``; under descending it is ``lt``.
    "Before" is the converse.
    """
    ascending = sort.dir.sign == 1
    return FilterOp.GT if want_after == ascending else FilterOp.LT


def build_relative_condition(
    sort: SortSpec,
    anchor: Anchor | None,
    want_after: bool,
    id_field: str = "id",
) -> Condition:
    """
    Build a condition for records strictly on one side of ``anchor``.

    Args:
        sort: Canonical sort of the traversal
        anchor: Boundary record snapshot, or None for the first page
        want_after: True for records after the anchor, False for before
        id_field: Name of the unique identifier field

    Returns:
        Condition dict; empty when there is no anchor
    """
    if anchor is None or anchor.id is None:
        return {}

    op = comparison_op(sort, want_after).value

    if sort.field == id_field:
        return {"field": id_field, "op": op, "value": anchor.id}

    return {
        "or": [
            {"field": sort.field, "op": op, "value": anchor.sort_value},
            {
                "and": [
                    {"field": sort.field, "op": FilterOp.EQ.value, "value": anchor.sort_value},
                    {"field": id_field, "op": op, "value": anchor.id},
                ]
            },
        ]
    }


def filter_condition(filter: list[FilterClause]) -> Condition:
    """Turn filter clauses into a condition (AND-ed together)."""
    return combine_conditions(
        *({"field": c.field, "op": c.op.value, "value": c.value} for c in filter)
    )


def combine_conditions(*conditions: Condition) -> Condition:
    """AND together the non-empty conditions."""
    parts = [c for c in conditions if c]
    if not parts:
        return {}
    if len(parts) == 1:
        return parts[0]
    return {"and": parts}


def make_anchor(record: dict[str, Any], sort: SortSpec, id_field: str = "id") -> Anchor:
    """Snapshot a record as an anchor for the given sort."""
    return Anchor(
        id=record[id_field],
        sort_value=None if sort.field == id_field else record.get(sort.field),
    )
