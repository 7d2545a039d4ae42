"""
Pagination DSL schemas for keypage.

These Pydantic models describe filters, sort specs, anchors and the
self-describing pagination state that travels inside a cursor, plus the
transport-agnostic request and response shapes of the pagination service.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class FilterOp(str, Enum):
    """Supported filter operators."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


RANGE_OPS = frozenset({FilterOp.GT, FilterOp.GTE, FilterOp.LT, FilterOp.LTE})


class SortDirection(str, Enum):
    """Sort order direction."""

    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        """+1 for ascending, -1 for descending."""
        return -1 if self is SortDirection.DESC else 1

    @classmethod
    def from_sign(cls, sign: int) -> "SortDirection":
        return cls.DESC if sign < 0 else cls.ASC


class NavDirection(str, Enum):
    """Navigation direction relative to the anchor."""

    NEXT = "next"
    PREV = "prev"


class FilterClause(BaseModel):
    """
    A single filter predicate.

    Examples:
        {"field": "category", "op": "eq", "value": "books"}
        {"field": "price", "op": "gte", "value": 20}
    """

    field: str = Field(..., description="The field name to filter on")
    op: FilterOp = Field(..., description="The filter operator")
    value: Any = Field(..., description="The value to compare against")

    model_config = {"frozen": True}

    @field_validator("field")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        """Ensure field name is not empty."""
        if not v or not v.strip():
            raise ValueError("Field name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_range_operand(self) -> "FilterClause":
        """Range operators only accept numeric operands."""
        if self.op in RANGE_OPS and (
            isinstance(self.value, bool) or not isinstance(self.value, (int, float))
        ):
            raise ValueError(f"Operator '{self.op.value}' requires a numeric value")
        return self


class OrderClause(BaseModel):
    """
    A single order/sort clause of a physical scan.

    Example:
        {"field": "price", "direction": "desc"}
    """

    field: str = Field(..., description="The field name to order by")
    direction: SortDirection = Field(
        default=SortDirection.ASC, description="Sort direction"
    )

    model_config = {"frozen": True}


class SortSpec(BaseModel):
    """
    The canonical sort of a traversal: one primary field plus direction.

    The identifier is always the implicit tie-breaker.
    """

    field: str
    dir: SortDirection = SortDirection.ASC

    model_config = {"frozen": True}


class Anchor(BaseModel):
    """
    Snapshot of a boundary record used to resume scanning relative to it.

    ``sort_value`` is None when the traversal is sorted by the identifier.
    """

    id: Any
    sort_value: Any = None

    model_config = {"frozen": True}


class PageState(BaseModel):
    """
    Everything a traversal session needs, carried inside a cursor.

    Example:
        {
            "filter": [{"field": "category", "op": "eq", "value": "books"}],
            "sort": {"field": "price", "dir": "desc"},
            "anchor": {"id": 42, "sort_value": 19.5}
        }
    """

    filter: list[FilterClause] = Field(default_factory=list)
    sort: SortSpec
    anchor: Anchor | None = None

    model_config = {"frozen": True}


class PageRequest(BaseModel):
    """
    Raw, transport-agnostic pagination parameters.

    Values are parsed leniently by the resolvers; nothing here raises for
    out-of-range or unknown input.
    """

    direction: str | None = Field(default=None, description="next or prev")
    cursor: str | None = Field(
        default=None, description="Pagination cursor from a previous response"
    )
    sort_field: str | None = Field(default=None, description="Ignored when a cursor is given")
    sort_dir: str | None = Field(default=None, description="asc or desc")
    filter_value: str | None = Field(
        default=None, description="Equality operand for the configured filter field"
    )
    range_op: str | None = Field(default=None, description="gt, gte, lt or lte")
    range_value: str | int | float | None = Field(
        default=None, description="Numeric operand for the configured range field"
    )
    page_size: str | int | None = Field(default=None, description="Requested page size")

    model_config = {"frozen": True}


class PageResult(BaseModel):
    """
    Result of one pagination request.

    Items are in canonical display order regardless of navigation direction.
    Serializes with camelCase keys when dumped ``by_alias``.
    """

    page_size: int
    direction: NavDirection
    sort: SortSpec
    filter: list[FilterClause] = Field(default_factory=list)
    items: list[dict[str, Any]] = Field(default_factory=list)
    has_next: bool = False
    has_previous: bool = False
    next_cursor: str | None = None
    previous_cursor: str | None = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
