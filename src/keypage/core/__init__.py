"""
keypage core module.

Contains the pagination DSL, cursor codec, keyset conditions and the error
taxonomy.
"""

from keypage.core.conditions import (
    Condition,
    build_relative_condition,
    combine_conditions,
    filter_condition,
    make_anchor,
)
from keypage.core.cursor import CursorCodec
from keypage.core.dsl import (
    Anchor,
    FilterClause,
    FilterOp,
    NavDirection,
    OrderClause,
    PageRequest,
    PageResult,
    PageState,
    SortDirection,
    SortSpec,
)
from keypage.core.errors import (
    KeypageError,
    MalformedCursorError,
    UnknownFieldError,
    UnsupportedOperatorError,
)

__all__ = [
    # Conditions
    "Condition",
    "build_relative_condition",
    "combine_conditions",
    "filter_condition",
    "make_anchor",
    # Cursor
    "CursorCodec",
    # DSL
    "Anchor",
    "FilterClause",
    "FilterOp",
    "NavDirection",
    "OrderClause",
    "PageRequest",
    "PageResult",
    "PageState",
    "SortDirection",
    "SortSpec",
    # Errors
    "KeypageError",
    "MalformedCursorError",
    "UnknownFieldError",
    "UnsupportedOperatorError",
]
