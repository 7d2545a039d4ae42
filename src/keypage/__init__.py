"""
keypage - keyset (cursor-based) pagination for record stores.

Returns pages in stable order under an arbitrary equality/range filter and a
chosen sort key, navigates forward and backward without offsets, tie-breaks
duplicate sort values on the unique identifier, and reports exactly whether
more pages exist in either direction.
"""

__version__ = "0.1.0"

from keypage.config import PaginationConfig, PaginationSettings
from keypage.core.cursor import CursorCodec
from keypage.core.dsl import (
    FilterClause,
    FilterOp,
    NavDirection,
    PageRequest,
    PageResult,
    SortDirection,
    SortSpec,
)
from keypage.core.errors import (
    KeypageError,
    MalformedCursorError,
    UnknownFieldError,
    UnsupportedOperatorError,
)
from keypage.service import PaginationService
from keypage.stores import InMemoryStore, RecordStore, StoreQuery

__all__ = [
    # Version
    "__version__",
    # Service
    "PaginationService",
    "PaginationConfig",
    "PaginationSettings",
    "CursorCodec",
    # Stores
    "RecordStore",
    "StoreQuery",
    "InMemoryStore",
    # DSL
    "PageRequest",
    "PageResult",
    "FilterClause",
    "FilterOp",
    "NavDirection",
    "SortDirection",
    "SortSpec",
    # Errors
    "KeypageError",
    "MalformedCursorError",
    "UnknownFieldError",
    "UnsupportedOperatorError",
]
