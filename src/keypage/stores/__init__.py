"""
Record stores for keypage.

Stores execute range/sort/limit/projection queries built by the pagination
engine. The SQLAlchemy store lives in ``keypage.stores.sqlalchemy``.
"""

from keypage.stores.base import RecordStore, StoreQuery
from keypage.stores.memory import InMemoryStore

__all__ = [
    "RecordStore",
    "StoreQuery",
    "InMemoryStore",
]
