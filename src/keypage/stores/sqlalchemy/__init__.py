"""
SQLAlchemy record store for keypage.
"""

from keypage.stores.sqlalchemy.compiler import SQLAlchemyCompiler
from keypage.stores.sqlalchemy.store import SQLAlchemyStore

__all__ = [
    "SQLAlchemyCompiler",
    "SQLAlchemyStore",
]
