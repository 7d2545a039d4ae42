"""
SQLAlchemy record store.

Reads records of one mapped class through a caller-owned Session or
AsyncSession. Session lifecycle, pooling and indexes are the caller's concern.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from keypage.stores.base import RecordStore, StoreQuery
from keypage.stores.sqlalchemy.compiler import SQLAlchemyCompiler


class SQLAlchemyStore(RecordStore):
    """
    Record store over a SQLAlchemy mapped class.

    Usage:
        with Session(engine) as session:
            store = SQLAlchemyStore(session, Product)
            page = await PaginationService(store).paginate(PageRequest())
    """

    def __init__(
        self,
        session: Session | AsyncSession,
        model_class: type,
        id_field: str | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            session: A sync or async session; used read-only
            model_class: Mapped class records are read from
            id_field: Identifier attribute (defaults to the primary key)
        """
        self.session = session
        self.model_class = model_class
        self.compiler = SQLAlchemyCompiler(model_class)
        self.is_async = isinstance(session, AsyncSession)

        pk_column = self.compiler.primary_key_column()
        self.id_field = id_field or self.compiler.mapper.get_property_by_column(pk_column).key
        self._id_column = self.compiler.mapper.columns[self.id_field]

    async def fetch(self, query: StoreQuery) -> list[dict[str, Any]]:
        stmt = self.compiler.compile(query)
        if self.is_async:
            result = await self.session.execute(stmt)
        else:
            result = self.session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    def coerce_id(self, value: Any) -> Any:
        """Convert a decoded identifier with the identifier column's Python type."""
        python_type = self._id_column.type.python_type
        if value is None or isinstance(value, python_type):
            return value
        return python_type(value)
