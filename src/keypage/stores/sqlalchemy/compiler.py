"""
SQLAlchemy condition compiler.

Compiles keypage conditions and store queries into SQLAlchemy select
statements.
"""

from typing import Any

from sqlalchemy import Select, and_, inspect, or_, select, true

from keypage.core.conditions import Condition
from keypage.core.dsl import OrderClause, SortDirection
from keypage.core.errors import UnknownFieldError, UnsupportedOperatorError
from keypage.stores.base import StoreQuery


class SQLAlchemyCompiler:
    """
    Compiles keypage store queries into SQLAlchemy statements.
    """

    def __init__(self, model_class: type) -> None:
        """
        Initialize the compiler.

        Args:
            model_class: The SQLAlchemy mapped class records are read from
        """
        self.model_class = model_class
        self.mapper = inspect(model_class)

    def compile(self, query: StoreQuery) -> Select:
        """Compile a store query into a SELECT statement."""
        if query.projection is not None:
            stmt = select(*(self._column(f) for f in query.projection))
        else:
            stmt = select(*(self._column(k) for k in self.mapper.columns.keys()))

        if query.condition:
            stmt = stmt.where(self.build_condition(query.condition))

        stmt = self._apply_ordering(stmt, query.sort)

        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        return stmt

    def build_condition(self, condition: Condition) -> Any:
        """Build a SQLAlchemy boolean expression from a condition dict."""
        if not condition:
            return true()
        if "and" in condition:
            return and_(*(self.build_condition(c) for c in condition["and"]))
        if "or" in condition:
            return or_(*(self.build_condition(c) for c in condition["or"]))

        column = self._column(condition["field"])
        return self._build_single_condition(column, condition.get("op"), condition["value"])

    def _build_single_condition(
        self,
        column: Any,
        op: str | None,
        value: Any,
    ) -> Any:
        """Build a single SQLAlchemy comparison."""
        match op:
            case "eq":
                return column == value
            case "lt":
                return column < value
            case "lte":
                return column <= value
            case "gt":
                return column > value
            case "gte":
                return column >= value
            case _:
                raise UnsupportedOperatorError(str(op))

    def _apply_ordering(
        self,
        stmt: Select,
        order_by: tuple[OrderClause, ...],
    ) -> Select:
        """Apply ORDER BY clauses to a statement."""
        for order in order_by:
            column = self._column(order.field)
            if order.direction == SortDirection.DESC:
                stmt = stmt.order_by(column.desc())
            else:
                stmt = stmt.order_by(column.asc())
        return stmt

    def _column(self, field: str) -> Any:
        """Resolve a field name to a mapped column attribute."""
        if field not in self.mapper.columns:
            raise UnknownFieldError(field, self.model_class.__name__)
        return getattr(self.model_class, field)

    def primary_key_column(self) -> Any:
        """Get the (first) primary key column of the model."""
        return self.mapper.primary_key[0]
