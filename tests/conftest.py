"""
Shared test fixtures.
"""

import pytest
from sqlalchemy import Boolean, Float, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from keypage.config import PaginationConfig
from keypage.stores.memory import InMemoryStore
from keypage.stores.sqlalchemy import SQLAlchemyStore
from keypage.testing import make_products

# === Test Models ===


class Base(DeclarativeBase):
    pass


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    category: Mapped[str] = mapped_column(String(50))
    price: Mapped[float] = mapped_column(Float)
    in_stock: Mapped[bool] = mapped_column(Boolean, default=False)


def seed(session: Session, records: list[dict]) -> None:
    session.add_all([Product(**r) for r in records])
    session.commit()


# === Fixtures ===


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def products():
    """100 products with ids 1..100."""
    return make_products(100)


@pytest.fixture
def tied_products():
    """25 products sharing price 10, inserted in shuffled id order."""
    ids = [13, 2, 25, 7, 19, 1, 22, 4, 16, 10, 3, 24, 8, 21, 5, 18, 11, 14, 6, 23, 9, 20, 12, 17, 15]
    return [
        {"id": i, "name": f"Tied {i}", "category": "books", "price": 10.0, "in_stock": True}
        for i in ids
    ]


@pytest.fixture
def config():
    return PaginationConfig(page_size=10, max_page_size=100)


@pytest.fixture(params=["memory", "sqlalchemy"])
def make_store(request, session):
    """Factory building a store of each kind over the given records."""

    def factory(records):
        if request.param == "memory":
            return InMemoryStore(records)
        seed(session, records)
        return SQLAlchemyStore(session, Product)

    return factory
