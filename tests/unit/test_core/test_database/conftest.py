"""SQLite fixtures for the SQLAlchemy model capability.

Seed data:

    authors                          books
    id  name   age   email           id  title        pages  author_id
    1   alice  30    alice@...com    1   First        100    1
    2   bob    17    None            2   Second       300    1
    3   carol  45    carol@...org    3   Third        250    3
    4   dave   None  dave@...com
    5   al_x   30    None
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.pool import StaticPool

from model_pagination.core.database import SQLAlchemyModel

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine


# ============================================================================
# Test Models
# ============================================================================


class Base(DeclarativeBase):
    """Declarative base for test models."""


class Author(Base):
    """Author with an optional age and email."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    age: Mapped[int | None] = mapped_column(default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None)

    books: Mapped[list[Book]] = relationship(back_populates="author", order_by="Book.id")


class Book(Base):
    """Book written by one author."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    pages: Mapped[int]
    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"))

    author: Mapped[Author] = relationship(back_populates="books")


# ============================================================================
# Engine and Session Fixtures
# ============================================================================


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def seeded(session_factory) -> None:
    """Insert the authors and books listed in the module docstring."""
    async with session_factory() as session:
        session.add_all(
            [
                Author(id=1, name="alice", age=30, email="alice@example.com"),
                Author(id=2, name="bob", age=17),
                Author(id=3, name="carol", age=45, email="carol@example.org"),
                Author(id=4, name="dave", email="dave@example.com"),
                Author(id=5, name="al_x", age=30),
            ]
        )
        await session.flush()
        session.add_all(
            [
                Book(id=1, title="First", pages=100, author_id=1),
                Book(id=2, title="Second", pages=300, author_id=1),
                Book(id=3, title="Third", pages=250, author_id=3),
            ]
        )
        await session.commit()


@pytest.fixture
def authors(session_factory, seeded) -> SQLAlchemyModel[Author]:
    """Model capability over the seeded authors table."""
    return SQLAlchemyModel(Author, session_factory)


@pytest.fixture
def books(session_factory, seeded) -> SQLAlchemyModel[Book]:
    """Model capability over the seeded books table."""
    return SQLAlchemyModel(Book, session_factory)


@pytest.fixture
def author_model() -> type[Author]:
    """Author mapped class."""
    return Author


@pytest.fixture
def book_model() -> type[Book]:
    """Book mapped class."""
    return Book
