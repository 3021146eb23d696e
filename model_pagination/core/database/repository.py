"""SQLAlchemy-backed model capability.

Adapts a mapped model class to the ``count``/``find_all`` interface the
paginator consumes. Each call opens its own session from the factory, so a
single instance can serve concurrent pagination calls.

Example:
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from model_pagination import with_pagination
    from model_pagination.core.database import SQLAlchemyModel

    engine = create_async_engine("postgresql+psycopg://...")
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    users = with_pagination(page_size=20)(SQLAlchemyModel(User, session_factory))
    page = await users.paginate(page_index=0, include=["posts"])

    # Other model attributes are still reachable through the wrapper
    user = await users.get(42)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import selectinload

from model_pagination.core.database.exceptions import InvalidFilterError
from model_pagination.core.database.filters import (
    LimitOffset,
    OrderBy,
    PredicateFilter,
    column_for,
)
from model_pagination.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

T = TypeVar("T")


class SQLAlchemyModel(Generic[T]):
    """Model capability over one mapped class.

    Provides:
        - count(where, include, distinct) -> int
        - find_all(where, include, attributes, order, offset, limit, distinct, options) -> Sequence
        - get(id) -> T | None

    Options the model does not understand are ignored and logged at DEBUG,
    so pass-through options meant for another backend do not fail here.
    """

    __slots__ = ("model", "session_factory", "_lazy")

    def __init__(
        self,
        model: type[T],
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize model capability.

        Args:
            model: SQLAlchemy mapped class (e.g., User, Post)
            session_factory: Factory producing AsyncSession instances
        """
        self.model = model
        self.session_factory = session_factory
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"{__name__}.{model.__name__}")

    def __repr__(self) -> str:
        return f"SQLAlchemyModel({self.model.__name__})"

    def _base_statement(
        self,
        where: Mapping[Any, Any] | None,
        *,
        distinct: bool,
    ) -> Select[Any]:
        stmt = PredicateFilter(self.model, where).apply(select(self.model))
        return stmt.distinct() if distinct else stmt

    def _relationship_loaders(self, include: Any) -> list[Any]:
        names = [include] if isinstance(include, str) else list(include or ())
        relationships = sa_inspect(self.model).relationships
        loaders = []
        for name in names:
            if name not in relationships:
                msg = f"Unknown relationship {name!r} on {self.model.__name__}"
                raise InvalidFilterError(msg, filter_name=str(name))
            loaders.append(selectinload(getattr(self.model, name)))
        return loaders

    def _ignore(self, operation: str, extra: dict[str, Any]) -> None:
        if extra:
            self._lazy.debug(
                lambda: f"db.{operation}: ignoring unsupported options {sorted(extra)}"
            )

    async def count(
        self,
        *,
        where: Mapping[Any, Any] | None = None,
        include: Any = None,
        distinct: bool = False,
        **extra: Any,
    ) -> int:
        """Count rows matching ``where``.

        Ordering, projection and bounds are not part of a count and are
        ignored if supplied. ``include`` only loads relationships, so it does
        not change the count.

        Args:
            where: Predicate tree
            include: Relationship names (validated, otherwise unused)
            distinct: Count distinct rows
            **extra: Unsupported options (ignored)

        Returns:
            Number of matching rows
        """
        self._relationship_loaders(include)
        self._ignore("count", extra)
        stmt = self._base_statement(where, distinct=distinct)
        count_stmt = select(func.count()).select_from(stmt.subquery())

        async with self.session_factory() as session:
            total = (await session.execute(count_stmt)).scalar_one()

        self._lazy.debug(lambda: f"db.count: {self.model.__name__} -> {total}")
        return total

    async def find_all(
        self,
        *,
        where: Mapping[Any, Any] | None = None,
        include: Any = None,
        attributes: Sequence[str] | None = None,
        order: Sequence[Any] | None = None,
        offset: int | None = None,
        limit: int | None = None,
        distinct: bool = False,
        options: Iterable[Any] | None = None,
        **extra: Any,
    ) -> Sequence[Any]:
        """Fetch rows matching ``where``.

        Args:
            where: Predicate tree
            include: Relationship names to eager load with selectinload
            attributes: Field names to select; rows are then plain dicts
            order: ``(field, direction)`` entries
            offset: Rows to skip
            limit: Maximum rows to return
            distinct: Select distinct rows
            options: Additional SQLAlchemy loader options
            **extra: Unsupported options (ignored)

        Returns:
            Mapped instances, or dicts of the selected attributes
        """
        self._ignore("find_all", extra)
        stmt = self._base_statement(where, distinct=distinct)
        if attributes:
            columns = [column_for(self.model, name) for name in attributes]
            stmt = stmt.with_only_columns(*columns)
        else:
            loaders = [*self._relationship_loaders(include), *(options or ())]
            if loaders:
                stmt = stmt.options(*loaders)
        stmt = OrderBy(self.model, order).apply(stmt)
        stmt = LimitOffset(limit=limit, offset=offset).apply(stmt)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            if attributes:
                rows: Sequence[Any] = [dict(row) for row in result.mappings().all()]
            else:
                rows = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.find_all: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(rows)} rows"
        )
        return rows

    async def get(self, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key.

        Args:
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        async with self.session_factory() as session:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance


__all__ = ["SQLAlchemyModel"]
