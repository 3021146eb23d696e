"""Statement filters compiled from query specifications.

The paginator talks in plain data: a predicate tree keyed by field names and
``Op`` tokens, a list of ``(field, direction)`` pairs, an offset and a limit.
These filters turn that data into clauses on a SQLAlchemy ``select()``.

Usage:
    from sqlalchemy import select
    from model_pagination.core.database.filters import LimitOffset, OrderBy, PredicateFilter
    from model_pagination.core.pagination import Op

    stmt = select(User)
    stmt = PredicateFilter(User, {"name": {Op.starts_with: "jo"}, Op.or_: [{"age": None}, {"age": {Op.gte: 18}}]}).apply(stmt)
    stmt = OrderBy(User, [("name", "desc"), ("id", "asc")]).apply(stmt)
    stmt = LimitOffset(limit=50, offset=100).apply(stmt)

Predicate semantics:
    {"age": 18}                      age = 18
    {"age": None}                    age IS NULL
    {"age": [18, 21]}                age IN (18, 21)
    {"age": {Op.gt: 18, Op.lt: 65}}  age > 18 AND age < 65
    {"age": {Op.or_: [1, 2]}}        age = 1 OR age = 2
    {"a": {Op.col: "b"}}             a = b
    {Op.or_: [{...}, {...}]}         (...) OR (...)
    {Op.not_: {...}}                 NOT (...)
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, false, not_, or_, true
from sqlalchemy import inspect as sa_inspect

from model_pagination.core.database.exceptions import InvalidFilterError
from model_pagination.core.pagination.operators import Op


def _pair(value: Any) -> tuple[Any, Any]:
    if not isinstance(value, list | tuple) or len(value) != 2:
        msg = f"Range operand must be a pair, got {value!r}"
        raise InvalidFilterError(msg, filter_name="between")
    return value[0], value[1]


def _sequence(value: Any) -> list[Any]:
    if not isinstance(value, list | tuple | set | frozenset):
        msg = f"Collection operand expected, got {value!r}"
        raise InvalidFilterError(msg, filter_name="in")
    return list(value)


_COMPARISONS: dict[Op, Callable[[Any, Any], ColumnElement[bool]]] = {
    Op.eq: lambda column, value: column.is_(None) if value is None else column == value,
    Op.ne: lambda column, value: column.is_not(None) if value is None else column != value,
    Op.is_: lambda column, value: column.is_(value),
    Op.not_: lambda column, value: column.is_not(value),
    Op.gt: operator.gt,
    Op.gte: operator.ge,
    Op.lt: operator.lt,
    Op.lte: operator.le,
    Op.between: lambda column, value: column.between(*_pair(value)),
    Op.not_between: lambda column, value: not_(column.between(*_pair(value))),
    Op.in_: lambda column, value: column.in_(_sequence(value)),
    Op.not_in: lambda column, value: column.not_in(_sequence(value)),
    Op.like: lambda column, value: column.like(value),
    Op.not_like: lambda column, value: column.not_like(value),
    Op.starts_with: lambda column, value: column.startswith(value, autoescape=True),
    Op.ends_with: lambda column, value: column.endswith(value, autoescape=True),
    Op.substring: lambda column, value: column.contains(value, autoescape=True),
    Op.regexp: lambda column, value: column.regexp_match(value),
    Op.not_regexp: lambda column, value: not_(column.regexp_match(value)),
}


def _describe(key: Any) -> str:
    return key.name if isinstance(key, Op) else repr(key)


def _all_of(clauses: Sequence[ColumnElement[bool]]) -> ColumnElement[bool]:
    if not clauses:
        return true()
    return clauses[0] if len(clauses) == 1 else and_(*clauses)


def _any_of(clauses: Sequence[ColumnElement[bool]]) -> ColumnElement[bool]:
    if not clauses:
        return false()
    return clauses[0] if len(clauses) == 1 else or_(*clauses)


def column_for(model: type[Any], name: Any) -> Any:
    """Look up a mapped column attribute by field name.

    Raises:
        InvalidFilterError: If ``name`` is not a column of ``model``
    """
    if not isinstance(name, str) or name not in sa_inspect(model).column_attrs:
        msg = f"Unknown field {name!r} on {model.__name__}"
        raise InvalidFilterError(msg, filter_name=str(name))
    return getattr(model, name)


class PredicateCompiler:
    """Compile a predicate tree against one mapped model."""

    def __init__(self, model: type[Any]):
        self.model = model

    def compile(self, where: Mapping[Any, Any] | None) -> ColumnElement[bool] | None:
        """Return a boolean clause for ``where``, or None if it is empty."""
        if not where:
            return None
        return _all_of(self._tree(where))

    def _is_column_ref(self, value: Any) -> bool:
        return isinstance(value, Mapping) and len(value) == 1 and Op.col in value

    def _operand(self, value: Any) -> Any:
        if self._is_column_ref(value):
            return column_for(self.model, value[Op.col])
        if isinstance(value, list):
            return [self._operand(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self._operand(item) for item in value)
        return value

    def _tree(self, tree: Mapping[Any, Any]) -> list[ColumnElement[bool]]:
        if not isinstance(tree, Mapping):
            msg = f"Predicate must be a mapping, got {tree!r}"
            raise InvalidFilterError(msg)
        clauses: list[ColumnElement[bool]] = []
        for key, value in tree.items():
            if isinstance(key, str):
                clauses.append(self._field(column_for(self.model, key), value))
            elif key is Op.and_:
                clauses.append(_all_of(self._group(value)))
            elif key is Op.or_:
                clauses.append(_any_of(self._group(value)))
            elif key is Op.not_:
                if not isinstance(value, Mapping):
                    msg = f"Negated predicate must be a mapping, got {value!r}"
                    raise InvalidFilterError(msg, filter_name="not_")
                clauses.append(not_(_all_of(self._tree(value))))
            else:
                msg = f"Operator {_describe(key)} needs a field"
                raise InvalidFilterError(msg, filter_name=_describe(key))
        return clauses

    def _group(self, value: Any) -> list[ColumnElement[bool]]:
        if isinstance(value, Mapping):
            return [_all_of(self._tree({key: item})) for key, item in value.items()]
        if isinstance(value, list | tuple):
            return [_all_of(self._tree(item)) for item in value]
        msg = f"Logical operand must be a mapping or a list, got {value!r}"
        raise InvalidFilterError(msg)

    def _field(self, column: Any, value: Any) -> ColumnElement[bool]:
        if value is None:
            return column.is_(None)
        if self._is_column_ref(value):
            return column == self._operand(value)
        if isinstance(value, Mapping):
            return _all_of(
                [self._comparison(column, op, operand) for op, operand in value.items()]
            )
        if isinstance(value, list | tuple | set | frozenset):
            return column.in_(list(value))
        return column == value

    def _comparison(self, column: Any, op: Any, operand: Any) -> ColumnElement[bool]:
        if op is Op.and_ or op is Op.or_:
            if isinstance(operand, Mapping):
                parts = [self._comparison(column, key, item) for key, item in operand.items()]
            elif isinstance(operand, list | tuple):
                parts = [self._field(column, item) for item in operand]
            else:
                msg = f"Logical operand must be a mapping or a list, got {operand!r}"
                raise InvalidFilterError(msg, filter_name=column.key)
            return _all_of(parts) if op is Op.and_ else _any_of(parts)
        if op is Op.not_ and isinstance(operand, Mapping) and not self._is_column_ref(operand):
            return not_(self._field(column, operand))

        builder = _COMPARISONS.get(op) if isinstance(op, Op) else None
        if builder is None:
            msg = f"Unsupported operator {_describe(op)} for field {column.key!r}"
            raise InvalidFilterError(msg, filter_name=column.key)
        return builder(column, self._operand(operand))


def compile_where(model: type[Any], where: Mapping[Any, Any] | None) -> ColumnElement[bool] | None:
    """Compile a predicate tree against ``model``.

    Returns:
        A boolean clause, or None when ``where`` is absent or empty

    Raises:
        InvalidFilterError: Unknown field, misplaced operator or malformed operand
    """
    return PredicateCompiler(model).compile(where)


def compile_order(model: type[Any], order: Sequence[Any] | None) -> list[Any]:
    """Turn order entries into ``ORDER BY`` expressions.

    Entries are ``(field, "asc" | "desc")`` pairs (direction is
    case-insensitive and optional) or bare field names.

    Raises:
        InvalidFilterError: Unknown field or direction
    """
    expressions = []
    for entry in order or ():
        if isinstance(entry, str):
            field, direction = entry, "asc"
        else:
            field = entry[0]
            direction = entry[1] if len(entry) > 1 else "asc"
        column = column_for(model, field)
        normalized = str(direction).lower()
        if normalized == "asc":
            expressions.append(column.asc())
        elif normalized == "desc":
            expressions.append(column.desc())
        else:
            msg = f"Unknown sort direction {direction!r}"
            raise InvalidFilterError(msg, filter_name=str(field))
    return expressions


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class PredicateFilter(StatementFilter):
    """``WHERE`` clause from a predicate tree.

    Example:
        stmt = PredicateFilter(User, {"status": {Op.in_: ["active", "pending"]}}).apply(stmt)
        # WHERE user.status IN ('active', 'pending')
    """

    def __init__(self, model: type[Any], where: Mapping[Any, Any] | None):
        self.clause = compile_where(model, where)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply predicate to statement."""
        if self.clause is None:
            return statement
        return statement.where(self.clause)


class OrderBy(StatementFilter):
    """Column ordering from ``(field, direction)`` entries.

    Example:
        stmt = OrderBy(User, [("created_at", "desc"), ("id", "asc")]).apply(stmt)
    """

    def __init__(self, model: type[Any], order: Sequence[Any] | None):
        self.expressions = compile_order(model, order)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering to statement."""
        if not self.expressions:
            return statement
        return statement.order_by(*self.expressions)


class LimitOffset(StatementFilter):
    """Pagination using LIMIT and OFFSET.

    Example:
        # Third page of 50
        stmt = LimitOffset(limit=50, offset=100).apply(stmt)
    """

    def __init__(self, limit: int | None = None, offset: int | None = None):
        """Initialize pagination filter.

        Args:
            limit: Maximum number of results, None for no limit
            offset: Number of results to skip, None for none
        """
        self.limit = limit
        self.offset = offset

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        if self.limit is not None:
            statement = statement.limit(self.limit)
        if self.offset is not None:
            statement = statement.offset(self.offset)
        return statement


__all__ = [
    "LimitOffset",
    "OrderBy",
    "PredicateCompiler",
    "PredicateFilter",
    "StatementFilter",
    "column_for",
    "compile_order",
    "compile_where",
]
