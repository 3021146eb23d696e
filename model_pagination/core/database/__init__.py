"""SQLAlchemy model capability for the paginator.

Model:
    - SQLAlchemyModel[T]: count/find_all over one mapped class, one session per call

Query Filters:
    - PredicateFilter: WHERE clause from a predicate tree
    - OrderBy: ORDER BY from (field, direction) entries
    - LimitOffset: LIMIT/OFFSET
    - compile_where / PredicateCompiler: predicate tree to SQLAlchemy boolean clause

Exceptions:
    - RepositoryError: base class
    - InvalidFilterError: unknown field, relationship, operator or operand shape
"""

from model_pagination.core.database.exceptions import InvalidFilterError, RepositoryError
from model_pagination.core.database.filters import (
    LimitOffset,
    OrderBy,
    PredicateCompiler,
    PredicateFilter,
    StatementFilter,
    column_for,
    compile_order,
    compile_where,
)
from model_pagination.core.database.repository import SQLAlchemyModel

__all__ = [
    "InvalidFilterError",
    "LimitOffset",
    "OrderBy",
    "PredicateCompiler",
    "PredicateFilter",
    "RepositoryError",
    "SQLAlchemyModel",
    "StatementFilter",
    "column_for",
    "compile_order",
    "compile_where",
]
