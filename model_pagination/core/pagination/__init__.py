"""Offset pagination and predicate humanizing for model capabilities.

Paginator:
    - with_pagination(**options): configure defaults, returns a model binder
    - PaginatedModel: model wrapper exposing the pagination coroutine
    - PaginationResult: page of entities plus count and echoed parameters

Humanizer:
    - to_human(tree): operator tokens to human-readable names
    - from_human(tree): human-readable names back to operator tokens
    - Op: operator token vocabulary

Usage:
    users = with_pagination(page_size=20)(user_model)
    page = await users.paginate(page_index=3, where={"name": {Op.like: "a%"}})
    logger.info("Listed users", extra={"where": page.where})
"""

from model_pagination.core.pagination.exceptions import (
    InvalidPageIndexError,
    PaginationError,
)
from model_pagination.core.pagination.humanize import PredicateTree, from_human, to_human
from model_pagination.core.pagination.operators import (
    AMBIGUOUS_NAMES,
    DEHUMANIZED_OPERATORS,
    HUMANIZED_OPERATORS,
    Op,
)
from model_pagination.core.pagination.options import (
    PageRequest,
    PaginationConfig,
    resolve_options,
)
from model_pagination.core.pagination.paginator import (
    ModelCapability,
    PaginatedModel,
    with_pagination,
    with_tie_breaker,
)
from model_pagination.core.pagination.schemas import PaginationResult

__all__ = [
    "AMBIGUOUS_NAMES",
    "DEHUMANIZED_OPERATORS",
    "HUMANIZED_OPERATORS",
    "InvalidPageIndexError",
    "ModelCapability",
    "Op",
    "PageRequest",
    "PaginatedModel",
    "PaginationConfig",
    "PaginationError",
    "PaginationResult",
    "PredicateTree",
    "from_human",
    "resolve_options",
    "to_human",
    "with_pagination",
    "with_tie_breaker",
]
