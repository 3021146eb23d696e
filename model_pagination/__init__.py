"""Offset pagination with deterministic ordering for model capabilities.

    from model_pagination import Op, with_pagination

    users = with_pagination(page_size=20, one_base_index=True)(user_model)
    page = await users.paginate(page_index=1, where={"age": {Op.gte: 18}})
"""

from model_pagination.core.pagination import (
    InvalidPageIndexError,
    ModelCapability,
    Op,
    PaginatedModel,
    PaginationError,
    PaginationResult,
    from_human,
    to_human,
    with_pagination,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidPageIndexError",
    "ModelCapability",
    "Op",
    "PaginatedModel",
    "PaginationError",
    "PaginationResult",
    "__version__",
    "from_human",
    "to_human",
    "with_pagination",
]
