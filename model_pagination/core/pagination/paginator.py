"""Offset pagination for model capabilities.

A model capability is anything with ``count(**query)`` and
``find_all(**query)`` methods, sync or async. ``with_pagination()`` builds a
binder that wraps such a model into a :class:`PaginatedModel`, which adds one
coroutine (``paginate`` by default) and forwards every other attribute to the
wrapped model.

Example:
    from model_pagination import Op, with_pagination
    from model_pagination.core.database import SQLAlchemyModel

    users = with_pagination(page_size=20, order=[("name", "asc")])(
        SQLAlchemyModel(User, session_factory)
    )

    page = await users.paginate(page_index=2, where={"age": {Op.gte: 18}})
    # find_all(order=[("name", "asc"), ("id", "asc")], offset=40, limit=20, ...)
    print(page.count, page.page_count, page.where)
    # 137 7 {"age": {"greater then or equal": 18}}

Every page is ordered by the primary key as the last sort key, so rows with
equal sort values cannot move between pages from one query to the next.
"""

from __future__ import annotations

import inspect
import logging
import math
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from model_pagination.core.pagination.exceptions import InvalidPageIndexError
from model_pagination.core.pagination.humanize import to_human
from model_pagination.core.pagination.options import PageRequest, PaginationConfig
from model_pagination.core.pagination.schemas import PaginationResult
from model_pagination.core.settings import get_pagination_settings
from model_pagination.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from model_pagination.core.settings.pagination import PaginationSettings

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


class ModelCapability(Protocol):
    """Query operations a model must provide to be paginated.

    Both methods accept ``where``, ``include``, ``attributes``, ``order``,
    ``offset``, ``limit`` and arbitrary pass-through options as keywords, and
    may return the value directly or an awaitable of it. ``count`` is
    expected to ignore ordering, projection and bounds.
    """

    def count(self, **query: Any) -> int | Awaitable[int]: ...

    def find_all(self, **query: Any) -> Sequence[Any] | Awaitable[Sequence[Any]]: ...


R = TypeVar("R")


async def _resolve(value: R | Awaitable[R]) -> R:
    if inspect.isawaitable(value):
        return await value
    return value


def _order_field(entry: Any) -> Any:
    if isinstance(entry, str):
        return entry
    if not entry:
        msg = f"Order entry must name a field, got {entry!r}"
        raise ValueError(msg)
    return entry[0]


def with_tie_breaker(
    order: Sequence[Any],
    primary_key_field: str,
    *,
    descending: bool = False,
) -> list[Any]:
    """Return ``order`` with the primary key appended unless already present.

    Args:
        order: Order entries, ``(field, direction)`` pairs or bare field names
        primary_key_field: Field that uniquely identifies a row
        descending: Direction of the appended entry

    Returns:
        A new list; ``order`` itself is left untouched.

    Raises:
        ValueError: If an entry is empty
    """
    entries = list(order)
    if primary_key_field not in [_order_field(entry) for entry in entries]:
        entries.append((primary_key_field, "desc" if descending else "asc"))
    return entries


M = TypeVar("M", bound=ModelCapability)


class PaginatedModel(Generic[M]):
    """A model capability with a pagination coroutine attached.

    The pagination coroutine is exposed as the configured ``method_name``
    (``paginate`` by default). Any other attribute is looked up on the
    wrapped model, so the wrapper can stand in for it.

    Attributes:
        model: The wrapped model capability
        config: Frozen pagination defaults
    """

    def __init__(self, model: M, config: PaginationConfig) -> None:
        """Wrap a model.

        Args:
            model: Object providing ``count`` and ``find_all``
            config: Resolved configure-time options
        """
        self.model = model
        self.config = config
        setattr(self, config.method_name, self.fetch_page)

    def __getattr__(self, name: str) -> Any:
        # Only called for names not found on the wrapper itself
        if name in {"model", "config"}:
            raise AttributeError(name)
        return getattr(self.model, name)

    def __repr__(self) -> str:
        return f"PaginatedModel({self.model!r}, method_name={self.config.method_name!r})"

    async def fetch_page(self, **options: Any) -> PaginationResult[Any]:
        """Fetch one page of rows and the total row count.

        Args:
            **options: ``primary_desc``, ``page_size``, ``page_index``,
                ``where``, ``order``, ``attributes``, ``include``; anything
                else except ``offset``/``limit`` is forwarded to both
                ``count`` and ``find_all``.

        Returns:
            PaginationResult for the requested page

        Raises:
            InvalidPageIndexError: If the page index is below the index base
            pydantic.ValidationError: If ``page_size`` is not a positive integer
            ValueError: If an order entry is empty

        Example:
            result = await users.paginate(page_index=1, primary_desc=True)
        """
        config = self.config
        request = PageRequest.resolve(config, options)

        zero_base_page_index = request.page_index
        if config.one_base_index:
            zero_base_page_index = request.page_index - 1
        if zero_base_page_index < 0:
            logger.info(
                "Page index out of range",
                extra={
                    "page_index": request.page_index,
                    "zero_base_page_index": zero_base_page_index,
                    "operation": "pagination.fetch_page",
                },
            )
            raise InvalidPageIndexError(request.page_index, zero_base_page_index)

        order = with_tie_breaker(
            request.order,
            config.primary_key_field,
            descending=request.primary_desc,
        )

        query: dict[str, Any] = {"order": order}
        if request.include:
            query["include"] = request.include
        if request.where:
            query["where"] = request.where
        if request.attributes:
            query["attributes"] = request.attributes
        query["offset"] = zero_base_page_index * request.page_size
        query["limit"] = request.page_size

        total = await _resolve(
            self.model.count(
                where=query.get("where"),
                include=query.get("include"),
                **request.pass_through,
            )
        )
        page_count = math.ceil(total / request.page_size)
        entities = await _resolve(self.model.find_all(**query, **request.pass_through))

        result = PaginationResult(
            entities=entities,
            page_index=zero_base_page_index + 1 if config.one_base_index else zero_base_page_index,
            count=total,
            page_size=request.page_size,
            page_count=page_count,
            where=to_human(request.where),
            order=order,
            attributes=request.attributes,
            include=request.include,
            one_base_index=config.one_base_index,
        )
        _lazy.debug(
            lambda: f"pagination.fetch_page: offset={query['offset']} limit={query['limit']} "
            f"where={result.where} -> {len(entities)}/{total} rows, page {result.page_index} of {page_count}"
        )
        return result


def with_pagination(
    *,
    settings: PaginationSettings | None = None,
    **options: Any,
) -> Callable[[ModelCapability], PaginatedModel[Any]]:
    """Configure a paginator and return a binder for models.

    Args:
        settings: Module-level defaults; loaded from the environment when omitted
        **options: Configure-time defaults: ``method_name``,
            ``primary_key_field``, ``one_base_index``, ``page_size``,
            ``where``, ``order``, ``attributes``, ``include``

    Returns:
        A function that wraps a model into a PaginatedModel. The model passed
        to it is not modified.

    Raises:
        pydantic.ValidationError: Unknown option or invalid value

    Example:
        paginate_posts = with_pagination(one_base_index=True, page_size=10)
        posts = paginate_posts(post_model)
        first_page = await posts.paginate()
    """
    config = PaginationConfig.from_options(options, settings or get_pagination_settings())
    _lazy.debug(lambda: f"pagination.configure: {config!r}")

    def bind(model: ModelCapability) -> PaginatedModel[Any]:
        return PaginatedModel(model, config)

    return bind


__all__ = [
    "ModelCapability",
    "PaginatedModel",
    "with_pagination",
    "with_tie_breaker",
]
