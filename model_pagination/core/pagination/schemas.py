"""Pagination result envelope."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class PaginationResult(Generic[T]):
    """One page of entities plus the parameters that produced it.

    Attributes:
        entities: Rows of the current page
        page_index: Current page, in the paginator's index base
        count: Total matching rows, ignoring pagination
        page_size: Rows per page
        page_count: Total number of pages, ``ceil(count / page_size)``
        where: Predicate tree with human-readable operator names
        order: Order entries sent to the model, tie-breaker included
        attributes: Projection sent to the model
        include: Relations sent to the model
        one_base_index: Whether ``page_index`` counts from 1

    Example:
        result = await users.paginate(page_index=0, page_size=20)
        print(f"Page {result.page_index} of {result.page_count}: {len(result.entities)} rows")
        if result.has_next:
            result = await users.paginate(page_index=result.page_index + 1, page_size=20)
    """

    entities: Sequence[T]
    page_index: int
    count: int
    page_size: int
    page_count: int
    where: dict[Any, Any] | None = None
    order: Sequence[Any] = ()
    attributes: Any = None
    include: Any = None
    one_base_index: bool = False

    @property
    def zero_base_page_index(self) -> int:
        """Current page counted from 0."""
        return self.page_index - 1 if self.one_base_index else self.page_index

    @property
    def offset(self) -> int:
        """Rows skipped before this page."""
        return self.zero_base_page_index * self.page_size

    @property
    def has_next(self) -> bool:
        """Whether there are pages after the current one."""
        return self.zero_base_page_index + 1 < self.page_count

    @property
    def has_prev(self) -> bool:
        """Whether there are pages before the current one."""
        return self.zero_base_page_index > 0

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for logging or JSON responses."""
        data = {field.name: getattr(self, field.name) for field in fields(self)}
        data["entities"] = list(self.entities)
        data["order"] = list(self.order)
        return data


__all__ = ["PaginationResult"]
