"""Option resolution for paginators.

Options cascade through three explicit layers, highest precedence first:

    1. call-time options        paginated.paginate(page_index=2)
    2. configure-time options   with_pagination(page_size=20)
    3. module defaults          PaginationSettings (PAGINATION_* env vars)

``PaginationConfig`` is the frozen result of layers 2 and 3. ``PageRequest``
is the per-call result of layer 1 on top of a ``PaginationConfig``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from model_pagination.core.settings.pagination import PaginationSettings

# Names PaginatedModel already uses for its own attributes
RESERVED_METHOD_NAMES = frozenset({"model", "config", "fetch_page"})

REQUEST_OPTIONS = frozenset(
    {"primary_desc", "page_size", "page_index", "where", "order", "attributes", "include"}
)

# Owned by pagination; never forwarded from the caller
PAGINATION_OWNED_OPTIONS = frozenset({"offset", "limit"})


def resolve_options(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge option layers, highest precedence first.

    A key present in an earlier layer wins even when its value is None, so a
    caller can explicitly clear a configured ``where``.

    Args:
        *layers: Option mappings ordered from highest to lowest precedence

    Returns:
        A new dict with one entry per key found in any layer

    Example:
        resolve_options({"page_size": 5}, {"page_size": 20, "where": None})
        # {"page_size": 5, "where": None}
    """
    resolved: dict[str, Any] = {}
    for layer in reversed(layers):
        resolved.update(layer)
    return resolved


def module_defaults(settings: PaginationSettings) -> dict[str, Any]:
    """Lowest option layer: settings plus the query defaults."""
    return {
        "method_name": settings.method_name,
        "primary_key_field": settings.primary_key_field,
        "one_base_index": settings.one_base_index,
        "page_size": settings.page_size,
        "where": None,
        "order": (),
        "attributes": None,
        "include": None,
    }


class PaginationConfig(BaseModel):
    """Defaults shared by every call of one paginator.

    Attributes:
        method_name: Attribute name of the pagination coroutine
        primary_key_field: Tie-break order key
        one_base_index: Page numbering starts at 1
        page_size: Rows per page
        where: Default predicate tree
        order: Default order entries, ``(field, direction)`` pairs
        attributes: Default projection
        include: Default relations to load
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    method_name: str
    primary_key_field: str = Field(min_length=1)
    one_base_index: bool
    page_size: int = Field(ge=1)
    where: Any = None
    order: tuple[Any, ...] = ()
    attributes: Any = None
    include: Any = None

    @field_validator("method_name")
    @classmethod
    def validate_method_name(cls, v: str) -> str:
        """Require a public identifier that does not shadow PaginatedModel."""
        if not v.isidentifier() or v.startswith("_"):
            msg = f"method_name must be a public identifier, got {v!r}"
            raise ValueError(msg)
        if v in RESERVED_METHOD_NAMES:
            msg = f"method_name {v!r} is reserved"
            raise ValueError(msg)
        return v

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v: Any) -> Any:
        """Treat an explicit None as no ordering."""
        return () if v is None else v

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any],
        settings: PaginationSettings,
    ) -> PaginationConfig:
        """Resolve configure-time options over module defaults.

        Raises:
            pydantic.ValidationError: Unknown option or invalid value
        """
        return cls.model_validate(resolve_options(options, module_defaults(settings)))

    @property
    def default_page_index(self) -> int:
        """First page in the configured index base."""
        return 1 if self.one_base_index else 0

    def request_defaults(self) -> dict[str, Any]:
        """Second option layer as seen by a single call."""
        return {
            "primary_desc": False,
            "page_size": self.page_size,
            "page_index": self.default_page_index,
            "where": self.where,
            "order": self.order,
            "attributes": self.attributes,
            "include": self.include,
        }


class PageRequest(BaseModel):
    """Fully resolved parameters of one pagination call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    primary_desc: bool = False
    page_size: int = Field(ge=1)
    page_index: int
    where: Any = None
    order: tuple[Any, ...] = ()
    attributes: Any = None
    include: Any = None
    pass_through: dict[str, Any] = Field(default_factory=dict)

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v: Any) -> Any:
        """Treat an explicit None as no ordering."""
        return () if v is None else v

    @classmethod
    def resolve(cls, config: PaginationConfig, options: Mapping[str, Any]) -> PageRequest:
        """Resolve call-time options over a paginator's configuration.

        Options outside REQUEST_OPTIONS are kept as pass-through options,
        except ``offset`` and ``limit`` which are dropped.
        """
        recognized = {k: v for k, v in options.items() if k in REQUEST_OPTIONS}
        pass_through = {
            k: v
            for k, v in options.items()
            if k not in REQUEST_OPTIONS and k not in PAGINATION_OWNED_OPTIONS
        }
        return cls.model_validate(
            {
                **resolve_options(recognized, config.request_defaults()),
                "pass_through": pass_through,
            }
        )


__all__ = [
    "PAGINATION_OWNED_OPTIONS",
    "REQUEST_OPTIONS",
    "RESERVED_METHOD_NAMES",
    "PageRequest",
    "PaginationConfig",
    "module_defaults",
    "resolve_options",
]
