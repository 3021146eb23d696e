"""Pagination settings.

Module-level defaults for every paginator built with ``with_pagination()``.
Options passed to ``with_pagination()`` override these, and options passed to
the pagination call override both.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_PAGE_SIZE=25, PAGINATION_ONE_BASE_INDEX=true
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        method_name: Attribute name the pagination coroutine is exposed under.
        primary_key_field: Field appended to the order list as a tie-breaker.
        one_base_index: Page numbering starts at 1 instead of 0.
        page_size: Default number of rows per page.

    Example:
        settings = PaginationSettings(page_size=20)
        paginate_users = with_pagination(settings=settings)
    """

    method_name: str = Field(
        default="paginate",
        min_length=1,
        description="Name of the pagination method on the bound model",
    )
    primary_key_field: str = Field(
        default="id",
        min_length=1,
        description="Primary key field used as the tie-break order key",
    )
    one_base_index: bool = Field(
        default=False,
        description="Page index starts from 1 when true",
    )
    page_size: int = Field(
        default=1,
        ge=1,
        description="Default page size when not specified",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
