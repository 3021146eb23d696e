"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process.

Usage:
    from model_pagination.core.settings.loader import get_pagination_settings

    settings = get_pagination_settings()  # First call: loads and validates
    settings = get_pagination_settings()  # Subsequent calls: cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()

    Or pass an explicit instance:
    with_pagination(settings=PaginationSettings(page_size=5))
"""

from __future__ import annotations

from functools import lru_cache

from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all cached settings so the next access reloads them."""
    get_pagination_settings.cache_clear()
    get_logging_settings.cache_clear()
