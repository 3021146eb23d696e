"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Page index out of range", extra={"page_index": 0})

    # Lazy evaluation for expensive messages
    from model_pagination.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"where={to_human(where)}")  # Only runs if DEBUG enabled

    # Application entrypoints
    from model_pagination.infra.logging import setup_logging

    setup_logging()  # LOG_* environment variables
"""

from model_pagination.infra.logging.config import configure_logging, setup_logging
from model_pagination.infra.logging.formatters import JSONFormatter
from model_pagination.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
