"""Pagination exceptions.

Only conditions detected by the paginator itself live here. Failures raised
by a model's ``count``/``find_all`` propagate unchanged.
"""
from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for pagination operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize pagination error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidPageIndexError(PaginationError):
    """Requested page resolves to a negative zero-based index.

    Typically a one-based paginator called with ``page_index=0``.

    Attributes:
        page_index: Page index as supplied by the caller
        zero_base_page_index: The same index converted to zero-based form
    """

    def __init__(self, page_index: int, zero_base_page_index: int):
        """Initialize invalid page index error.

        Args:
            page_index: Page index in the caller's index base
            zero_base_page_index: Normalized zero-based index (negative)
        """
        self.page_index = page_index
        self.zero_base_page_index = zero_base_page_index
        super().__init__(
            "page index under zero-base < 1",
            details={
                "page_index": page_index,
                "zero_base_page_index": zero_base_page_index,
            },
        )

    def __repr__(self) -> str:
        """Repr for debugging."""
        return (
            f"InvalidPageIndexError(page_index={self.page_index!r}, "
            f"zero_base_page_index={self.zero_base_page_index!r})"
        )


__all__ = [
    "InvalidPageIndexError",
    "PaginationError",
]
