"""Database model exceptions.

Raised by the SQLAlchemy model capability while turning a query
specification into a statement. Errors from the database driver itself are
not wrapped.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for SQLAlchemy model operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

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


class InvalidFilterError(RepositoryError):
    """Query specification the model cannot compile.

    Raised for unknown fields, operators the position does not allow, and
    malformed operands such as a ``between`` bound that is not a pair.
    """

    def __init__(self, message: str, filter_name: str | None = None):
        """Initialize invalid filter error.

        Args:
            message: Error description
            filter_name: Field or operator involved (if applicable)
        """
        details = {"filter": filter_name} if filter_name else {}
        super().__init__(message, details=details)


__all__ = [
    "InvalidFilterError",
    "RepositoryError",
]
