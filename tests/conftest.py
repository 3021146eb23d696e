"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolated PaginationSettings and cache resets
    - Model Fixtures: in-memory model capabilities that record their queries

Database fixtures (SQLite via aiosqlite) live in
tests/unit/test_core/test_database/conftest.py.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from model_pagination.core.settings import PaginationSettings, clear_all_caches

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Drop cached settings so environment changes in one test do not leak."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def pagination_settings() -> PaginationSettings:
    """Module defaults matching the documented ones, independent of the environment."""
    return PaginationSettings(
        method_name="paginate",
        primary_key_field="id",
        one_base_index=False,
        page_size=1,
    )


# ============================================================================
# Model Fixtures
# ============================================================================


class RecordingModel:
    """Async model capability over a list of rows.

    ``count`` returns the number of rows and ``find_all`` slices them by
    offset/limit; every call's keyword arguments are recorded.
    """

    def __init__(self, rows: list[Any] | None = None):
        self.rows = list(rows or [])
        self.count_calls: list[dict[str, Any]] = []
        self.find_all_calls: list[dict[str, Any]] = []

    async def count(self, **query: Any) -> int:
        self.count_calls.append(query)
        return len(self.rows)

    async def find_all(self, **query: Any) -> list[Any]:
        self.find_all_calls.append(query)
        offset = query.get("offset", 0)
        limit = query.get("limit", len(self.rows))
        return self.rows[offset : offset + limit]

    def describe(self) -> str:
        return f"RecordingModel({len(self.rows)} rows)"


class SyncRecordingModel(RecordingModel):
    """Same as RecordingModel with plain (non-async) methods."""

    def count(self, **query: Any) -> int:  # type: ignore[override]
        self.count_calls.append(query)
        return len(self.rows)

    def find_all(self, **query: Any) -> list[Any]:  # type: ignore[override]
        self.find_all_calls.append(query)
        offset = query.get("offset", 0)
        limit = query.get("limit", len(self.rows))
        return self.rows[offset : offset + limit]


def make_rows(n: int) -> list[dict[str, Any]]:
    """Rows with ids 1..n."""
    return [{"id": i, "name": f"row-{i}"} for i in range(1, n + 1)]


@pytest.fixture
def model_25() -> RecordingModel:
    """Recording model holding 25 rows."""
    return RecordingModel(make_rows(25))


@pytest.fixture
def empty_model() -> RecordingModel:
    """Recording model holding no rows."""
    return RecordingModel()


@pytest.fixture
def model_factory():
    """Build recording models: ``model_factory(rows, sync=False)``."""

    def build(rows: int | list[Any] = 0, *, sync: bool = False) -> RecordingModel:
        data = make_rows(rows) if isinstance(rows, int) else rows
        return SyncRecordingModel(data) if sync else RecordingModel(data)

    return build
