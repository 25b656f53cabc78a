"""Shared fixtures for integration tests.

These tests use real stores and backends (DiskcacheStore, DiskcacheBackend,
MemoryBackend) instead of mocks.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cachebridge.infrastructure.backends import DiskcacheBackend
from cachebridge.infrastructure.cache import AsyncCacheFacade, DiskcacheStore


@pytest.fixture()
def diskcache_store(tmp_path: Path) -> DiskcacheStore:
    """Real DiskcacheStore backed by tmp_path (auto-cleaned)."""
    with DiskcacheStore(directory=tmp_path / "store", default_lifetime=3600) as store:
        yield store


@pytest.fixture()
def diskcache_backend(tmp_path: Path) -> DiskcacheBackend:
    backend = DiskcacheBackend(tmp_path / "backend")
    yield backend
    backend.close()


@pytest.fixture()
def facade(diskcache_store: DiskcacheStore) -> AsyncCacheFacade:
    return AsyncCacheFacade(diskcache_store)
