"""Shared test fixtures for cachebridge test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from cachebridge.domain.entities import CacheEntry
from cachebridge.infrastructure.backends import MemoryBackend

# Whole-second epoch start keeps expiry arithmetic exact.
_EPOCH_START = 1_700_000_000.0


class FakeClock:
    """Manually advanced wall clock (epoch seconds)."""

    def __init__(self, start: float = _EPOCH_START) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Clock / backend fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_backend(clock: FakeClock) -> MemoryBackend:
    """Isolated MemoryBackend driven by the fake clock."""
    return MemoryBackend(clock=clock)


# ---------------------------------------------------------------------------
# Mock store fixtures
# ---------------------------------------------------------------------------


def make_entry(key: str, value: Any = None, *, hit: bool = True) -> CacheEntry:
    return CacheEntry(key, hit, value if hit else None)


@pytest.fixture()
def mock_store() -> MagicMock:
    """Mock BatchCacheStore (synchronous methods)."""
    store = MagicMock()
    store.clear.return_value = True
    store.delete.return_value = True
    store.delete_items.return_value = True
    store.has.return_value = False
    store.save.return_value = True
    store.get.side_effect = lambda key: make_entry(key, hit=False)
    store.get_items.side_effect = lambda keys: {
        key: make_entry(key, hit=False) for key in keys
    }
    return store
