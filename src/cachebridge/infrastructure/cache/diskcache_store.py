"""Diskcache store - SQLite-based batch-capable store without daemon process."""

from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Callable

import structlog
from diskcache import Cache as DiskCache

from cachebridge.domain.entities import CacheEntry
from cachebridge.domain.exceptions import TypeMismatchError

log = structlog.get_logger(__name__)

_MISSING = object()


class DiskcacheStore:
    """Synchronous cache pool over diskcache.Cache with batch support.

    - Satisfies BatchCacheStore, so it can back AsyncCacheFacade.
    - Entries whose expiry has already passed are deleted, not stored.
    - Unlike NamespacedExpiringStore, the remaining lifetime is not truncated.
    - Implements context manager (``with store:``), closing the SQLite handle.

    Args:
        directory: SQLite DB path (default: ``./cache``).
        default_lifetime: TTL in seconds for entries without expiry (0 = none).
        clock: Wall-clock source used to turn entry expiry into a TTL.
    """

    def __init__(
        self,
        directory: str | Path = "./cache",
        default_lifetime: int = 0,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.default_lifetime = default_lifetime
        self._clock = clock
        self._cache = DiskCache(str(self.directory))

        log.info(
            "diskcache_store_opened",
            directory=str(self.directory),
            default_lifetime=default_lifetime,
        )

    # --- Context Manager ---
    def __enter__(self) -> DiskcacheStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._cache.close()
        log.info("diskcache_store_closed", directory=str(self.directory))

    # --- BatchCacheStore implementation ---
    def get(self, key: str) -> CacheEntry:
        value = self._cache.get(key, default=_MISSING)
        hit = value is not _MISSING
        log.debug("cache_get", key=key, hit=hit)
        return CacheEntry(key, hit, value if hit else None, clock=self._clock)

    def get_items(self, keys: Sequence[str]) -> dict[str, CacheEntry]:
        return {key: self.get(key) for key in keys}

    def has(self, key: str) -> bool:
        return key in self._cache

    def save(self, entry: Any) -> bool:
        if not isinstance(entry, CacheEntry):
            raise TypeMismatchError(
                f"entry must be a CacheEntry, got {type(entry).__name__!r}"
            )

        ttl: float
        if entry.expiry is not None:
            # diskcache takes float expiry, so the remaining lifetime is kept as is.
            ttl = entry.expiry - self._clock()
            if ttl <= 0:
                self._cache.delete(entry.key)
                log.debug("cache_set_expired", key=entry.key, ttl=ttl)
                return True
        else:
            ttl = self.default_lifetime

        stored = self._cache.set(entry.key, entry.get(), expire=ttl or None)
        log.debug("cache_set", key=entry.key, ttl=ttl)
        return stored

    def save_deferred(self, entry: Any) -> bool:
        return self.save(entry)

    def commit(self) -> bool:
        return True

    def delete(self, key: str) -> bool:
        # Deleting an absent key is not a failure.
        self._cache.delete(key)
        return True

    def delete_items(self, keys: Sequence[str]) -> bool:
        for key in keys:
            self._cache.delete(key)
        log.debug("cache_delete_items", count=len(keys))
        return True

    def clear(self) -> bool:
        removed = self._cache.clear()
        log.warning("cache_cleared", directory=str(self.directory), removed=removed)
        return True
