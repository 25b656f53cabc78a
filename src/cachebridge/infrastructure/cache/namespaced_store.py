"""Namespaced, expiring store over a raw key/value backend."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any, Callable

import structlog

from cachebridge.domain.entities import CacheEntry
from cachebridge.domain.exceptions import (
    ConfigurationError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from cachebridge.domain.ports import KeyValueBackend
from cachebridge.infrastructure.backends import shared_memory_backend

log = structlog.get_logger(__name__)


class NamespacedExpiringStore:
    """Minimal synchronous store: ``namespace/key`` keys, entry expiry -> TTL.

    - Write-through: ``save_deferred`` and ``commit`` do nothing extra.
    - Batch calls (``get_items`` / ``delete_items``) are not implemented,
      so this store only satisfies BasicCacheStore.
    - Backend errors propagate unchanged.

    Args:
        namespace: Key prefix (joined with ``/``).
        default_lifetime: TTL in seconds for entries without expiry (0 = none).
        backend: Raw backend (default: the process-wide MemoryBackend).
        clock: Wall-clock source used to turn entry expiry into a TTL.

    Raises:
        ConfigurationError: If the backend is unavailable.
    """

    def __init__(
        self,
        namespace: str = "",
        default_lifetime: int = 0,
        *,
        backend: KeyValueBackend | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if backend is None:
            backend = shared_memory_backend()
        if not self.is_supported(backend):
            raise ConfigurationError(
                f"Cache backend {type(backend).__name__} is not enabled"
            )

        self.namespace = namespace
        self.default_lifetime = default_lifetime
        self._backend = backend
        self._clock = clock

    @staticmethod
    def is_supported(backend: KeyValueBackend | None = None) -> bool:
        """Whether *backend* (default: the shared memory backend) is usable."""
        if backend is None:
            backend = shared_memory_backend()
        return backend.is_enabled()

    def build_key(self, key: str) -> str:
        return f"{self.namespace}/{key}"

    def get(self, key: str) -> CacheEntry:
        value, found = self._backend.fetch(self.build_key(key))
        log.debug("cache_get", namespace=self.namespace, key=key, hit=found)
        return CacheEntry(key, found, value if found else None, clock=self._clock)

    def has(self, key: str) -> bool:
        return self._backend.exists(self.build_key(key))

    def save(self, entry: Any) -> bool:
        if not isinstance(entry, CacheEntry):
            raise TypeMismatchError(
                f"entry must be a CacheEntry, got {type(entry).__name__!r}"
            )

        if entry.expiry is not None:
            # Truncates toward zero. 0 means "no expiry" to the backend, so an
            # entry with nothing left goes down as already expired.
            ttl = int(entry.expiry - self._clock())
            if ttl <= 0:
                ttl = -1
        else:
            ttl = self.default_lifetime

        stored = self._backend.store(self.build_key(entry.key), entry.get(), ttl)
        log.debug("cache_set", namespace=self.namespace, key=entry.key, ttl=ttl)
        return stored

    def save_deferred(self, entry: Any) -> bool:
        return self.save(entry)

    def commit(self) -> bool:
        return True

    def delete(self, key: str) -> bool:
        return self._backend.delete(self.build_key(key))

    def delete_items(self, keys: Sequence[str]) -> bool:
        raise UnsupportedOperationError(
            f"{type(self).__name__}.delete_items() is not implemented"
        )

    def get_items(self, keys: Sequence[str]) -> dict[str, CacheEntry]:
        raise UnsupportedOperationError(
            f"{type(self).__name__}.get_items() is not implemented"
        )

    def clear(self) -> bool:
        cleared = self._backend.delete_matching_prefix(f"{self.namespace}/")
        log.info("cache_namespace_cleared", namespace=self.namespace, ok=cleared)
        return cleared
