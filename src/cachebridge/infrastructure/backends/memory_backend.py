"""Process-local in-memory backend with native TTL support."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import structlog

log = structlog.get_logger(__name__)

_SHARED_BACKEND: MemoryBackend | None = None
_SHARED_LOCK = threading.Lock()


class MemoryBackend:
    """Flat key/value map shared by every store in the process.

    - TTL is in whole seconds: ``> 0`` expires, ``0`` never expires,
      ``< 0`` is stored already expired.
    - Expiry is checked at whole-second resolution: a key written during
      second ``c`` with TTL ``t`` lives until the clock passes second ``c + t``.
    - Expired keys are purged lazily on access.
    - A lock guards the map, so stores layered on top need none.

    Args:
        clock: Wall-clock source (epoch seconds).
        enabled: ``False`` simulates an unavailable backend.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        enabled: bool = True,
    ) -> None:
        self._clock = clock
        self._enabled = enabled
        self._data: dict[str, tuple[Any, int, int]] = {}
        self._lock = threading.Lock()

    def is_enabled(self) -> bool:
        return self._enabled

    def store(self, key: str, value: Any, ttl: int) -> bool:
        created = int(self._clock())
        with self._lock:
            self._data[key] = (value, created, ttl)
        return True

    def fetch(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            if not self._alive(key):
                return None, False
            return self._data[key][0], True

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._alive(key)

    def delete(self, key: str) -> bool:
        with self._lock:
            if not self._alive(key):
                return False
            del self._data[key]
            return True

    def delete_matching_prefix(self, prefix: str) -> bool:
        with self._lock:
            doomed = [key for key in self._data if key.startswith(prefix)]
            for key in doomed:
                del self._data[key]
        log.debug("memory_backend_prefix_deleted", prefix=prefix, count=len(doomed))
        return True

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def _alive(self, key: str) -> bool:
        # Caller holds self._lock.
        item = self._data.get(key)
        if item is None:
            return False
        _, created, ttl = item
        if ttl != 0 and int(self._clock()) > created + ttl:
            del self._data[key]
            return False
        return True


def shared_memory_backend() -> MemoryBackend:
    """Return the process-wide backend, creating it on first use."""
    global _SHARED_BACKEND
    with _SHARED_LOCK:
        if _SHARED_BACKEND is None:
            _SHARED_BACKEND = MemoryBackend()
            log.info("memory_backend_created")
        return _SHARED_BACKEND
