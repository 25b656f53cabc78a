"""Diskcache backend - SQLite-based raw backend without daemon process."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)

_MISSING = object()


class DiskcacheBackend:
    """Raw key/value backend over diskcache.Cache.

    - ``ttl == 0`` stores without expiry; negative TTLs land already expired.
    - ``delete_matching_prefix`` scans keys (diskcache has no prefix index).

    Args:
        directory: SQLite DB path.
    """

    def __init__(self, directory: str | Path = "./cache") -> None:
        self.directory = Path(directory)
        self._cache: DiskCache | None = DiskCache(str(self.directory))
        log.info("diskcache_backend_opened", directory=str(self.directory))

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()
            self._cache = None
            log.info("diskcache_backend_closed", directory=str(self.directory))

    def is_enabled(self) -> bool:
        return self._cache is not None

    def store(self, key: str, value: Any, ttl: int) -> bool:
        return self._require().set(key, value, expire=ttl if ttl != 0 else None)

    def fetch(self, key: str) -> tuple[Any, bool]:
        value = self._require().get(key, default=_MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def exists(self, key: str) -> bool:
        # diskcache.Cache.__contains__ checks existence + expiry
        return key in self._require()

    def delete(self, key: str) -> bool:
        return self._require().delete(key)

    def delete_matching_prefix(self, prefix: str) -> bool:
        cache = self._require()
        doomed = [key for key in cache if isinstance(key, str) and key.startswith(prefix)]
        for key in doomed:
            cache.delete(key)
        log.debug("diskcache_backend_prefix_deleted", prefix=prefix, count=len(doomed))
        return True

    def _require(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(f"Diskcache backend at {self.directory} is closed")
        return self._cache
