"""Cache Port - future-returning cache interface."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any, Protocol, Union, runtime_checkable

Ttl = Union[float, int, timedelta, None]


@runtime_checkable
class AsyncCachePort(Protocol):
    """Port for a non-blocking key-value cache with TTL support.

    Implementations:
      - AsyncCacheFacade (any BatchCacheStore underneath)

    Every call does its work immediately and returns an already-resolved
    future. Store failures surface as ``False`` / ``default``, never as a
    rejected future:
        assert await cache.set("key", value, ttl=1.5)
    """

    def get(self, key: str, default: Any = None) -> asyncio.Future[Any]:
        """Value on hit, else *default* (also on store failure)."""
        ...

    def get_multiple(
        self, keys: Iterable[str], default: Any = None
    ) -> asyncio.Future[dict[str, Any]]: ...

    def set(self, key: str, value: Any, ttl: Ttl = None) -> asyncio.Future[bool]: ...

    def set_multiple(
        self, values: Mapping[str, Any], ttl: Ttl = None
    ) -> asyncio.Future[bool]: ...

    def has(self, key: str) -> asyncio.Future[bool]: ...

    def delete(self, key: str) -> asyncio.Future[bool]: ...

    def delete_multiple(self, keys: Iterable[str]) -> asyncio.Future[bool]: ...

    def clear(self) -> asyncio.Future[bool]: ...

    def sanitise_cache_key(self, key: str) -> str:
        """Map *key* to a form that contains no backend-reserved characters."""
        ...
