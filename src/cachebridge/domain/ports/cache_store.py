"""Store ports - synchronous, exception-raising cache pools.

Two capability levels:
  - BasicCacheStore: single-key operations only
    (e.g. NamespacedExpiringStore, whose batch calls always raise).
  - BatchCacheStore: adds ``get_items`` / ``delete_items``
    (e.g. DiskcacheStore). AsyncCacheFacade requires this level.

Every method may raise; callers that need "never raises" semantics wrap a
store in AsyncCacheFacade.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheItem(Protocol):
    """What the facade needs from an entry returned by a store."""

    @property
    def key(self) -> str: ...

    @property
    def is_hit(self) -> bool: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> CacheItem: ...

    def expires_after(self, time_: int | timedelta | None) -> CacheItem: ...

    def expires_at(self, expiration: datetime | None) -> CacheItem: ...


@runtime_checkable
class BasicCacheStore(Protocol):
    def get(self, key: str) -> CacheItem: ...

    def has(self, key: str) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def save(self, entry: CacheItem) -> bool: ...

    def clear(self) -> bool: ...


@runtime_checkable
class BatchCacheStore(BasicCacheStore, Protocol):
    def get_items(self, keys: Sequence[str]) -> Mapping[str, CacheItem]:
        """Return one entry per requested key (misses included), keyed as given."""
        ...

    def delete_items(self, keys: Sequence[str]) -> bool: ...
