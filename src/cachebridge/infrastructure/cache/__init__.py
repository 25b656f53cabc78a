"""Cache Infrastructure - stores, facade and key sanitization."""

from .async_facade import AsyncCacheFacade, normalise_ttl
from .cache_factory import create_async_cache, create_cache, create_store
from .diskcache_store import DiskcacheStore
from .key_sanitizer import sanitise_cache_key
from .namespaced_store import NamespacedExpiringStore

__all__ = [
    "AsyncCacheFacade",
    "DiskcacheStore",
    "NamespacedExpiringStore",
    "create_async_cache",
    "create_cache",
    "create_store",
    "normalise_ttl",
    "sanitise_cache_key",
]
