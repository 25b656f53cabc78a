"""Future-returning cache facade over synchronous key/value stores."""

from cachebridge.domain.entities import CacheEntry
from cachebridge.domain.exceptions import (
    BatchAssemblyError,
    CacheError,
    ConfigurationError,
    InvalidArgumentError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from cachebridge.infrastructure.cache import (
    AsyncCacheFacade,
    DiskcacheStore,
    NamespacedExpiringStore,
    create_async_cache,
    create_cache,
    create_store,
    sanitise_cache_key,
)

__all__ = [
    "AsyncCacheFacade",
    "BatchAssemblyError",
    "CacheEntry",
    "CacheError",
    "ConfigurationError",
    "DiskcacheStore",
    "InvalidArgumentError",
    "NamespacedExpiringStore",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "create_async_cache",
    "create_cache",
    "create_store",
    "sanitise_cache_key",
]
