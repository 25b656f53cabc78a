"""Cache-Factory - builds stores and the async facade from config."""

from __future__ import annotations

import structlog

from cachebridge.domain.exceptions import ConfigurationError
from cachebridge.domain.ports import BasicCacheStore, BatchCacheStore
from cachebridge.infrastructure.backends import DiskcacheBackend, shared_memory_backend
from cachebridge.infrastructure.cache.async_facade import AsyncCacheFacade
from cachebridge.infrastructure.cache.diskcache_store import DiskcacheStore
from cachebridge.infrastructure.cache.namespaced_store import NamespacedExpiringStore
from cachebridge.infrastructure.config.schema import CacheConfig

log = structlog.get_logger(__name__)


def create_async_cache(store: BatchCacheStore) -> AsyncCacheFacade:
    """Wrap an existing synchronous store in the future-returning facade."""
    return AsyncCacheFacade(store)


def create_store(config: CacheConfig) -> BasicCacheStore:
    """Build the synchronous store described by *config*.

    - ``memory``: NamespacedExpiringStore over the shared memory backend.
    - ``diskcache``: DiskcacheStore (batch-capable) in ``config.directory``.
    - ``diskcache-namespaced``: NamespacedExpiringStore over DiskcacheBackend.

    Raises:
        ValueError: If ``config.backend`` is unknown.
    """
    log.info(
        "cache_factory_create",
        backend=config.backend,
        directory=str(config.directory),
        namespace=config.namespace,
        default_lifetime=config.default_lifetime,
    )
    if config.backend == "diskcache":
        return DiskcacheStore(
            directory=config.directory,
            default_lifetime=config.default_lifetime,
        )
    elif config.backend == "memory":
        return NamespacedExpiringStore(
            namespace=config.namespace,
            default_lifetime=config.default_lifetime,
            backend=shared_memory_backend(),
        )
    elif config.backend == "diskcache-namespaced":
        return NamespacedExpiringStore(
            namespace=config.namespace,
            default_lifetime=config.default_lifetime,
            backend=DiskcacheBackend(config.directory),
        )
    else:
        raise ValueError(
            f"Unknown cache backend: {config.backend!r}. "
            "Must be 'diskcache', 'diskcache-namespaced' or 'memory'."
        )


def create_cache(config: CacheConfig) -> AsyncCacheFacade:
    """Build the async facade over a batch-capable store.

    Raises:
        ConfigurationError: If the configured store cannot serve batch calls.
    """
    if config.backend != "diskcache":
        raise ConfigurationError(
            f"Cache backend {config.backend!r} has no batch support; "
            "use create_store() for single-key access"
        )
    return create_async_cache(create_store(config))
