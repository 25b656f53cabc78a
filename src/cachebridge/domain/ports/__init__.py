from .backend import KeyValueBackend
from .cache import AsyncCachePort, Ttl
from .cache_store import BasicCacheStore, BatchCacheStore, CacheItem

__all__ = [
    "AsyncCachePort",
    "BasicCacheStore",
    "BatchCacheStore",
    "CacheItem",
    "KeyValueBackend",
    "Ttl",
]
