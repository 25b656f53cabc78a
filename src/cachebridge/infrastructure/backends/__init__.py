"""Raw key/value backends for NamespacedExpiringStore."""

from .diskcache_backend import DiskcacheBackend
from .memory_backend import MemoryBackend, shared_memory_backend

__all__ = [
    "DiskcacheBackend",
    "MemoryBackend",
    "shared_memory_backend",
]
