"""Cache layer exceptions."""

from __future__ import annotations


class CacheError(Exception):
    """Base class for all cache-layer errors."""


class ConfigurationError(CacheError):
    """Raised when a store cannot be built (e.g. its backend is unavailable)."""


class UnsupportedOperationError(CacheError, NotImplementedError):
    """Raised by stores for operations they deliberately do not implement."""


class TypeMismatchError(CacheError, TypeError):
    """Raised when a store is handed an entry implementation it does not own."""


class InvalidArgumentError(CacheError, ValueError):
    """Raised for unsupported expiry or TTL inputs."""


class BatchAssemblyError(CacheError):
    """Raised when a batch result cannot be reconciled with the requested keys."""
