"""Raw backend port - flat keys, relative-second TTLs, nothing else."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """Raw key/value backend consumed by NamespacedExpiringStore.

    TTL semantics: ``ttl > 0`` expires after that many seconds,
    ``ttl == 0`` never expires, ``ttl < 0`` is already expired.
    """

    def store(self, key: str, value: Any, ttl: int) -> bool: ...

    def fetch(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, found)``; ``value`` is ``None`` when not found."""
        ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def delete_matching_prefix(self, prefix: str) -> bool:
        """Delete every key starting with the literal *prefix*."""
        ...

    def is_enabled(self) -> bool: ...
