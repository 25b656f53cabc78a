"""Cache key sanitization (SHA-256, hex-encoded)."""

from __future__ import annotations

import hashlib


def sanitise_cache_key(key: str) -> str:
    """Map *key* to a fixed-length, backend-safe key.

    Deterministic and collision-resistant: the result is the SHA-256 hex
    digest of the UTF-8 key bytes, so it never contains reserved characters
    such as ``/`` or ``{}``.

    Raises:
        TypeError: If *key* is not a ``str``.
    """
    if not isinstance(key, str):
        raise TypeError(f"Cache key must be a str, got {type(key).__name__!r}")
    return hashlib.sha256(key.encode("utf-8")).hexdigest()
