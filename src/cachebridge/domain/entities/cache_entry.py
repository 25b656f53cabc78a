"""Cache entry value object.

One instance per read: stores build a fresh entry for every lookup, callers
mutate it through ``set()`` / ``expires_after()`` / ``expires_at()`` and hand
it back to the same store's ``save()``.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta
from typing import Any, Callable

from cachebridge.domain.exceptions import InvalidArgumentError


class CacheEntry:
    """A single cache slot: key, hit flag, payload and optional expiry.

    ``is_hit`` is the only miss signal. ``None`` is a legal payload, so a hit
    can carry ``None`` as its value.

    ``expiry`` is an absolute epoch timestamp (seconds, sub-second precision);
    ``None`` means "use the store's default lifetime".

    Args:
        key: Caller-visible key (as given to the store, not backend-prefixed).
        is_hit: Whether the store found an unexpired value.
        value: Payload; must be ``None`` for a miss.
        clock: Wall-clock source used by ``expires_after()``.
    """

    def __init__(
        self,
        key: str,
        is_hit: bool,
        value: Any = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not is_hit and value is not None:
            raise InvalidArgumentError(f"Cache miss for {key!r} cannot carry a value")
        self._key = key
        self._is_hit = is_hit
        self._value = value
        self._clock = clock
        self._expiry: float | None = None

    def __repr__(self) -> str:
        return (
            f"CacheEntry(key={self._key!r}, is_hit={self._is_hit}, "
            f"expiry={self._expiry!r})"
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_hit(self) -> bool:
        return self._is_hit

    @property
    def expiry(self) -> float | None:
        return self._expiry

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> CacheEntry:
        self._value = value
        return self

    def expires_after(self, time_: int | timedelta | None) -> CacheEntry:
        """Expire relative to *now* (evaluated here, not at save time).

        Accepts whole seconds, a ``timedelta`` or ``None`` (store default).
        """
        if time_ is None:
            self._expiry = None
        elif isinstance(time_, timedelta):
            self._expiry = self._clock() + time_.total_seconds()
        elif isinstance(time_, int) and not isinstance(time_, bool):
            self._expiry = self._clock() + time_
        else:
            raise InvalidArgumentError(
                "Expiration must be an int, a timedelta or None, "
                f"{type(time_).__name__!r} given"
            )
        return self

    def expires_at(self, expiration: datetime | None) -> CacheEntry:
        """Expire at an absolute instant (naive datetimes are local time)."""
        if expiration is None:
            self._expiry = None
        elif isinstance(expiration, datetime):
            self._expiry = expiration.timestamp()
        else:
            raise InvalidArgumentError(
                "Expiration date must be a datetime or None, "
                f"{type(expiration).__name__!r} given"
            )
        return self
