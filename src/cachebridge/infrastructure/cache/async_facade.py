"""Future-returning cache facade over a synchronous, raising store."""

from __future__ import annotations

import asyncio
import math
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

import structlog

from cachebridge.domain.exceptions import BatchAssemblyError, InvalidArgumentError
from cachebridge.domain.ports import BatchCacheStore, CacheItem, Ttl
from cachebridge.infrastructure.cache.key_sanitizer import sanitise_cache_key

log = structlog.get_logger(__name__)


def normalise_ttl(ttl: Ttl) -> int | timedelta | None:
    """Round float TTLs to whole seconds (half away from zero).

    Store expiry works at second granularity while the public contract
    allows sub-second input. ``int``, ``timedelta`` and ``None`` pass through.
    """
    if ttl is None or isinstance(ttl, timedelta):
        return ttl
    if isinstance(ttl, bool):
        raise InvalidArgumentError("TTL must be a number of seconds, not a bool")
    if isinstance(ttl, int):
        return ttl
    if isinstance(ttl, float):
        if not math.isfinite(ttl):
            raise InvalidArgumentError(f"TTL must be finite, got {ttl!r}")
        return int(math.copysign(math.floor(abs(ttl) + 0.5), ttl))
    raise InvalidArgumentError(
        f"TTL must be a float, an int, a timedelta or None, {type(ttl).__name__!r} given"
    )


def _new_future() -> asyncio.Future[Any]:
    # Raises RuntimeError outside a running loop, before any store call.
    return asyncio.get_running_loop().create_future()


class AsyncCacheFacade:
    """Non-blocking cache over any BatchCacheStore.

    Each call runs the store synchronously and returns an already-resolved
    ``asyncio.Future``. Store exceptions are contained per call (batch
    reads: per item) and surface as ``False`` or ``default``. The only
    rejection is BatchAssemblyError, for batch results that don't match the
    requested keys.

    Keys are sanitised (SHA-256) before reaching the store; batch calls keep
    a sanitised -> original map for the lifetime of the call.

    Args:
        store: Synchronous store with ``get``/``has``/``delete``/
            ``delete_items``/``get_items``/``save``/``clear``.
    """

    def __init__(self, store: BatchCacheStore) -> None:
        self._store = store

    @property
    def store(self) -> BatchCacheStore:
        return self._store

    def sanitise_cache_key(self, key: str) -> str:
        return sanitise_cache_key(key)

    def clear(self) -> asyncio.Future[bool]:
        future = _new_future()
        try:
            future.set_result(self._store.clear())
        except Exception as e:
            log.warning("cache_clear_failed", error=str(e))
            future.set_result(False)
        return future

    def delete(self, key: str) -> asyncio.Future[bool]:
        future = _new_future()
        sanitised_key = self.sanitise_cache_key(key)
        try:
            future.set_result(self._store.delete(sanitised_key))
        except Exception as e:
            log.warning("cache_delete_failed", key=key, error=str(e))
            future.set_result(False)
        return future

    def delete_multiple(self, keys: Iterable[str]) -> asyncio.Future[bool]:
        future = _new_future()
        sanitised_keys = [self.sanitise_cache_key(key) for key in keys]
        try:
            future.set_result(self._store.delete_items(sanitised_keys))
        except Exception as e:
            # All-or-nothing: the whole batch counts as failed.
            log.warning(
                "cache_delete_multiple_failed", count=len(sanitised_keys), error=str(e)
            )
            future.set_result(False)
        return future

    def has(self, key: str) -> asyncio.Future[bool]:
        future = _new_future()
        sanitised_key = self.sanitise_cache_key(key)
        try:
            future.set_result(self._store.has(sanitised_key))
        except Exception as e:
            log.warning("cache_has_failed", key=key, error=str(e))
            future.set_result(False)
        return future

    def get(self, key: str, default: Any = None) -> asyncio.Future[Any]:
        future = _new_future()
        sanitised_key = self.sanitise_cache_key(key)
        try:
            entry = self._store.get(sanitised_key)
            future.set_result(entry.get() if entry.is_hit else default)
        except Exception as e:
            log.warning("cache_get_failed", key=key, error=str(e))
            future.set_result(default)
        return future

    def get_multiple(
        self, keys: Iterable[str], default: Any = None
    ) -> asyncio.Future[dict[str, Any]]:
        """Resolve to ``{original_key: value_or_default}``, one per key.

        Output follows the caller's key order.
        """
        future = _new_future()
        original_keys = list(keys)
        key_map = self._sanitised_key_map(original_keys)

        try:
            entries = dict(self._store.get_items(list(key_map)))
        except Exception as e:
            log.warning(
                "cache_get_multiple_failed", count=len(key_map), error=str(e)
            )
            future.set_result({key: default for key in original_keys})
            return future

        try:
            future.set_result(self._assemble_values(key_map, entries, default))
        except Exception as e:
            log.error("cache_get_multiple_rejected", error=str(e))
            future.set_exception(e)
        return future

    def set(self, key: str, value: Any, ttl: Ttl = None) -> asyncio.Future[bool]:
        future = _new_future()
        sanitised_key = self.sanitise_cache_key(key)
        effective_ttl = normalise_ttl(ttl)
        try:
            entry = self._store.get(sanitised_key)
            entry.set(value)
            entry.expires_after(effective_ttl)
            # Plain save() (not save_deferred()) so the result reflects the write.
            future.set_result(self._store.save(entry))
        except Exception as e:
            log.warning("cache_set_failed", key=key, error=str(e))
            future.set_result(False)
        return future

    def set_multiple(
        self, values: Mapping[str, Any], ttl: Ttl = None
    ) -> asyncio.Future[bool]:
        """Save every item once; resolve ``False`` if any single save failed."""
        future = _new_future()
        key_map = self._sanitised_key_map(values)
        effective_ttl = normalise_ttl(ttl)

        try:
            entries = dict(self._store.get_items(list(key_map)))
        except Exception as e:
            log.warning(
                "cache_set_multiple_failed", count=len(key_map), error=str(e)
            )
            future.set_result(False)
            return future

        success = True
        unexpected = entries.keys() - key_map.keys()
        if unexpected:
            log.warning("cache_set_multiple_unexpected_keys", count=len(unexpected))
            success = False

        for sanitised_key, original_key in key_map.items():
            entry = entries.get(sanitised_key)
            if entry is None:
                log.warning("cache_set_multiple_item_missing", key=original_key)
                success = False
                continue
            try:
                entry.set(values[original_key])
                entry.expires_after(effective_ttl)
                if not self._store.save(entry):
                    success = False
            except Exception as e:
                # Keep going: every item gets exactly one attempt.
                log.warning(
                    "cache_set_multiple_item_failed", key=original_key, error=str(e)
                )
                success = False

        future.set_result(success)
        return future

    # -- internal helpers --------------------------------------------------

    def _sanitised_key_map(self, keys: Iterable[str]) -> dict[str, str]:
        return {self.sanitise_cache_key(key): key for key in keys}

    @staticmethod
    def _assemble_values(
        key_map: dict[str, str],
        entries: dict[str, CacheItem],
        default: Any,
    ) -> dict[str, Any]:
        unexpected = entries.keys() - key_map.keys()
        if unexpected:
            raise BatchAssemblyError(
                f"Store returned {len(unexpected)} entr"
                f"{'y' if len(unexpected) == 1 else 'ies'} for keys never requested"
            )

        values: dict[str, Any] = {}
        for sanitised_key, original_key in key_map.items():
            entry = entries.get(sanitised_key)
            if entry is None:
                values[original_key] = default
                continue
            try:
                values[original_key] = entry.get() if entry.is_hit else default
            except Exception as e:
                log.warning("cache_get_multiple_item_failed", key=original_key, error=str(e))
                values[original_key] = default
        return values
