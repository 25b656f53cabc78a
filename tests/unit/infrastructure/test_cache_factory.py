"""Tests for the cache factory functions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cachebridge.domain.exceptions import ConfigurationError
from cachebridge.infrastructure.cache import (
    AsyncCacheFacade,
    DiskcacheStore,
    NamespacedExpiringStore,
    create_async_cache,
    create_cache,
    create_store,
)
from cachebridge.infrastructure.config import CacheConfig


class TestCreateAsyncCache:
    def test_wraps_given_store(self) -> None:
        store = MagicMock()
        facade = create_async_cache(store)
        assert isinstance(facade, AsyncCacheFacade)
        assert facade.store is store


class TestCreateStore:
    def test_diskcache(self, tmp_path: Path) -> None:
        config = CacheConfig(backend="diskcache", dir=tmp_path / "cache", default_lifetime=60)
        store = create_store(config)
        try:
            assert isinstance(store, DiskcacheStore)
            assert store.directory == tmp_path / "cache"
            assert store.default_lifetime == 60
        finally:
            store.close()

    def test_memory(self) -> None:
        config = CacheConfig(backend="memory", namespace="factory_test", default_lifetime=5)
        store = create_store(config)
        assert isinstance(store, NamespacedExpiringStore)
        assert store.namespace == "factory_test"
        assert store.default_lifetime == 5

    def test_diskcache_namespaced(self, tmp_path: Path) -> None:
        config = CacheConfig(backend="diskcache-namespaced", dir=tmp_path, namespace="ns")
        store = create_store(config)
        assert isinstance(store, NamespacedExpiringStore)
        assert store.build_key("k") == "ns/k"

    def test_unknown_backend_raises(self) -> None:
        config = CacheConfig.model_construct(backend="redis")
        with pytest.raises(ValueError, match="Unknown cache backend"):
            create_store(config)


class TestCreateCache:
    def test_builds_facade_over_diskcache(self, tmp_path: Path) -> None:
        facade = create_cache(CacheConfig(backend="diskcache", dir=tmp_path))
        try:
            assert isinstance(facade.store, DiskcacheStore)
        finally:
            facade.store.close()

    @pytest.mark.parametrize("backend", ["memory", "diskcache-namespaced"])
    def test_rejects_stores_without_batch_support(self, backend: str) -> None:
        with pytest.raises(ConfigurationError):
            create_cache(CacheConfig(backend=backend))
