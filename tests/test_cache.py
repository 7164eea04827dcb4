"""Tests for the TTL cache with an injected clock."""

import pytest

from resume_designer.cache import TTLCache


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=300, clock=clock)


class TestTTLCache:
    def test_empty_cache_misses(self, cache):
        assert cache.get() is None
        assert not cache.is_fresh()

    def test_value_expires_after_ttl(self, cache, clock):
        cache.set(["a"])
        clock.now += 299.9
        assert cache.get() == ["a"]
        clock.now += 0.1
        assert cache.get() is None

    def test_invalidate(self, cache):
        cache.set(["a"])
        cache.invalidate()
        assert cache.get() is None

    def test_stats(self, cache):
        cache.get()
        cache.set(["a"])
        cache.get()
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["fresh"] is True


class TestGetOrRefresh:
    @pytest.mark.asyncio
    async def test_fresh_value_skips_loader(self, cache):
        calls = []

        async def loader():
            calls.append(1)
            return ["loaded"]

        cache.set(["cached"])
        assert await cache.get_or_refresh(loader, fallback=[]) == ["cached"]
        assert calls == []

    @pytest.mark.asyncio
    async def test_miss_calls_loader_once_and_stores(self, cache):
        calls = []

        async def loader():
            calls.append(1)
            return ["loaded"]

        assert await cache.get_or_refresh(loader, fallback=[]) == ["loaded"]
        assert await cache.get_or_refresh(loader, fallback=[]) == ["loaded"]
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_failure_after_expiry_returns_fallback(self, cache, clock):
        async def failing():
            raise ConnectionError("remote down")

        cache.set(["stale"])
        clock.now += 301
        assert await cache.get_or_refresh(failing, fallback=[]) == []
        assert cache.stats()["failures"] == 1

    @pytest.mark.asyncio
    async def test_failure_never_raises(self, cache):
        async def failing():
            raise RuntimeError("boom")

        assert await cache.get_or_refresh(failing, fallback=["fallback"]) == ["fallback"]
