"""Testes dos caches em memoria com TTL."""

from __future__ import annotations

import pytest

from agenda.domain import LayoutAssignment
from agenda.infra.cache import LayoutCache, MemoryEventCache, TTLCache
from tests.fakes.builders import external_event


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_returns_value_until_expiry(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("k", "v")
        clock.now = 9.9
        assert cache.get("k") == "v"
        clock.now = 10.0
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_per_entry_ttl_overrides_default(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("k", "v", ttl_seconds=2)
        clock.now = 3
        assert cache.get("k") is None

    def test_non_positive_ttl_is_not_stored(self) -> None:
        cache: TTLCache[str] = TTLCache()
        cache.set("k", "v", ttl_seconds=0)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_invalidate_and_clear(self) -> None:
        cache: TTLCache[int] = TTLCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.invalidate("a")
        assert cache.get("a") is None
        assert cache.get("b") == 2
        cache.clear()
        assert len(cache) == 0

    def test_prune_keeps_max_entries(self) -> None:
        clock = FakeClock()
        cache: TTLCache[int] = TTLCache(ttl_seconds=100, max_entries=2, clock=clock)
        for index, key in enumerate(("a", "b", "c")):
            clock.now = float(index)
            cache.set(key, index)
        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("c") == 2

    def test_prune_drops_expired_first(self) -> None:
        clock = FakeClock()
        cache: TTLCache[int] = TTLCache(ttl_seconds=5, max_entries=10, clock=clock)
        cache.set("old", 1)
        clock.now = 6
        cache.set("new", 2)
        assert cache.prune() == 1
        assert cache.get("new") == 2


class TestLayoutCache:
    def test_stores_copy_of_layout(self) -> None:
        cache = LayoutCache()
        layout = {"a": LayoutAssignment("a", 100.0, 0.0, 0)}
        cache.set("layout:key", layout)
        layout.clear()
        assert cache.get("layout:key") == {"a": LayoutAssignment("a", 100.0, 0.0, 0)}
        assert len(cache) == 1
        cache.clear()
        assert cache.get("layout:key") is None


class TestMemoryEventCache:
    @pytest.mark.asyncio
    async def test_round_trip_and_expiry(self) -> None:
        clock = FakeClock()
        cache = MemoryEventCache(clock=clock)
        events = [external_event("evt", "2024-06-10", "09:00", "10:00")]
        await cache.set("key", events, ttl_seconds=60)
        assert await cache.get("key") == events
        clock.now = 61
        assert await cache.get("key") is None

    @pytest.mark.asyncio
    async def test_miss_returns_none(self) -> None:
        assert await MemoryEventCache().get("missing") is None
