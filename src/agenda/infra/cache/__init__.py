"""Caches consultivos (miss sempre seguro)."""

from __future__ import annotations

from agenda.infra.cache.redis_event_cache import RedisEventCache
from agenda.infra.cache.ttl_cache import LayoutCache, MemoryEventCache, TTLCache

__all__ = [
    "LayoutCache",
    "MemoryEventCache",
    "RedisEventCache",
    "TTLCache",
]
