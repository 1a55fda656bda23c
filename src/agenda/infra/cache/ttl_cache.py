"""Caches em memoria com TTL (consultivos).

Sem lock: cada operacao e um unico get/set de dict. Escritas duplicadas
sao toleradas; entradas expiradas saem na leitura ou no prune quando o
cache passa de `max_entries`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from agenda.protocols.event_cache import EventCacheProtocol
from agenda.protocols.layout_cache import LayoutCacheProtocol

if TYPE_CHECKING:
    from agenda.domain.appointment import ExternalEvent
    from agenda.domain.layout import LayoutAssignment

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 600
DEFAULT_MAX_ENTRIES = 1024


class TTLCache(Generic[T]):
    __slots__ = ("_clock", "_entries", "_max_entries", "_name", "_ttl_seconds")

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
        name: str = "ttl_cache",
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._name = name
        self._entries: dict[str, tuple[float, T]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: T, ttl_seconds: float | None = None) -> None:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        self._entries[key] = (self._clock() + ttl, value)
        if len(self._entries) > self._max_entries:
            self.prune()

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def prune(self) -> int:
        """Remove expiradas; se ainda cheio, descarta as mais proximas de expirar."""
        now = self._clock()
        snapshot = list(self._entries.items())
        removed = 0
        for key, (expires_at, _) in snapshot:
            if now >= expires_at:
                self._entries.pop(key, None)
                removed += 1
        overflow = len(self._entries) - self._max_entries
        if overflow > 0:
            oldest = sorted(self._entries.items(), key=lambda item: item[1][0])[:overflow]
            for key, _ in oldest:
                self._entries.pop(key, None)
            removed += len(oldest)
        if removed:
            logger.debug(
                "ttl_cache_pruned",
                extra={
                    "component": self._name,
                    "action": "prune",
                    "result": "ok",
                    "items_removed": removed,
                },
            )
        return removed


class LayoutCache(LayoutCacheProtocol):
    """Layouts por (dia, fingerprint do conjunto de consultas)."""

    __slots__ = ("_cache",)

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache[dict[str, LayoutAssignment]] = TTLCache(
            ttl_seconds=ttl_seconds,
            max_entries=max_entries,
            clock=clock,
            name="layout_cache",
        )

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, key: str) -> dict[str, LayoutAssignment] | None:
        return self._cache.get(key)

    def set(self, key: str, value: dict[str, LayoutAssignment]) -> None:
        self._cache.set(key, dict(value))

    def clear(self) -> None:
        self._cache.clear()


class MemoryEventCache(EventCacheProtocol):
    """Cache de eventos externos em processo (dev/teste ou instancia unica)."""

    __slots__ = ("_cache",)

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache[list[ExternalEvent]] = TTLCache(
            max_entries=max_entries,
            clock=clock,
            name="event_cache",
        )

    async def get(self, key: str) -> list[ExternalEvent] | None:
        events = self._cache.get(key)
        return list(events) if events is not None else None

    async def set(self, key: str, events: list[ExternalEvent], ttl_seconds: int) -> None:
        self._cache.set(key, list(events), ttl_seconds)


__all__ = ["LayoutCache", "MemoryEventCache", "TTLCache"]
