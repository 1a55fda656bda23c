"""Decorator de adapter de calendario com cache de eventos por janela."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agenda.observability import get_correlation_id
from agenda.protocols.calendar_adapter import ExternalCalendarAdapterProtocol

if TYPE_CHECKING:
    from datetime import datetime

    from agenda.domain.appointment import CalendarIntegration, ExternalEvent
    from agenda.protocols.event_cache import EventCacheProtocol

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_TTL_SECONDS = 120


class CachedCalendarAdapter(ExternalCalendarAdapterProtocol):
    """Reaproveita `list_events` por (integracao, inicio, fim) durante o TTL.

    Falhas do adapter interno nunca sao cacheadas; "sem eventos" e.
    """

    __slots__ = ("_cache", "_inner", "_ttl_seconds")

    def __init__(
        self,
        inner: ExternalCalendarAdapterProtocol,
        cache: EventCacheProtocol,
        *,
        ttl_seconds: int = DEFAULT_EVENTS_TTL_SECONDS,
    ) -> None:
        self._inner = inner
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def list_events(
        self,
        integration: CalendarIntegration,
        start: datetime,
        end: datetime,
    ) -> list[ExternalEvent]:
        """Leitura via cache; erro do adapter interno propaga e nada e gravado.

        Raises:
            ExternalSourceUnavailableError: Repassada do adapter interno.
        """
        key = cache_key(integration, start, end)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug(
                "external_events_cache_hit",
                extra={
                    "component": "cached_calendar_adapter",
                    "action": "list_events",
                    "result": "hit",
                    "integration_id": integration.id,
                    "correlation_id": get_correlation_id(),
                },
            )
            return cached
        events = await self._inner.list_events(integration, start, end)
        await self._cache.set(key, events, self._ttl_seconds)
        return events


def cache_key(integration: CalendarIntegration, start: datetime, end: datetime) -> str:
    calendar_id = integration.target_calendar_id
    return f"{integration.id}:{calendar_id}:{start.isoformat()}:{end.isoformat()}"


__all__ = ["DEFAULT_EVENTS_TTL_SECONDS", "CachedCalendarAdapter", "cache_key"]
