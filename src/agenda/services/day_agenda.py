"""Visao consolidada do dia: consultas locais + eventos externos.

Eventos externos entram como consultas de origem externa com id
``gc_<id do evento>``; eventos ja espelhados por uma consulta local nao
aparecem duas vezes.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from agenda.domain.appointment import Appointment, AppointmentOrigin
from agenda.observability import get_correlation_id
from agenda.services.external_events import ExternalEventFetcher

if TYPE_CHECKING:
    from agenda.domain.appointment import CalendarIntegration, ExternalEvent
    from agenda.protocols.appointment_repository import AppointmentRepositoryProtocol
    from agenda.protocols.calendar_adapter import (
        CalendarIntegrationStoreProtocol,
        ExternalCalendarAdapterProtocol,
    )

logger = logging.getLogger(__name__)

EXTERNAL_ID_PREFIX = "gc_"


class DayAgendaService:
    __slots__ = ("_fetcher", "_repository", "_zone")

    def __init__(
        self,
        *,
        repository: AppointmentRepositoryProtocol,
        integration_store: CalendarIntegrationStoreProtocol | None = None,
        calendar_adapter: ExternalCalendarAdapterProtocol | None = None,
        external_timeout_seconds: float = 5.0,
        zone: tzinfo | None = None,
    ) -> None:
        self._repository = repository
        self._zone = zone
        self._fetcher: ExternalEventFetcher | None = None
        if integration_store is not None and calendar_adapter is not None:
            self._fetcher = ExternalEventFetcher(
                adapter=calendar_adapter,
                integration_store=integration_store,
                timeout_seconds=external_timeout_seconds,
            )

    async def build_day(self, day: date, professional_id: str | None = None) -> list[Appointment]:
        """Consultas locais e eventos externos do dia, ordenados por (inicio, id).

        Horarios naive vindos do repositorio ou da agenda externa sao lidos
        no fuso da clinica. Falha de uma integracao so remove os eventos dela.

        Args:
            day: Dia consultado.
            professional_id: Restringe a um profissional; None traz todos.

        Returns:
            Lista mesclada; eventos externos com id `gc_<id do evento>`.
        """
        day_start = datetime.combine(day, time(0, 0), tzinfo=self._zone)
        day_end = day_start + timedelta(days=1)

        local = [
            item.localized(self._zone)
            for item in await self._repository.query_range(day_start, day_end, professional_id)
        ]
        merged: dict[str, Appointment] = {item.id: item for item in local}
        mirrored = {item.external_event_id for item in local if item.external_event_id}

        external_count = 0
        if self._fetcher is not None:
            integrations = await self._fetcher.syncable_integrations(professional_id)
            for integration, events in await self._fetcher.fetch_all(
                integrations, day_start, day_end
            ):
                for event in events:
                    if event.id in mirrored:
                        continue
                    converted = _as_appointment(event.localized(self._zone), integration)
                    if converted.id in merged:
                        continue
                    merged[converted.id] = converted
                    external_count += 1

        logger.info(
            "day_agenda_built",
            extra={
                "component": "day_agenda",
                "action": "build_day",
                "result": "ok",
                "local_count": len(local),
                "external_count": external_count,
                "correlation_id": get_correlation_id(),
            },
        )
        return sorted(merged.values(), key=lambda item: (item.scheduled_start, item.id))


def _as_appointment(event: ExternalEvent, integration: CalendarIntegration) -> Appointment:
    minutes = max(1, math.ceil((event.end - event.start).total_seconds() / 60))
    return Appointment(
        id=f"{EXTERNAL_ID_PREFIX}{event.id}",
        professional_id=integration.professional_id,
        scheduled_start=event.start,
        duration_minutes=minutes,
        origin=AppointmentOrigin.EXTERNAL,
        external_event_id=event.id,
        title=event.title,
    )


__all__ = ["EXTERNAL_ID_PREFIX", "DayAgendaService"]
