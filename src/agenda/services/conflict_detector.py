"""Deteccao de conflito para um intervalo candidato.

Ordem de consulta:
1. profissional obrigatorio ausente -> NoProfessionalSelected (sem IO)
2. consultas locais (autoritativas) -> AppointmentConflict, sem busca externa
3. calendarios externos sincronizados -> ExternalConflict
4. nada encontrado -> NoConflict

Fonte externa com falha nunca bloqueia: e registrada e ignorada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agenda.domain.conflict import (
    AppointmentConflict,
    ExternalConflict,
    NoConflict,
    NoProfessionalSelected,
)
from agenda.observability import get_correlation_id
from agenda.services.external_events import ExternalEventFetcher

if TYPE_CHECKING:
    from datetime import tzinfo

    from agenda.domain.appointment import Appointment, TimeInterval
    from agenda.domain.conflict import ConflictResult
    from agenda.protocols.appointment_repository import AppointmentRepositoryProtocol
    from agenda.protocols.calendar_adapter import (
        CalendarIntegrationStoreProtocol,
        ExternalCalendarAdapterProtocol,
    )

logger = logging.getLogger(__name__)

_COMPONENT = "conflict_detector"
_DEFAULT_APPOINTMENT_TITLE = "Consulta"


class ConflictDetector:
    """Verifica um intervalo contra consultas locais e calendarios externos."""

    __slots__ = ("_fetcher", "_repository", "_require_professional", "_zone")

    def __init__(
        self,
        *,
        repository: AppointmentRepositoryProtocol,
        integration_store: CalendarIntegrationStoreProtocol | None = None,
        calendar_adapter: ExternalCalendarAdapterProtocol | None = None,
        require_professional: bool = True,
        external_timeout_seconds: float = 5.0,
        zone: tzinfo | None = None,
    ) -> None:
        self._repository = repository
        self._require_professional = require_professional
        self._zone = zone
        self._fetcher: ExternalEventFetcher | None = None
        if integration_store is not None and calendar_adapter is not None:
            self._fetcher = ExternalEventFetcher(
                adapter=calendar_adapter,
                integration_store=integration_store,
                timeout_seconds=external_timeout_seconds,
            )

    @property
    def require_professional(self) -> bool:
        return self._require_professional

    async def check(
        self,
        interval: TimeInterval,
        professional_id: str | None = None,
        exclude_appointment_id: str | None = None,
    ) -> ConflictResult:
        """Primeiro conflito do intervalo para o profissional.

        Horarios naive (do chamador, do banco ou do provedor) sao lidos no
        fuso da clinica antes de qualquer comparacao.

        Args:
            interval: Intervalo candidato [start, end)
            professional_id: Dono da agenda; None so e aceito sem
                `require_professional`
            exclude_appointment_id: Consulta sendo remarcada (ignorada)

        Returns:
            NoProfessionalSelected, AppointmentConflict, ExternalConflict
            ou NoConflict, nessa ordem de precedencia.
        """
        if professional_id is None and self._require_professional:
            return NoProfessionalSelected()

        zone = self._zone or interval.start.tzinfo or interval.end.tzinfo
        interval = interval.localized(zone)
        appointments = await self._repository.query_range(
            interval.start,
            interval.end,
            professional_id,
        )
        active = [item.localized(zone) for item in appointments if item.is_active]

        local = _first_local_conflict(active, interval, exclude_appointment_id)
        if local is not None:
            logger.debug(
                "local_conflict_found",
                extra={
                    "component": _COMPONENT,
                    "action": "check",
                    "result": "appointment",
                    "correlation_id": get_correlation_id(),
                },
            )
            return local

        mirrored = {item.external_event_id for item in active if item.external_event_id}
        external = await self._first_external_conflict(interval, professional_id, mirrored, zone)
        if external is not None:
            return external
        return NoConflict()

    async def _first_external_conflict(
        self,
        interval: TimeInterval,
        professional_id: str | None,
        mirrored: set[str],
        zone: tzinfo | None,
    ) -> ExternalConflict | None:
        if self._fetcher is None:
            return None
        integrations = await self._fetcher.syncable_integrations(professional_id)
        batches = await self._fetcher.fetch_all(integrations, interval.start, interval.end)
        for integration, events in batches:
            overlapping = sorted(
                (
                    event
                    for event in (item.localized(zone) for item in events)
                    if event.id not in mirrored and event.overlaps(interval.start, interval.end)
                ),
                key=lambda event: (event.start, event.id),
            )
            if not overlapping:
                continue
            event = overlapping[0]
            return ExternalConflict(
                event_id=event.id,
                title=event.title,
                start=event.start,
                end=event.end,
                calendar_id=event.calendar_id or integration.target_calendar_id,
                integration_id=integration.id,
                location=event.location,
            )
        return None


def _first_local_conflict(
    appointments: list[Appointment],
    interval: TimeInterval,
    exclude_appointment_id: str | None,
) -> AppointmentConflict | None:
    candidates = sorted(
        (
            item
            for item in appointments
            if item.id != exclude_appointment_id and item.overlaps(interval.start, interval.end)
        ),
        key=lambda item: (item.scheduled_start, item.id),
    )
    if not candidates:
        return None
    first = candidates[0]
    return AppointmentConflict(
        appointment_id=first.id,
        title=first.title or _DEFAULT_APPOINTMENT_TITLE,
        start=first.scheduled_start,
        end=first.end,
    )


__all__ = ["ConflictDetector"]
