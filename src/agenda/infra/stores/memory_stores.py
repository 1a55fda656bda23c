"""Stores em memoria — apenas para desenvolvimento e testes.

ATENCAO: Nao usar em staging/production. Sem persistencia entre reinicios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agenda.domain.working_hours import WorkingHoursConfig
from agenda.protocols.appointment_repository import AppointmentRepositoryProtocol
from agenda.protocols.calendar_adapter import CalendarIntegrationStoreProtocol
from agenda.protocols.working_hours_provider import WorkingHoursConfigProviderProtocol

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from agenda.domain.appointment import Appointment, CalendarIntegration


class MemoryAppointmentRepository(AppointmentRepositoryProtocol):
    """Repositorio de consultas em memoria — apenas para dev/test."""

    def __init__(self, appointments: Iterable[Appointment] = ()) -> None:
        self._store: dict[str, Appointment] = {item.id: item for item in appointments}
        self.queries: list[tuple[datetime, datetime, str | None]] = []

    def add(self, appointment: Appointment) -> None:
        self._store[appointment.id] = appointment

    def remove(self, appointment_id: str) -> bool:
        return self._store.pop(appointment_id, None) is not None

    async def query_range(
        self,
        start: datetime,
        end: datetime,
        professional_id: str | None = None,
    ) -> list[Appointment]:
        """Consultas (qualquer status) que tocam [start, end).

        Linhas naive sao comparadas no fuso da consulta e devolvidas como
        foram gravadas, igual a uma coluna `timestamp` sem fuso.
        """
        self.queries.append((start, end, professional_id))
        matches = [
            item
            for item in self._store.values()
            if (professional_id is None or item.professional_id == professional_id)
            and item.localized(start.tzinfo).overlaps(start, end)
        ]
        return sorted(
            matches,
            key=lambda item: (item.localized(start.tzinfo).scheduled_start, item.id),
        )


class MemoryIntegrationStore(CalendarIntegrationStoreProtocol):
    """Integracoes de calendario em memoria — apenas para dev/test."""

    def __init__(self, integrations: Iterable[CalendarIntegration] = ()) -> None:
        self._store: dict[str, CalendarIntegration] = {item.id: item for item in integrations}
        self.sync_errors: dict[str, str] = {}

    def add(self, integration: CalendarIntegration) -> None:
        self._store[integration.id] = integration

    def get(self, integration_id: str) -> CalendarIntegration | None:
        return self._store.get(integration_id)

    async def list_for_professional(
        self,
        professional_id: str | None,
    ) -> list[CalendarIntegration]:
        return [
            item
            for item in self._store.values()
            if professional_id is None or item.professional_id == professional_id
        ]

    async def mark_reauth_required(self, integration_id: str, reason: str) -> None:
        current = self._store.get(integration_id)
        if current is None:
            return
        self._store[integration_id] = current.model_copy(update={"sync_enabled": False})
        self.sync_errors[integration_id] = reason


class MemoryWorkingHoursProvider(WorkingHoursConfigProviderProtocol):
    """Expediente por clinica em memoria; clinica desconhecida = sem restricao."""

    def __init__(self, configs: dict[str, WorkingHoursConfig] | None = None) -> None:
        self._configs = dict(configs or {})

    def set(self, clinic_id: str, config: WorkingHoursConfig) -> None:
        self._configs[clinic_id] = config

    async def get(self, clinic_id: str) -> WorkingHoursConfig:
        return self._configs.get(clinic_id) or WorkingHoursConfig()


__all__ = [
    "MemoryAppointmentRepository",
    "MemoryIntegrationStore",
    "MemoryWorkingHoursProvider",
]
