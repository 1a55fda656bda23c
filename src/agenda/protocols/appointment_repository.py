"""Contrato do repositorio de consultas (persistencia e colaborador externo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from agenda.domain.appointment import Appointment


@runtime_checkable
class AppointmentRepositoryProtocol(Protocol):
    """Leitura de consultas locais por faixa de horario."""

    async def query_range(
        self,
        start: datetime,
        end: datetime,
        professional_id: str | None = None,
    ) -> list[Appointment]:
        """Consultas (qualquer status) que tocam [start, end), opcionalmente por profissional."""
        ...
