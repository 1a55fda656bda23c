"""Contratos de calendario externo: leitura de eventos e estado das integracoes.

Mantemos apenas protocolos aqui para trocar de provider sem impactar a
checagem de conflito.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from agenda.domain.appointment import CalendarIntegration, ExternalEvent


@runtime_checkable
class ExternalCalendarAdapterProtocol(Protocol):
    """Leitura de eventos de um calendario externo."""

    async def list_events(
        self,
        integration: CalendarIntegration,
        start: datetime,
        end: datetime,
    ) -> list[ExternalEvent]:
        """Retorna eventos que tocam [start, end).

        Raises:
            ExternalSourceUnavailableError: falha distinta de "sem eventos".
        """
        ...


@runtime_checkable
class CalendarIntegrationStoreProtocol(Protocol):
    """Consulta e marcacao de integracoes de calendario."""

    async def list_for_professional(
        self,
        professional_id: str | None,
    ) -> list[CalendarIntegration]:
        """Integracoes do profissional (todas quando None)."""
        ...

    async def mark_reauth_required(self, integration_id: str, reason: str) -> None:
        """Desliga o sync da integracao ate o usuario reautenticar."""
        ...
