"""Contrato de leitura do expediente configurado por clinica."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from agenda.domain.working_hours import WorkingHoursConfig


@runtime_checkable
class WorkingHoursConfigProviderProtocol(Protocol):
    """Fornece WorkingHoursConfig; campos parciais ou ausentes sao validos."""

    async def get(self, clinic_id: str) -> WorkingHoursConfig:
        ...
