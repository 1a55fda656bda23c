"""Sequenciamento de checagens de disponibilidade concorrentes.

O usuario pode mudar data/hora/profissional mais rapido do que a checagem
responde. Cada requisicao recebe um numero de sequencia por `slot_key`
(ex.: id do formulario aberto); so a resposta da ultima requisicao emitida
para aquela chave deve ser aplicada.
"""

from __future__ import annotations

import itertools
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from agenda.domain.conflict import AvailabilityResult

DEFAULT_MAX_KEYS = 1024


@dataclass(frozen=True, slots=True)
class AvailabilityRequest:
    slot_key: str
    sequence: int
    start: datetime
    end: datetime
    professional_id: str | None = None
    exclude_appointment_id: str | None = None


@dataclass(frozen=True, slots=True)
class AvailabilityResponse:
    """Resultado acompanhado da requisicao que o originou."""

    request: AvailabilityRequest
    result: AvailabilityResult


class AvailabilityRequestSequencer:
    """Contador monotonico + ultimo emitido por chave (sem locks).

    Guarda no maximo `max_keys` chaves; a emitida ha mais tempo sai primeiro.
    Resposta de chave descartada e tratada como obsoleta.
    """

    __slots__ = ("_counter", "_latest", "_max_keys")

    def __init__(self, *, max_keys: int = DEFAULT_MAX_KEYS) -> None:
        if max_keys <= 0:
            msg = f"max_keys deve ser positivo: {max_keys}"
            raise ValueError(msg)
        self._counter = itertools.count(1)
        self._latest: OrderedDict[str, int] = OrderedDict()
        self._max_keys = max_keys

    def __len__(self) -> int:
        return len(self._latest)

    def issue(
        self,
        slot_key: str,
        start: datetime,
        end: datetime,
        professional_id: str | None = None,
        exclude_appointment_id: str | None = None,
    ) -> AvailabilityRequest:
        """Emite a requisicao mais recente de `slot_key`.

        Args:
            slot_key: Chave do formulario/celula que originou a checagem.
            start: Inicio do intervalo.
            end: Fim do intervalo.
            professional_id: Profissional da consulta.
            exclude_appointment_id: Consulta ignorada (reagendamento).

        Returns:
            AvailabilityRequest com sequencia maior que qualquer anterior.
        """
        sequence = next(self._counter)
        self._latest[slot_key] = sequence
        self._latest.move_to_end(slot_key)
        while len(self._latest) > self._max_keys:
            self._latest.popitem(last=False)
        return AvailabilityRequest(
            slot_key=slot_key,
            sequence=sequence,
            start=start,
            end=end,
            professional_id=professional_id,
            exclude_appointment_id=exclude_appointment_id,
        )

    def is_current(self, request: AvailabilityRequest) -> bool:
        return self._latest.get(request.slot_key) == request.sequence

    def accept(self, response: AvailabilityResponse) -> AvailabilityResult | None:
        """Resultado quando a resposta ainda e a mais recente; None se obsoleta."""
        if not self.is_current(response.request):
            return None
        return response.result

    def forget(self, slot_key: str) -> None:
        """Descarta a chave (formulario fechado); respostas pendentes ficam obsoletas."""
        self._latest.pop(slot_key, None)


__all__ = [
    "AvailabilityRequest",
    "AvailabilityRequestSequencer",
    "AvailabilityResponse",
]
