"""Layout de consultas simultaneas na grade do calendario.

Atribuicoes sao derivadas de um snapshot do dia e podem ser descartadas e
recalculadas a qualquer momento.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CollisionGroup:
    """Componente conexo do grafo de sobreposicao de um dia."""

    index: int
    appointment_ids: tuple[str, ...]

    @property
    def size(self) -> int:
        return len(self.appointment_ids)


@dataclass(frozen=True, slots=True)
class LayoutAssignment:
    """Lane de uma consulta: largura/offset em % e grupo (z-order)."""

    appointment_id: str
    width_percent: float
    left_percent: float
    group_index: int

    @property
    def right_percent(self) -> float:
        return self.left_percent + self.width_percent


__all__ = ["CollisionGroup", "LayoutAssignment"]
