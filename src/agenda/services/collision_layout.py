"""Layout lado a lado de consultas simultaneas na visao diaria.

Consultas que se sobrepoem direta ou transitivamente formam um grupo de
colisao; cada membro recebe uma lane de largura igual. Layout e funcao
pura do snapshot do dia: recalcular sempre da o mesmo resultado.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING

from agenda.domain.layout import CollisionGroup, LayoutAssignment
from agenda.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agenda.domain.appointment import Appointment
    from agenda.protocols.layout_cache import LayoutCacheProtocol

logger = logging.getLogger(__name__)

LANE_GAP_PERCENT = 0.25
FULL_WIDTH = 100.0


def compute_layout(
    day: date,
    appointments: Iterable[Appointment],
    gap: float = LANE_GAP_PERCENT,
    zone: tzinfo | None = None,
) -> dict[str, LayoutAssignment]:
    """Atribui largura, offset e grupo para cada consulta do dia.

    Grupo de k consultas: ``width = 100/k - gap`` e
    ``left = i*100/k + gap/2``, com membros ordenados por (inicio, id).

    Args:
        day: Dia exibido; consultas de outros dias sao ignoradas.
        appointments: Snapshot das consultas (qualquer ordem).
        gap: Espaco em pontos percentuais entre lanes.
        zone: Fuso da clinica; horarios naive sao lidos nele.

    Returns:
        Mapa id da consulta -> LayoutAssignment.
    """
    day_items = _sorted_for_day(day, (item.localized(zone) for item in appointments), zone)
    layout: dict[str, LayoutAssignment] = {}
    for group in build_collision_groups(day_items):
        if group.size == 1:
            layout[group.appointment_ids[0]] = LayoutAssignment(
                appointment_id=group.appointment_ids[0],
                width_percent=FULL_WIDTH,
                left_percent=0.0,
                group_index=group.index,
            )
            continue
        lane = FULL_WIDTH / group.size
        for position, appointment_id in enumerate(group.appointment_ids):
            layout[appointment_id] = LayoutAssignment(
                appointment_id=appointment_id,
                width_percent=lane - gap,
                left_percent=position * lane + gap / 2,
                group_index=group.index,
            )
    return layout


def build_collision_groups(appointments: list[Appointment]) -> list[CollisionGroup]:
    """Componentes conexos do grafo de sobreposicao, na ordem de descoberta.

    `appointments` ja deve vir ordenado por (inicio, id).
    """
    visited: set[int] = set()
    groups: list[CollisionGroup] = []
    for seed_index in range(len(appointments)):
        if seed_index in visited:
            continue
        visited.add(seed_index)
        members = [seed_index]
        added = True
        while added:
            added = False
            for candidate_index, candidate in enumerate(appointments):
                if candidate_index in visited:
                    continue
                if any(
                    candidate.overlaps(appointments[m].scheduled_start, appointments[m].end)
                    for m in members
                ):
                    visited.add(candidate_index)
                    members.append(candidate_index)
                    added = True
        members.sort()
        groups.append(
            CollisionGroup(
                index=len(groups),
                appointment_ids=tuple(appointments[m].id for m in members),
            )
        )
    return groups


def fingerprint_appointments(appointments: Iterable[Appointment]) -> str:
    """Hash estavel do conjunto: qualquer mudanca de id/inicio/duracao/status muda a chave."""
    rows = sorted(
        f"{item.id}|{item.scheduled_start.isoformat()}|{item.duration_minutes}|{item.status}"
        for item in appointments
    )
    return hashlib.sha256("\n".join(rows).encode("utf-8")).hexdigest()


class CollisionLayoutEngine:
    """compute_layout com cache consultivo opcional por (dia, conjunto)."""

    __slots__ = ("_cache", "_gap", "_zone")

    def __init__(
        self,
        *,
        gap: float = LANE_GAP_PERCENT,
        zone: tzinfo | None = None,
        cache: LayoutCacheProtocol | None = None,
    ) -> None:
        self._gap = gap
        self._zone = zone
        self._cache = cache

    def layout(self, day: date, appointments: Iterable[Appointment]) -> dict[str, LayoutAssignment]:
        """compute_layout consultando o cache antes; hit devolve copia do mapa."""
        items = [item.localized(self._zone) for item in appointments]
        if self._cache is None:
            return compute_layout(day, items, self._gap, self._zone)

        key = f"layout:{day.isoformat()}:{fingerprint_appointments(items)}"
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(
                "layout_cache_hit",
                extra={
                    "component": "collision_layout",
                    "action": "layout",
                    "result": "cache_hit",
                    "correlation_id": get_correlation_id(),
                },
            )
            return dict(cached)
        layout = compute_layout(day, items, self._gap, self._zone)
        self._cache.set(key, layout)
        return layout


def _sorted_for_day(
    day: date,
    appointments: Iterable[Appointment],
    zone: tzinfo | None,
) -> list[Appointment]:
    return sorted(
        (item for item in appointments if _local_date(item.scheduled_start, zone) == day),
        key=lambda item: (item.scheduled_start, item.id),
    )


def _local_date(moment: datetime, zone: tzinfo | None) -> date:
    if zone is not None and moment.tzinfo is not None:
        return moment.astimezone(zone).date()
    return moment.date()


__all__ = [
    "FULL_WIDTH",
    "LANE_GAP_PERCENT",
    "CollisionLayoutEngine",
    "build_collision_groups",
    "compute_layout",
    "fingerprint_appointments",
]
