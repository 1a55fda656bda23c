"""Sugestao dos proximos horarios livres de um dia."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from agenda.domain.appointment import TimeInterval
from agenda.domain.conflict import NoConflict
from agenda.domain.slots import SlotSuggestion
from agenda.observability import get_correlation_id
from agenda.services.working_hours_policy import (
    fits_working_hours,
    is_working_day,
    lunch_overlaps,
)
from utils.errors import InvalidIntervalError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from agenda.domain.working_hours import WorkingHoursConfig
    from agenda.services.conflict_detector import ConflictDetector

logger = logging.getLogger(__name__)

_COMPONENT = "slot_finder"


class SlotFinder:
    """Varre a janela do dia em passos fixos e devolve os primeiros slots livres.

    Cada candidato passa pelo ConflictDetector completo (locais + externos).
    A busca para assim que `cap` slots forem encontrados.
    """

    __slots__ = ("_detector", "_zone")

    def __init__(self, detector: ConflictDetector, *, zone: tzinfo | None = None) -> None:
        self._detector = detector
        self._zone = zone

    async def find_slots(
        self,
        day: date,
        duration_minutes: int,
        professional_id: str | None,
        *,
        granularity_minutes: int = 30,
        window_start: time = time(8, 0),
        window_end: time = time(18, 0),
        cap: int = 6,
        config: WorkingHoursConfig | None = None,
    ) -> list[SlotSuggestion]:
        """Primeiros candidatos sem conflito, em ordem cronologica.

        Args:
            day: Dia da busca.
            duration_minutes: Duracao de cada candidato.
            professional_id: Profissional passado ao detector.
            granularity_minutes: Passo entre inicios.
            window_start: Primeiro inicio possivel.
            window_end: Inicios devem ser anteriores a este horario.
            cap: Maximo de slots; zero ou negativo devolve lista vazia.
            config: Expediente da clinica; quando informado, descarta dia nao
                util e candidatos no almoco ou fora do expediente.

        Returns:
            Ate `cap` SlotSuggestion.

        Raises:
            InvalidIntervalError: Duracao ou granularidade nao positivas.
        """
        if duration_minutes <= 0:
            raise InvalidIntervalError(f"duracao deve ser positiva: {duration_minutes}")
        if granularity_minutes <= 0:
            raise InvalidIntervalError(f"granularidade deve ser positiva: {granularity_minutes}")
        if cap <= 0:
            return []
        if config is not None and not is_working_day(day, config):
            self._log_result(0, 0, result="non_working_day")
            return []

        found: list[SlotSuggestion] = []
        evaluated = 0
        for start in self._candidate_starts(day, granularity_minutes, window_start, window_end):
            interval = TimeInterval.from_duration(start, duration_minutes)
            if config is not None and not _within_clinic_hours(interval, config):
                continue
            evaluated += 1
            result = await self._detector.check(interval, professional_id)
            if not isinstance(result, NoConflict):
                continue
            found.append(
                SlotSuggestion(date=day, time=start.strftime("%H:%M"), datetime=start)
            )
            if len(found) >= cap:
                break

        self._log_result(len(found), evaluated)
        return found

    def _candidate_starts(
        self,
        day: date,
        granularity_minutes: int,
        window_start: time,
        window_end: time,
    ) -> Iterator[datetime]:
        # Somente o inicio precisa caber na janela; o fim pode passar de window_end.
        current = datetime.combine(day, window_start, tzinfo=self._zone)
        limit = datetime.combine(day, window_end, tzinfo=self._zone)
        step = timedelta(minutes=granularity_minutes)
        while current < limit:
            yield current
            current += step

    @staticmethod
    def _log_result(found: int, evaluated: int, *, result: str = "ok") -> None:
        logger.info(
            "slots_found",
            extra={
                "component": _COMPONENT,
                "action": "find_slots",
                "result": result,
                "slots_found": found,
                "candidates_evaluated": evaluated,
                "correlation_id": get_correlation_id(),
            },
        )


def _within_clinic_hours(interval: TimeInterval, config: WorkingHoursConfig) -> bool:
    if lunch_overlaps(interval.start, interval.end, config):
        return False
    return fits_working_hours(interval.start, interval.end, config)


__all__ = ["SlotFinder"]
