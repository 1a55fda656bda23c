"""Classificacao rapida de uma celula da grade da agenda.

Somente dados locais: roda a cada hover/render, entao nao consulta
calendario externo. Celula ocupada nao e clicavel; horario fora do
expediente gera aviso, mas continua clicavel.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from agenda.domain.slots import SlotAnalysis, SlotWarning
from agenda.services.working_hours_policy import (
    describe_working_days,
    is_lunch_time,
    is_working_day,
    is_working_hour,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agenda.domain.appointment import Appointment
    from agenda.domain.working_hours import WorkingHoursConfig

_OCCUPIED = SlotAnalysis(clickable=False, warning=None, is_optimal=False)


class TimeSlotAnalyzer:
    __slots__ = ("_cell", "_zone")

    def __init__(self, *, cell_minutes: int = 15, zone: tzinfo | None = None) -> None:
        if cell_minutes <= 0:
            raise ValueError("cell_minutes deve ser positivo")
        self._cell = timedelta(minutes=cell_minutes)
        self._zone = zone

    def analyze(
        self,
        day: date,
        hour: int,
        minute: int,
        appointments: Iterable[Appointment],
        config: WorkingHoursConfig,
        professional_id: str | None = None,
    ) -> SlotAnalysis:
        """Classifica a celula que comeca em `day` `hour`:`minute`.

        Args:
            day: Dia exibido na grade
            hour: Hora da celula (0-23)
            minute: Minuto da celula
            appointments: Consultas locais do dia (naive = fuso da clinica)
            config: Expediente da clinica
            professional_id: Quando informado, so consultas deste profissional ocupam

        Returns:
            SlotAnalysis; ocupada vence qualquer aviso de expediente.
        """
        moment = time(hour, minute)
        cell_start = datetime.combine(day, moment, tzinfo=self._zone)
        cell_end = cell_start + self._cell

        for item in appointments:
            if professional_id is not None and item.professional_id != professional_id:
                continue
            if item.is_active and item.localized(self._zone).overlaps(cell_start, cell_end):
                return _OCCUPIED

        warning = _warning_for(day, moment, config)
        return SlotAnalysis(
            clickable=True,
            warning=warning,
            is_optimal=warning is None,
            details=_details_for(warning, config),
        )


def _warning_for(day: date, moment: time, config: WorkingHoursConfig) -> SlotWarning | None:
    if not is_working_day(day, config):
        return SlotWarning.NON_WORKING_DAY
    if not is_working_hour(moment, config):
        return SlotWarning.OUTSIDE_HOURS
    if is_lunch_time(moment, config):
        return SlotWarning.LUNCH_TIME
    return None


def _details_for(warning: SlotWarning | None, config: WorkingHoursConfig) -> str | None:
    if warning is SlotWarning.NON_WORKING_DAY:
        return f"Funcionamento: {describe_working_days(config)}"
    if warning is SlotWarning.OUTSIDE_HOURS:
        return f"Funcionamento: {_clock(config.work_start)} às {_clock(config.work_end)}"
    if warning is SlotWarning.LUNCH_TIME:
        return f"Almoço: {_clock(config.lunch_start)} às {_clock(config.lunch_end)}"
    return None


def _clock(moment: time | None) -> str:
    return moment.strftime("%H:%M") if moment is not None else "--:--"


__all__ = ["TimeSlotAnalyzer"]
