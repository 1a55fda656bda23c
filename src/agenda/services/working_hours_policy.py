"""Politica de expediente da clinica (sem IO, sem excecoes).

Regra de negocio:
- dia util: dia da semana presente em `working_days` (todos quando ausente)
- horario de funcionamento: work_start <= t <= work_end, inclusivo nos dois lados
- almoco: lunch_start <= t < lunch_end, apenas com `has_lunch_break`

Config ausente e sempre permissiva (fail-open).
"""

from __future__ import annotations

from datetime import date, datetime, time

from agenda.domain.working_hours import WEEKDAY_LABELS_PT, Weekday, WorkingHoursConfig


def is_working_day(day: date, config: WorkingHoursConfig) -> bool:
    if config.working_days is None:
        return True
    return Weekday.from_date(day) in config.working_days


def is_working_hour(moment: time, config: WorkingHoursConfig) -> bool:
    """True dentro do expediente; True quando algum limite nao foi configurado."""
    if config.work_start is None or config.work_end is None:
        return True
    return config.work_start <= _clock(moment) <= config.work_end


def is_lunch_time(moment: time, config: WorkingHoursConfig) -> bool:
    """O minuto igual a `lunch_end` ja nao e almoco."""
    if not config.has_lunch_break:
        return False
    if config.lunch_start is None or config.lunch_end is None:
        return False
    return config.lunch_start <= _clock(moment) < config.lunch_end


def lunch_overlaps(start: datetime, end: datetime, config: WorkingHoursConfig) -> bool:
    """Indica se alguma parte de [start, end) cai no almoco do dia de `start`."""
    if not config.has_lunch_break:
        return False
    if config.lunch_start is None or config.lunch_end is None:
        return False
    lunch_start = datetime.combine(start.date(), config.lunch_start, tzinfo=start.tzinfo)
    lunch_end = datetime.combine(start.date(), config.lunch_end, tzinfo=start.tzinfo)
    return start < lunch_end and lunch_start < end


def fits_working_hours(start: datetime, end: datetime, config: WorkingHoursConfig) -> bool:
    """[start, end) cabe inteiro no expediente do dia de `start`."""
    if config.work_start is None or config.work_end is None:
        return True
    if not is_working_hour(start.time(), config):
        return False
    closing = datetime.combine(start.date(), config.work_end, tzinfo=start.tzinfo)
    return end <= closing


def describe_working_days(config: WorkingHoursConfig) -> str:
    """Rotulo pt-BR dos dias de funcionamento, na ordem da semana."""
    if config.working_days is None:
        return "Todos os dias"
    labels = [WEEKDAY_LABELS_PT[day] for day in Weekday if day in config.working_days]
    return ", ".join(labels) if labels else "Dias úteis não configurados"


def _clock(moment: time) -> time:
    # Comparacao por relogio local; tzinfo de `time` nao participa.
    return moment.replace(tzinfo=None, second=0, microsecond=0)


__all__ = [
    "describe_working_days",
    "fits_working_hours",
    "is_lunch_time",
    "is_working_day",
    "is_working_hour",
    "lunch_overlaps",
]
