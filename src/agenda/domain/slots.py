"""Resultados de analise de celula da agenda e de sugestao de horarios."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import StrEnum


class SlotWarning(StrEnum):
    """Aviso suave de horario; nunca bloqueia agendamento."""

    NON_WORKING_DAY = "non_working_day"
    OUTSIDE_HOURS = "outside_hours"
    LUNCH_TIME = "lunch_time"


@dataclass(frozen=True, slots=True)
class SlotAnalysis:
    """Classificacao de uma celula: clicavel, aviso e se e horario ideal.

    `details` explica o aviso para a UI (ex.: "Almoço: 12:00 às 13:00").
    """

    clickable: bool
    warning: SlotWarning | None
    is_optimal: bool
    details: str | None = None

    @property
    def has_warning(self) -> bool:
        return self.warning is not None


@dataclass(frozen=True, slots=True)
class SlotSuggestion:
    """Horario livre sugerido ao usuario."""

    date: dt.date
    time: str
    datetime: dt.datetime


__all__ = ["SlotAnalysis", "SlotSuggestion", "SlotWarning"]
