"""Configuracao de expediente da clinica (dias uteis, horario, almoco).

Campos ausentes significam "sem restricao": config faltando ou desatualizada
nunca pode fazer a clinica parecer fechada.
"""

from __future__ import annotations

from datetime import date, time  # noqa: TC003 - usado em runtime pelo Pydantic
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Weekday(StrEnum):
    """Dias da semana no formato gravado na tabela de clinicas."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date) -> Weekday:
        return _WEEKDAYS_BY_INDEX[day.weekday()]


_WEEKDAYS_BY_INDEX = tuple(Weekday)

WEEKDAY_LABELS_PT = {
    Weekday.MONDAY: "Segunda",
    Weekday.TUESDAY: "Terça",
    Weekday.WEDNESDAY: "Quarta",
    Weekday.THURSDAY: "Quinta",
    Weekday.FRIDAY: "Sexta",
    Weekday.SATURDAY: "Sábado",
    Weekday.SUNDAY: "Domingo",
}


class WorkingHoursConfig(BaseModel):
    """Expediente de uma clinica.

    Aceita o formato da linha de clinica (``"08:00"``, ``"monday"``), entao
    ``WorkingHoursConfig.model_validate(row)`` funciona direto.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    working_days: frozenset[Weekday] | None = Field(
        default=None,
        description="Dias de funcionamento; None = todos.",
    )
    work_start: time | None = Field(default=None, description="Abertura.")
    work_end: time | None = Field(default=None, description="Fechamento (inclusivo).")
    lunch_start: time | None = Field(default=None, description="Inicio do almoco.")
    lunch_end: time | None = Field(default=None, description="Fim do almoco (exclusivo).")
    has_lunch_break: bool = Field(default=False, description="Almoco bloqueado na agenda.")

    @field_validator("working_days", mode="before")
    @classmethod
    def _normalize_days(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        return frozenset(str(day).strip().lower() for day in value)

    @field_validator("work_start", "work_end", "lunch_start", "lunch_end", mode="before")
    @classmethod
    def _blank_time_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("has_lunch_break", mode="before")
    @classmethod
    def _null_lunch_flag(cls, value: Any) -> Any:
        return False if value is None else value


__all__ = ["WEEKDAY_LABELS_PT", "Weekday", "WorkingHoursConfig"]
