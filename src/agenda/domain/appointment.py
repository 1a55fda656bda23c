"""Modelos de dominio para consultas e eventos de calendario externo.

O motor so le snapshots: consultas pertencem ao repositorio da clinica e
eventos externos pertencem ao provedor de calendario.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo  # noqa: TC003 - usado em runtime pelo Pydantic
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.errors import InvalidIntervalError

DEFAULT_DURATION_MINUTES = 60

# Status de cancelamento usados pela clinica (e o equivalente em ingles
# vindo de integracoes antigas).
CANCELLED_STATUSES = frozenset(
    {
        "cancelada",
        "cancelada_paciente",
        "cancelada_dentista",
        "cancelled",
        "canceled",
    }
)


def localize(moment: datetime, zone: tzinfo | None) -> datetime:
    """Horario naive e horario local da clinica: recebe `zone`.

    Colunas `timestamp` sem fuso chegam naive do banco; valores com fuso
    nao sao convertidos.
    """
    if moment.tzinfo is not None or zone is None:
        return moment
    return moment.replace(tzinfo=zone)


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Overlap estrito: consultas encostadas (fim == inicio) nao colidem."""
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True, slots=True)
class TimeInterval:
    """Intervalo semiaberto [start, end) com end > start garantido."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidIntervalError(
                f"intervalo invalido: fim {self.end.isoformat()} <= inicio {self.start.isoformat()}"
            )

    @classmethod
    def from_duration(cls, start: datetime, duration_minutes: int) -> TimeInterval:
        if duration_minutes <= 0:
            raise InvalidIntervalError(f"duracao deve ser positiva: {duration_minutes}")
        return cls(start=start, end=start + timedelta(minutes=duration_minutes))

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: TimeInterval) -> bool:
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def localized(self, zone: tzinfo | None) -> TimeInterval:
        if self.start.tzinfo is not None and self.end.tzinfo is not None:
            return self
        return TimeInterval(start=localize(self.start, zone), end=localize(self.end, zone))


class AppointmentOrigin(StrEnum):
    """Origem da consulta exibida na agenda."""

    LOCAL = "local"
    EXTERNAL = "external"


class Appointment(BaseModel):
    """Snapshot de uma consulta (local ou espelhada de calendario externo)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Identificador da consulta.")
    contact_id: str | None = Field(default=None, description="Paciente/contato.")
    professional_id: str | None = Field(default=None, description="Profissional dono da agenda.")
    scheduled_start: datetime = Field(..., description="Inicio agendado.")
    duration_minutes: int = Field(
        default=DEFAULT_DURATION_MINUTES,
        ge=1,
        description="Duracao em minutos; registros legados sem duracao usam 60.",
    )
    status: str = Field(default="agendada", description="Status atual da consulta.")
    origin: AppointmentOrigin = Field(default=AppointmentOrigin.LOCAL)
    external_event_id: str | None = Field(
        default=None,
        description="Evento externo espelhado por esta consulta.",
    )
    title: str = Field(default="", description="Rotulo exibido (profissional - paciente).")

    @field_validator("id", "contact_id", "professional_id", "external_event_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        # Ids numericos do banco convivem com ids textuais de integracoes.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _default_duration(cls, value: Any) -> Any:
        return DEFAULT_DURATION_MINUTES if value is None else value

    @property
    def end(self) -> datetime:
        return self.scheduled_start + timedelta(minutes=self.duration_minutes)

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.scheduled_start, end=self.end)

    @property
    def is_active(self) -> bool:
        return self.status.strip().lower() not in CANCELLED_STATUSES

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Overlap usando a duracao real desta consulta."""
        return intervals_overlap(self.scheduled_start, self.end, start, end)

    def localized(self, zone: tzinfo | None) -> Appointment:
        """Copia com `scheduled_start` no fuso da clinica quando veio naive."""
        if self.scheduled_start.tzinfo is not None or zone is None:
            return self
        return self.model_copy(update={"scheduled_start": localize(self.scheduled_start, zone)})


class ExternalEvent(BaseModel):
    """Evento lido de um calendario externo (somente leitura, efemero)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Identificador do evento no provedor.")
    title: str = Field(default="Evento sem titulo", description="Resumo do evento.")
    start: datetime = Field(..., description="Inicio do evento.")
    end: datetime = Field(..., description="Fim do evento.")
    calendar_id: str = Field(default="", description="Calendario de origem.")
    location: str = Field(default="", description="Local informado no evento.")

    @model_validator(mode="after")
    def _check_bounds(self) -> ExternalEvent:
        if self.end <= self.start:
            raise ValueError("evento externo com fim <= inicio")
        return self

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return intervals_overlap(self.start, self.end, start, end)

    def localized(self, zone: tzinfo | None) -> ExternalEvent:
        if zone is None or (self.start.tzinfo is not None and self.end.tzinfo is not None):
            return self
        return self.model_copy(
            update={"start": localize(self.start, zone), "end": localize(self.end, zone)}
        )


class CalendarIntegration(BaseModel):
    """Conexao de um profissional com um calendario externo."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Identificador da integracao.")
    professional_id: str | None = Field(default=None, description="Dono da integracao.")
    clinic_id: str | None = Field(default=None)
    provider: str = Field(default="google")
    calendar_id: str | None = Field(default=None)
    linked_calendar_id: str | None = Field(
        default=None,
        description="Calendario escolhido pelo usuario para sincronizar.",
    )
    access_token: str | None = Field(default=None, repr=False)
    refresh_token: str | None = Field(default=None, repr=False)
    token_expires_at: datetime | None = Field(default=None)
    is_active: bool = Field(default=True)
    sync_enabled: bool = Field(default=True)
    created_at: datetime | None = Field(default=None)

    @field_validator("id", "professional_id", "clinic_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def is_syncable(self) -> bool:
        """Integracao ativa, com sync habilitado e token presente."""
        return bool(self.is_active and self.sync_enabled and self.access_token)

    @property
    def target_calendar_id(self) -> str:
        return self.linked_calendar_id or self.calendar_id or "primary"

    def creation_sort_key(self) -> tuple[bool, float, str]:
        created = self.created_at.timestamp() if self.created_at else 0.0
        return (self.created_at is None, created, self.id)


__all__ = [
    "CANCELLED_STATUSES",
    "DEFAULT_DURATION_MINUTES",
    "Appointment",
    "AppointmentOrigin",
    "CalendarIntegration",
    "ExternalEvent",
    "TimeInterval",
    "intervals_overlap",
    "localize",
]
