"""Resultados de checagem de conflito e o formato exposto de disponibilidade.

Conflito e resultado tipado, nunca excecao: a UI renderiza "profissional
nao selecionado" do mesmo jeito que um conflito real.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo Pydantic
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ConflictType = Literal["appointment", "external_calendar", "no_professional"]

NO_PROFESSIONAL_MESSAGE = "Selecione um profissional para verificar a disponibilidade."


class _ConflictBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def blocks_booking(self) -> bool:
        return True


class NoConflict(_ConflictBase):
    """Intervalo livre em todas as fontes consultadas."""

    kind: Literal["none"] = "none"

    @property
    def blocks_booking(self) -> bool:
        return False


class AppointmentConflict(_ConflictBase):
    """Colisao com consulta local (fonte autoritativa)."""

    kind: Literal["appointment"] = "appointment"
    appointment_id: str = Field(..., description="Consulta que ocupa o horario.")
    title: str = Field(..., description="Rotulo da consulta conflitante.")
    start: datetime = Field(..., description="Inicio da consulta conflitante.")
    end: datetime = Field(..., description="Fim da consulta conflitante.")


class ExternalConflict(_ConflictBase):
    """Colisao com evento de calendario externo nao espelhado localmente."""

    kind: Literal["external_calendar"] = "external_calendar"
    event_id: str = Field(..., description="Evento externo conflitante.")
    title: str = Field(..., description="Resumo do evento.")
    start: datetime = Field(..., description="Inicio do evento.")
    end: datetime = Field(..., description="Fim do evento.")
    calendar_id: str = Field(default="")
    integration_id: str = Field(default="")
    location: str = Field(default="")


class NoProfessionalSelected(_ConflictBase):
    """Pseudo-conflito bloqueante: disponibilidade exige saber de quem e a agenda."""

    kind: Literal["no_professional"] = "no_professional"
    message: str = Field(default=NO_PROFESSIONAL_MESSAGE)


ConflictResult = Annotated[
    NoConflict | AppointmentConflict | ExternalConflict | NoProfessionalSelected,
    Field(discriminator="kind"),
]


class ConflictDetails(BaseModel):
    """Detalhe suficiente para explicar o conflito sem nova consulta."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    title: str
    start: datetime
    end: datetime
    source: Literal["appointment", "external_calendar"]
    location: str = ""


class AvailabilityResult(BaseModel):
    """Resposta de check_availability consumida pela UI/API."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    available: bool
    conflict: bool
    conflict_type: ConflictType | None = None
    conflict_details: ConflictDetails | None = None
    message: str | None = None

    @classmethod
    def from_conflict(
        cls,
        result: NoConflict | AppointmentConflict | ExternalConflict | NoProfessionalSelected,
    ) -> AvailabilityResult:
        if isinstance(result, AppointmentConflict):
            details = ConflictDetails(
                id=result.appointment_id,
                title=result.title,
                start=result.start,
                end=result.end,
                source="appointment",
            )
            return cls(
                available=False,
                conflict=True,
                conflict_type="appointment",
                conflict_details=details,
            )
        if isinstance(result, ExternalConflict):
            details = ConflictDetails(
                id=result.event_id,
                title=result.title,
                start=result.start,
                end=result.end,
                source="external_calendar",
                location=result.location,
            )
            return cls(
                available=False,
                conflict=True,
                conflict_type="external_calendar",
                conflict_details=details,
            )
        if isinstance(result, NoProfessionalSelected):
            return cls(
                available=False,
                conflict=True,
                conflict_type="no_professional",
                message=result.message,
            )
        return cls(available=True, conflict=False)


__all__ = [
    "NO_PROFESSIONAL_MESSAGE",
    "AppointmentConflict",
    "AvailabilityResult",
    "ConflictDetails",
    "ConflictResult",
    "ConflictType",
    "ExternalConflict",
    "NoConflict",
    "NoProfessionalSelected",
]
