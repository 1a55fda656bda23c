"""Builders de dados de agenda para testes."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from agenda.domain.appointment import Appointment, CalendarIntegration, ExternalEvent

TZ = ZoneInfo("America/Sao_Paulo")


def at(day: str, clock: str) -> datetime:
    """`at("2024-06-10", "09:30")` no fuso da clinica."""
    return datetime.fromisoformat(f"{day}T{clock}").replace(tzinfo=TZ)


def appointment(
    appointment_id: str,
    day: str,
    clock: str,
    duration: int | None = 60,
    *,
    professional_id: str | None = "dr-1",
    status: str = "agendada",
    external_event_id: str | None = None,
    title: str = "",
) -> Appointment:
    return Appointment(
        id=appointment_id,
        contact_id="contact-1",
        professional_id=professional_id,
        scheduled_start=at(day, clock),
        duration_minutes=duration,
        status=status,
        external_event_id=external_event_id,
        title=title,
    )


def external_event(
    event_id: str,
    day: str,
    start: str,
    end: str,
    *,
    title: str = "Evento externo",
    calendar_id: str = "primary",
) -> ExternalEvent:
    return ExternalEvent(
        id=event_id,
        title=title,
        start=at(day, start),
        end=at(day, end),
        calendar_id=calendar_id,
    )


def integration(
    integration_id: str,
    *,
    professional_id: str | None = "dr-1",
    created_at: datetime | None = None,
    access_token: str | None = "token",
    is_active: bool = True,
    sync_enabled: bool = True,
) -> CalendarIntegration:
    return CalendarIntegration(
        id=integration_id,
        professional_id=professional_id,
        access_token=access_token,
        refresh_token="refresh",
        is_active=is_active,
        sync_enabled=sync_enabled,
        created_at=created_at,
    )
