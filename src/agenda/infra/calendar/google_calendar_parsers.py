"""Helpers internos de parsing para respostas da Google Calendar API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from agenda.domain.appointment import ExternalEvent

if TYPE_CHECKING:
    from datetime import tzinfo

    from googleapiclient.errors import HttpError

DEFAULT_EVENT_TITLE = "Evento do Google Calendar"


def map_external_event(
    payload: dict[str, Any],
    zone: tzinfo,
    calendar_id: str,
) -> ExternalEvent | None:
    """Converte item de `events.list`; None para o que nao ocupa horario.

    Eventos de dia inteiro (apenas `date`) e cancelados sao ignorados.
    """
    if not isinstance(payload, dict) or payload.get("status") == "cancelled":
        return None
    event_id = payload.get("id")
    if not event_id:
        return None
    start = _event_datetime(payload.get("start"), zone)
    end = _event_datetime(payload.get("end"), zone)
    if start is None or end is None:
        return None
    try:
        return ExternalEvent(
            id=str(event_id),
            title=str(payload.get("summary") or DEFAULT_EVENT_TITLE),
            start=start,
            end=end,
            calendar_id=calendar_id,
            location=str(payload.get("location") or ""),
        )
    except ValidationError:
        # Evento com fim <= inicio nao ocupa a agenda.
        return None


def parse_google_datetime(value: Any, zone: tzinfo) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=zone) if parsed.tzinfo is None else parsed.astimezone(zone)


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None


def _event_datetime(value: Any, zone: tzinfo) -> datetime | None:
    if not isinstance(value, dict):
        return None
    return parse_google_datetime(value.get("dateTime"), zone)
