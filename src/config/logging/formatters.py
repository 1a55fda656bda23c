"""Formatter JSON dos logs da agenda."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# ISO 8601 sem milissegundos; o fuso do host e o da clinica.
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def create_json_formatter() -> JsonFormatter:
    """Formatter JSON com os campos obrigatorios e `extra` achatado.

    Exemplo de output:
        {"asctime": "2024-06-10T09:00:03-0300", "level": "INFO",
         "logger": "agenda.services.slot_finder", "message": "slots_found",
         "correlation_id": "abc-123", "service": "clinic_agenda",
         "component": "slot_finder", "slots_count": 4}
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))
    return JsonFormatter(
        format_string,
        datefmt=LOG_DATE_FORMAT,
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
