"""Filters que enriquecem e sanitizam records da agenda."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"

# Campos de integracao OAuth e de paciente que nunca saem em log.
SENSITIVE_LOG_FIELDS = frozenset(
    {
        "access_token",
        "refresh_token",
        "google_client_secret",
        "contact_name",
        "patient_name",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Adiciona `correlation_id` e `service` a todo record.

    O correlation_id explicito (via `extra`) vence o do contexto.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", ""):
            getter = self._correlation_id_getter
            record.correlation_id = getter() if getter else ""
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara tokens e dados de paciente passados por engano em `extra`."""

    def __init__(self, fields: frozenset[str] = SENSITIVE_LOG_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields.intersection(record.__dict__):
            if getattr(record, field):
                setattr(record, field, REDACTED)
        return True
