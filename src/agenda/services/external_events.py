"""Busca tolerante a falhas de eventos em calendarios externos.

Uma integracao quebrada nunca pode fazer a clinica parecer lotada nem
bloquear o agendamento: falha, timeout ou erro inesperado viram "nenhum
evento desta fonte", com log de fallback.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from agenda.observability import get_correlation_id, record_external_fallback
from config.logging import log_fallback
from utils.errors import ExternalSourceUnavailableError

if TYPE_CHECKING:
    from datetime import datetime

    from agenda.domain.appointment import CalendarIntegration, ExternalEvent
    from agenda.protocols.calendar_adapter import (
        CalendarIntegrationStoreProtocol,
        ExternalCalendarAdapterProtocol,
    )

logger = logging.getLogger(__name__)

_COMPONENT = "external_calendar"
REAUTH_REASON = "Token expired - re-authentication required"


class ExternalEventFetcher:
    """Fan-out por integracao com timeout individual."""

    __slots__ = ("_adapter", "_store", "_timeout_seconds")

    def __init__(
        self,
        *,
        adapter: ExternalCalendarAdapterProtocol,
        integration_store: CalendarIntegrationStoreProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._adapter = adapter
        self._store = integration_store
        self._timeout_seconds = timeout_seconds

    async def syncable_integrations(
        self,
        professional_id: str | None,
    ) -> list[CalendarIntegration]:
        """Integracoes ativas com sync e token, em ordem de criacao."""
        try:
            integrations = await self._store.list_for_professional(professional_id)
        except Exception:
            logger.exception(
                "integration_lookup_failed",
                extra={
                    "component": _COMPONENT,
                    "action": "list_integrations",
                    "result": "error",
                    "correlation_id": get_correlation_id(),
                },
            )
            return []
        syncable = [item for item in integrations if item.is_syncable]
        return sorted(syncable, key=lambda item: item.creation_sort_key())

    async def fetch_all(
        self,
        integrations: list[CalendarIntegration],
        start: datetime,
        end: datetime,
    ) -> list[tuple[CalendarIntegration, list[ExternalEvent]]]:
        """Busca concorrente; a ordem do retorno segue a ordem das integracoes."""
        if not integrations:
            return []
        batches = await asyncio.gather(
            *(self.fetch(integration, start, end) for integration in integrations)
        )
        return list(zip(integrations, batches, strict=True))

    async def fetch(
        self,
        integration: CalendarIntegration,
        start: datetime,
        end: datetime,
    ) -> list[ExternalEvent]:
        """Eventos de uma integracao; nunca levanta.

        Timeout, erro da fonte ou falha inesperada viram lista vazia com log
        de fallback. Token expirado marca a integracao para reautenticacao.

        Args:
            integration: Integracao sincronizavel.
            start: Inicio da janela.
            end: Fim da janela.

        Returns:
            Eventos da janela, ou [] quando a fonte foi ignorada.
        """
        started = time.perf_counter()
        try:
            events = await asyncio.wait_for(
                self._adapter.list_events(integration, start, end),
                timeout=self._timeout_seconds,
            )
        except TimeoutError:
            self._log_skip(integration, "timeout", started)
            return []
        except ExternalSourceUnavailableError as exc:
            self._log_skip(integration, exc.reason, started)
            if exc.requires_reauth:
                await self._mark_reauth(integration)
            return []
        except Exception:
            logger.exception(
                "external_fetch_unexpected_error",
                extra={
                    "component": _COMPONENT,
                    "action": "list_events",
                    "result": "error",
                    "integration_id": integration.id,
                    "correlation_id": get_correlation_id(),
                },
            )
            self._log_skip(integration, "unexpected_error", started)
            return []
        return list(events)

    async def _mark_reauth(self, integration: CalendarIntegration) -> None:
        try:
            await self._store.mark_reauth_required(integration.id, REAUTH_REASON)
        except Exception:
            logger.exception(
                "integration_reauth_mark_failed",
                extra={
                    "component": _COMPONENT,
                    "action": "mark_reauth_required",
                    "result": "error",
                    "integration_id": integration.id,
                    "correlation_id": get_correlation_id(),
                },
            )
            return
        logger.warning(
            "integration_reauth_required",
            extra={
                "component": _COMPONENT,
                "action": "mark_reauth_required",
                "result": "ok",
                "integration_id": integration.id,
                "correlation_id": get_correlation_id(),
            },
        )

    def _log_skip(self, integration: CalendarIntegration, reason: str, started: float) -> None:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        log_fallback(
            logger,
            _COMPONENT,
            reason=reason,
            elapsed_ms=elapsed_ms,
            integration_id=integration.id,
        )
        record_external_fallback(integration.id, reason)


__all__ = ["REAUTH_REASON", "ExternalEventFetcher"]
