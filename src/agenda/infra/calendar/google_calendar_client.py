"""Adapter de leitura de eventos do Google Calendar por integracao."""

from __future__ import annotations

import asyncio
import functools
import logging
from datetime import UTC
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

import httplib2
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from agenda.infra.calendar.google_calendar_parsers import http_status, map_external_event
from agenda.observability import get_correlation_id
from agenda.protocols.calendar_adapter import ExternalCalendarAdapterProtocol
from utils.errors import ExternalSourceUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from agenda.domain.appointment import CalendarIntegration, ExternalEvent
    from config.settings import CalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_adapter"
_CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"
_PAGE_SIZE = 250
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


def _build_service(
    credentials: Credentials,
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> Any:
    # httplib2 sem timeout bloqueia a thread do to_thread indefinidamente.
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout_seconds))
    return build("calendar", "v3", http=http, cache_discovery=False)


class GoogleCalendarAdapter(ExternalCalendarAdapterProtocol):
    """Lista eventos da API v3 usando os tokens OAuth de cada integracao.

    Chamadas do client sao bloqueantes e rodam em `asyncio.to_thread`.
    Token expirado/revogado vira ExternalSourceUnavailableError com
    `requires_reauth=True`.
    """

    __slots__ = ("_service_factory", "_settings", "_timezone", "_zone")

    def __init__(
        self,
        *,
        settings: CalendarSettings,
        timezone: str,
        service_factory: Callable[[Credentials], Any] | None = None,
        http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._settings = settings
        self._timezone = timezone
        self._zone = ZoneInfo(timezone)
        self._service_factory = service_factory or functools.partial(
            _build_service,
            timeout_seconds=http_timeout_seconds,
        )

    async def list_events(
        self,
        integration: CalendarIntegration,
        start: datetime,
        end: datetime,
    ) -> list[ExternalEvent]:
        """Eventos com horario do calendario alvo da integracao em [start, end).

        Args:
            integration: Integracao com tokens OAuth do profissional.
            start: Inicio da janela (timeMin).
            end: Fim da janela (timeMax).

        Returns:
            Eventos mapeados; eventos de dia inteiro e cancelados ficam de fora.

        Raises:
            ExternalSourceUnavailableError: Token ausente ou expirado, erro HTTP
                ou falha inesperada do client.
        """
        if not integration.access_token:
            raise ExternalSourceUnavailableError(
                integration.id,
                "missing_access_token",
                requires_reauth=True,
            )
        calendar_id = integration.target_calendar_id
        try:
            items = await asyncio.to_thread(
                self._list_events_sync,
                integration,
                calendar_id,
                start,
                end,
            )
        except RefreshError as exc:
            self._log_error(integration, action="list_events", result="reauth_required")
            raise ExternalSourceUnavailableError(
                integration.id,
                "token_refresh_failed",
                requires_reauth=True,
            ) from exc
        except HttpError as exc:
            status_code = http_status(exc)
            self._log_error(integration, action="list_events", result="error", exc=exc)
            raise ExternalSourceUnavailableError(
                integration.id,
                f"http_{status_code}" if status_code else "http_error",
                requires_reauth=status_code == 401,
            ) from exc
        except Exception as exc:
            self._log_error(integration, action="list_events", result="error", unexpected=True)
            raise ExternalSourceUnavailableError(integration.id, "unexpected_error") from exc

        events = [
            event
            for item in items
            if (event := map_external_event(item, self._zone, calendar_id)) is not None
        ]
        logger.debug(
            "google_calendar_events_listed",
            extra={
                "component": _COMPONENT,
                "action": "list_events",
                "result": "ok",
                "integration_id": integration.id,
                "events_count": len(events),
                "correlation_id": get_correlation_id(),
            },
        )
        return events

    def _credentials(self, integration: CalendarIntegration) -> Credentials:
        expiry = None
        if integration.token_expires_at is not None:
            # google-auth compara expiry como UTC naive.
            expiry = integration.token_expires_at.astimezone(UTC).replace(tzinfo=None)
        return Credentials(
            token=integration.access_token,
            refresh_token=integration.refresh_token,
            token_uri=self._settings.google_token_uri,
            client_id=self._settings.google_client_id,
            client_secret=self._settings.google_client_secret,
            scopes=[_CALENDAR_SCOPE],
            expiry=expiry,
        )

    def _list_events_sync(
        self,
        integration: CalendarIntegration,
        calendar_id: str,
        start: datetime,
        end: datetime,
    ) -> list[dict[str, Any]]:
        service = self._service_factory(self._credentials(integration))
        items: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            response = (
                service.events()
                .list(
                    calendarId=calendar_id,
                    timeMin=start.isoformat(),
                    timeMax=end.isoformat(),
                    timeZone=self._timezone,
                    singleEvents=True,
                    orderBy="startTime",
                    maxResults=_PAGE_SIZE,
                    pageToken=page_token,
                )
                .execute()
            )
            items.extend(response.get("items") or [])
            page_token = response.get("nextPageToken")
            if not page_token:
                return items

    def _log_error(
        self,
        integration: CalendarIntegration,
        *,
        action: str,
        result: str,
        exc: HttpError | None = None,
        unexpected: bool = False,
    ) -> None:
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": action,
            "result": result,
            "integration_id": integration.id,
            "correlation_id": get_correlation_id(),
        }
        if exc is not None:
            extra["status_code"] = http_status(exc)
            extra["error_type"] = type(exc).__name__
            logger.error("google_calendar_http_error", extra=extra)
            return
        if unexpected:
            logger.exception("google_calendar_unexpected_error", extra=extra)
            return
        logger.warning("google_calendar_auth_error", extra=extra)


__all__ = ["GoogleCalendarAdapter"]
