"""Factories do motor de agenda baseadas em configuracao de ambiente.

Repositorio de consultas e store de integracoes pertencem a aplicacao da
clinica e sao injetados; sem eles, usamos os stores em memoria (dev/test).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from agenda.bootstrap.clients import create_async_redis_client
from agenda.infra.cache import LayoutCache, MemoryEventCache, RedisEventCache
from agenda.infra.calendar.cached_adapter import CachedCalendarAdapter
from agenda.infra.calendar.google_calendar_client import GoogleCalendarAdapter
from agenda.infra.stores import (
    MemoryAppointmentRepository,
    MemoryIntegrationStore,
    MemoryWorkingHoursProvider,
    YamlWorkingHoursProvider,
)
from agenda.services import AvailabilityService, ConflictDetector, DayAgendaService
from config.settings import (
    get_base_settings,
    get_calendar_settings,
    get_scheduling_settings,
)

if TYPE_CHECKING:
    from agenda.protocols import (
        AppointmentRepositoryProtocol,
        CalendarIntegrationStoreProtocol,
        EventCacheProtocol,
        ExternalCalendarAdapterProtocol,
        WorkingHoursConfigProviderProtocol,
    )
    from config.settings import CalendarSettings, SchedulingSettings

logger = logging.getLogger(__name__)


def create_event_cache(settings: SchedulingSettings | None = None) -> EventCacheProtocol:
    """Cria cache de eventos externos conforme SCHEDULING_EVENT_CACHE_BACKEND."""
    settings = settings or get_scheduling_settings()
    backend = settings.event_cache_backend

    if backend == "redis":
        cache: EventCacheProtocol = RedisEventCache(create_async_redis_client())
    elif backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_cache_in_non_dev",
                extra={"component": "bootstrap", "backend": "memory", "environment": environment},
            )
        cache = MemoryEventCache(max_entries=settings.cache_max_entries)
    else:
        msg = f"SCHEDULING_EVENT_CACHE_BACKEND invalido: {backend}"
        raise ValueError(msg)

    logger.info("event_cache_created", extra={"component": "bootstrap", "backend": backend})
    return cache


def create_calendar_adapter(
    settings: SchedulingSettings | None = None,
    calendar_settings: CalendarSettings | None = None,
    event_cache: EventCacheProtocol | None = None,
) -> ExternalCalendarAdapterProtocol | None:
    """Adapter Google com cache; None quando CALENDAR_ENABLED=false."""
    settings = settings or get_scheduling_settings()
    calendar_settings = calendar_settings or get_calendar_settings()
    if not calendar_settings.calendar_enabled:
        logger.info(
            "calendar_adapter_disabled",
            extra={"component": "bootstrap", "result": "disabled"},
        )
        return None

    adapter = GoogleCalendarAdapter(
        settings=calendar_settings,
        timezone=settings.calendar_timezone,
        http_timeout_seconds=settings.external_fetch_timeout_seconds,
    )
    if settings.external_events_cache_ttl_seconds <= 0:
        return adapter
    return CachedCalendarAdapter(
        adapter,
        event_cache or create_event_cache(settings),
        ttl_seconds=settings.external_events_cache_ttl_seconds,
    )


def create_working_hours_provider(
    settings: SchedulingSettings | None = None,
) -> WorkingHoursConfigProviderProtocol:
    settings = settings or get_scheduling_settings()
    if settings.clinic_config_path:
        return YamlWorkingHoursProvider(settings.clinic_config_path)
    return MemoryWorkingHoursProvider()


def create_availability_service(
    *,
    repository: AppointmentRepositoryProtocol | None = None,
    integration_store: CalendarIntegrationStoreProtocol | None = None,
    calendar_adapter: ExternalCalendarAdapterProtocol | None = None,
    working_hours_provider: WorkingHoursConfigProviderProtocol | None = None,
    settings: SchedulingSettings | None = None,
) -> AvailabilityService:
    """Composition root: settings -> caches -> adapter -> detector -> servico."""
    settings = settings or get_scheduling_settings()
    repository = repository or MemoryAppointmentRepository()
    integration_store = integration_store or MemoryIntegrationStore()
    if calendar_adapter is None:
        calendar_adapter = create_calendar_adapter(settings)

    detector = ConflictDetector(
        repository=repository,
        integration_store=integration_store,
        calendar_adapter=calendar_adapter,
        require_professional=settings.require_professional,
        external_timeout_seconds=settings.external_fetch_timeout_seconds,
        zone=ZoneInfo(settings.calendar_timezone),
    )
    service = AvailabilityService(
        detector=detector,
        repository=repository,
        working_hours_provider=working_hours_provider or create_working_hours_provider(settings),
        settings=settings,
        layout_cache=LayoutCache(
            ttl_seconds=settings.layout_cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        ),
    )
    logger.info(
        "availability_service_created",
        extra={
            "component": "bootstrap",
            "result": "ok",
            "external_calendar": calendar_adapter is not None,
        },
    )
    return service


def create_day_agenda_service(
    *,
    repository: AppointmentRepositoryProtocol,
    integration_store: CalendarIntegrationStoreProtocol | None = None,
    calendar_adapter: ExternalCalendarAdapterProtocol | None = None,
    settings: SchedulingSettings | None = None,
) -> DayAgendaService:
    settings = settings or get_scheduling_settings()
    if calendar_adapter is None:
        calendar_adapter = create_calendar_adapter(settings)
    return DayAgendaService(
        repository=repository,
        integration_store=integration_store,
        calendar_adapter=calendar_adapter,
        external_timeout_seconds=settings.external_fetch_timeout_seconds,
        zone=ZoneInfo(settings.calendar_timezone),
    )
