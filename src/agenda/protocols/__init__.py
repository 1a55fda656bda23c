"""Protocolos e contratos com colaboradores do motor."""

from .appointment_repository import AppointmentRepositoryProtocol
from .calendar_adapter import (
    CalendarIntegrationStoreProtocol,
    ExternalCalendarAdapterProtocol,
)
from .event_cache import EventCacheProtocol
from .layout_cache import LayoutCacheProtocol
from .working_hours_provider import WorkingHoursConfigProviderProtocol

__all__ = [
    "AppointmentRepositoryProtocol",
    "CalendarIntegrationStoreProtocol",
    "EventCacheProtocol",
    "ExternalCalendarAdapterProtocol",
    "LayoutCacheProtocol",
    "WorkingHoursConfigProviderProtocol",
]
