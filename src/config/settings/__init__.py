"""Agregador de settings do motor de agenda.

Re-exporta todas as settings e funcoes de cada modulo.
Organizacao por dominio para isolamento de mudancas.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Calendar settings
from config.settings.calendar import (
    GOOGLE_TOKEN_URI,
    CalendarSettings,
    get_calendar_settings,
)

# Scheduling engine settings
from config.settings.scheduling import (
    EventCacheBackend,
    SchedulingSettings,
    get_scheduling_settings,
)

__all__ = [
    "GOOGLE_TOKEN_URI",
    "BaseSettings",
    "CalendarSettings",
    "Environment",
    "EventCacheBackend",
    "SchedulingSettings",
    "get_base_settings",
    "get_calendar_settings",
    "get_scheduling_settings",
]
