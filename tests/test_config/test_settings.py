"""Testes das settings do motor de agenda (defaults, env e validacao)."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import time

import pytest
from pydantic import ValidationError

from config.settings import (
    GOOGLE_TOKEN_URI,
    CalendarSettings,
    SchedulingSettings,
    get_base_settings,
    get_calendar_settings,
    get_scheduling_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_base_settings.cache_clear()
    get_calendar_settings.cache_clear()
    get_scheduling_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_calendar_settings.cache_clear()
    get_scheduling_settings.cache_clear()


class TestSchedulingSettings:
    def test_defaults(self) -> None:
        settings = SchedulingSettings()
        assert settings.calendar_timezone == "America/Sao_Paulo"
        assert settings.slot_granularity_min == 30
        assert settings.slot_window_start == time(8, 0)
        assert settings.slot_window_end == time(18, 0)
        assert settings.slot_suggestion_cap == 6
        assert settings.lane_gap_percent == 0.25
        assert settings.require_professional is True
        assert settings.event_cache_backend == "memory"

    def test_window_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError):
            SchedulingSettings(slot_window_start=time(18, 0), slot_window_end=time(8, 0))

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(ValidationError):
            SchedulingSettings(event_cache_backend="memcached")

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCHEDULING_SLOT_GRANULARITY_MIN", "15")
        monkeypatch.setenv("SCHEDULING_SLOT_WINDOW_START", "07:30")
        monkeypatch.setenv("SCHEDULING_REQUIRE_PROFESSIONAL", "false")
        monkeypatch.setenv("SCHEDULING_EVENT_CACHE_BACKEND", "REDIS")
        monkeypatch.setenv("SCHEDULING_CLINIC_CONFIG_PATH", "  ")

        settings = get_scheduling_settings()

        assert settings.slot_granularity_min == 15
        assert settings.slot_window_start == time(7, 30)
        assert settings.require_professional is False
        assert settings.event_cache_backend == "redis"
        assert settings.clinic_config_path is None
        assert get_scheduling_settings() is settings


class TestCalendarSettings:
    def test_disabled_needs_no_oauth(self) -> None:
        assert CalendarSettings().validate_oauth() == []

    def test_enabled_requires_client_credentials(self) -> None:
        errors = CalendarSettings(calendar_enabled=True).validate_oauth()
        assert errors == [
            "GOOGLE_CLIENT_ID nao configurado",
            "GOOGLE_CLIENT_SECRET nao configurado",
        ]

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALENDAR_ENABLED", "true")
        monkeypatch.setenv("GOOGLE_CLIENT_ID", " client ")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "")
        settings = get_calendar_settings()
        assert settings.calendar_enabled is True
        assert settings.google_client_id == "client"
        assert settings.google_client_secret is None
        assert settings.google_token_uri == GOOGLE_TOKEN_URI


class TestBaseSettings:
    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = get_base_settings()
        assert settings.is_production is True
        assert settings.log_level == "DEBUG"
        assert settings.validate() == []

    def test_unknown_environment_falls_back_to_development(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "qa")
        assert get_base_settings().is_development is True
