"""Settings do motor de disponibilidade e layout de agenda.

Valores padrao refletem o comportamento historico da clinica: sugestoes
de 30 em 30 minutos entre 08:00 e 18:00, no maximo 6 sugestoes.
"""

from __future__ import annotations

import os
from datetime import time
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

EventCacheBackend = Literal["memory", "redis"]


class SchedulingSettings(BaseModel):
    """Configuracoes de checagem de conflito, sugestao de slots e layout."""

    model_config = ConfigDict(extra="ignore")

    calendar_timezone: str = Field(
        default="America/Sao_Paulo",
        description="Timezone unico da clinica.",
    )
    slot_granularity_min: int = Field(default=30, ge=1, description="Passo entre sugestoes.")
    slot_window_start: time = Field(default=time(8, 0), description="Inicio da janela de busca.")
    slot_window_end: time = Field(default=time(18, 0), description="Fim (exclusivo) da janela.")
    slot_suggestion_cap: int = Field(default=6, ge=0, description="Maximo de sugestoes.")
    slot_cell_minutes: int = Field(
        default=15,
        ge=1,
        description="Largura da celula usada na analise rapida de slot.",
    )
    default_duration_min: int = Field(
        default=60,
        ge=1,
        description="Duracao assumida para consultas legadas sem duracao.",
    )
    lane_gap_percent: float = Field(
        default=0.25,
        ge=0,
        lt=50,
        description="Margem entre lanes de um grupo de colisao.",
    )
    require_professional: bool = Field(
        default=True,
        description="Exige profissional selecionado para checar disponibilidade.",
    )
    external_fetch_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout por integracao de calendario externo.",
    )
    external_events_cache_ttl_seconds: int = Field(default=120, ge=0)
    layout_cache_ttl_seconds: int = Field(default=600, ge=0)
    cache_max_entries: int = Field(default=1024, ge=1)
    event_cache_backend: EventCacheBackend = Field(default="memory")
    clinic_config_path: str | None = Field(
        default=None,
        description="YAML com horario de funcionamento por clinica.",
    )

    @model_validator(mode="after")
    def _check_window(self) -> SchedulingSettings:
        if self.slot_window_end <= self.slot_window_start:
            raise ValueError("slot_window_end deve ser posterior a slot_window_start")
        return self


def _read_optional_env(key: str) -> str | None:
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    return raw_value.strip() or None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_scheduling_from_env() -> SchedulingSettings:
    """Carrega SchedulingSettings a partir de variaveis de ambiente."""
    return SchedulingSettings(
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "America/Sao_Paulo"),
        slot_granularity_min=int(os.getenv("SCHEDULING_SLOT_GRANULARITY_MIN", "30")),
        slot_window_start=os.getenv("SCHEDULING_SLOT_WINDOW_START", "08:00"),
        slot_window_end=os.getenv("SCHEDULING_SLOT_WINDOW_END", "18:00"),
        slot_suggestion_cap=int(os.getenv("SCHEDULING_SLOT_SUGGESTION_CAP", "6")),
        slot_cell_minutes=int(os.getenv("SCHEDULING_SLOT_CELL_MINUTES", "15")),
        default_duration_min=int(os.getenv("SCHEDULING_DEFAULT_DURATION_MIN", "60")),
        lane_gap_percent=float(os.getenv("SCHEDULING_LANE_GAP_PERCENT", "0.25")),
        require_professional=_parse_bool(os.getenv("SCHEDULING_REQUIRE_PROFESSIONAL", "true")),
        external_fetch_timeout_seconds=float(
            os.getenv("SCHEDULING_EXTERNAL_FETCH_TIMEOUT_SECONDS", "5")
        ),
        external_events_cache_ttl_seconds=int(
            os.getenv("SCHEDULING_EXTERNAL_EVENTS_CACHE_TTL_SECONDS", "120")
        ),
        layout_cache_ttl_seconds=int(os.getenv("SCHEDULING_LAYOUT_CACHE_TTL_SECONDS", "600")),
        cache_max_entries=int(os.getenv("SCHEDULING_CACHE_MAX_ENTRIES", "1024")),
        event_cache_backend=os.getenv("SCHEDULING_EVENT_CACHE_BACKEND", "memory").lower(),
        clinic_config_path=_read_optional_env("SCHEDULING_CLINIC_CONFIG_PATH"),
    )


@lru_cache(maxsize=1)
def get_scheduling_settings() -> SchedulingSettings:
    """Retorna instancia cacheada de SchedulingSettings."""
    return _load_scheduling_from_env()


__all__ = ["EventCacheBackend", "SchedulingSettings", "get_scheduling_settings"]
