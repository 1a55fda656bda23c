"""Settings de integracao com Google Calendar.

Os tokens de cada profissional vivem na integracao persistida; aqui ficam
apenas as credenciais do app OAuth usadas para renovar access tokens.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class CalendarSettings(BaseModel):
    """Configuracoes do adapter de calendario externo."""

    model_config = ConfigDict(extra="ignore")

    calendar_enabled: bool = Field(
        default=False,
        description="Feature flag para consultar calendarios externos.",
    )
    google_client_id: str | None = Field(
        default=None,
        description="Client ID do app OAuth do Google.",
    )
    google_client_secret: str | None = Field(
        default=None,
        description="Client secret do app OAuth do Google.",
    )
    google_token_uri: str = Field(
        default=GOOGLE_TOKEN_URI,
        description="Endpoint de renovacao de token.",
    )

    def validate_oauth(self) -> list[str]:
        """Lista problemas de configuracao quando a integracao esta ligada."""
        if not self.calendar_enabled:
            return []
        errors: list[str] = []
        if not self.google_client_id:
            errors.append("GOOGLE_CLIENT_ID nao configurado")
        if not self.google_client_secret:
            errors.append("GOOGLE_CLIENT_SECRET nao configurado")
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool com o mesmo padrao dos outros settings."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_calendar_from_env() -> CalendarSettings:
    """Carrega CalendarSettings a partir de variaveis de ambiente."""
    return CalendarSettings(
        calendar_enabled=_parse_bool(os.getenv("CALENDAR_ENABLED", "false")),
        google_client_id=_read_optional_env("GOOGLE_CLIENT_ID"),
        google_client_secret=_read_optional_env("GOOGLE_CLIENT_SECRET"),
        google_token_uri=os.getenv("GOOGLE_TOKEN_URI", GOOGLE_TOKEN_URI),
    )


@lru_cache(maxsize=1)
def get_calendar_settings() -> CalendarSettings:
    """Retorna instancia cacheada de CalendarSettings."""
    return _load_calendar_from_env()


__all__ = ["GOOGLE_TOKEN_URI", "CalendarSettings", "get_calendar_settings"]
