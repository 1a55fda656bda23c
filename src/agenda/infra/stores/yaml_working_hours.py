"""Expediente das clinicas carregado de YAML com cache por TTL.

Formato::

    clinics:
      "1":
        working_days: [monday, tuesday, wednesday, thursday, friday]
        work_start: "08:00"
        work_end: "18:00"
        has_lunch_break: true
        lunch_start: "12:00"
        lunch_end: "13:00"

Arquivo ausente, YAML invalido ou entrada invalida nunca bloqueiam a agenda:
o provider devolve config permissiva e registra o fallback.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agenda.domain.working_hours import WorkingHoursConfig
from agenda.protocols.working_hours_provider import WorkingHoursConfigProviderProtocol
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_COMPONENT = "clinic_config"
_TIME_FIELDS = ("work_start", "work_end", "lunch_start", "lunch_end")
DEFAULT_TTL_SECONDS = 600


class YamlWorkingHoursProvider(WorkingHoursConfigProviderProtocol):
    __slots__ = ("_clock", "_document", "_loaded_at", "_path", "_ttl_seconds")

    def __init__(
        self,
        path: str | Path,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._path = Path(path)
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._document: dict[str, Any] | None = None
        self._loaded_at = 0.0

    def invalidate(self) -> None:
        self._document = None

    async def get(self, clinic_id: str) -> WorkingHoursConfig:
        """Expediente da clinica (fail-open).

        Args:
            clinic_id: Chave da clinica no documento YAML.

        Returns:
            Config da clinica; config permissiva quando a clinica nao existe
            ou a entrada e invalida.
        """
        clinics = await self._clinics()
        raw = clinics.get(str(clinic_id))
        if raw is None:
            return WorkingHoursConfig()
        if not isinstance(raw, dict):
            log_fallback(logger, _COMPONENT, reason="invalid_clinic_entry", clinic_id=clinic_id)
            return WorkingHoursConfig()
        try:
            return WorkingHoursConfig.model_validate(_normalize_times(raw))
        except ValidationError as exc:
            log_fallback(
                logger,
                _COMPONENT,
                reason="invalid_clinic_entry",
                clinic_id=clinic_id,
                error_count=exc.error_count(),
            )
            return WorkingHoursConfig()

    async def _clinics(self) -> dict[str, Any]:
        now = self._clock()
        document = self._document
        if document is None or now - self._loaded_at >= self._ttl_seconds:
            document = await asyncio.to_thread(_load_yaml_from_disk, self._path)
            self._document = document
            self._loaded_at = now
        clinics = document.get("clinics")
        if not isinstance(clinics, dict):
            return {}
        return {str(key): value for key, value in clinics.items()}


def _normalize_times(raw: dict[str, Any]) -> dict[str, Any]:
    # YAML 1.1 le 12:30 sem aspas como inteiro sexagesimal (750).
    data = dict(raw)
    for field in _TIME_FIELDS:
        value = data.get(field)
        if isinstance(value, int) and not isinstance(value, bool):
            data[field] = f"{value // 60:02d}:{value % 60:02d}"
    return data


def _load_yaml_from_disk(path: Path) -> dict[str, Any]:
    """Helper interno para carregar YAML do filesystem."""
    if not path.exists():
        log_fallback(logger, _COMPONENT, reason="config_file_not_found", path=str(path))
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        log_fallback(
            logger,
            _COMPONENT,
            reason="config_file_unreadable",
            path=str(path),
            error_type=type(exc).__name__,
        )
        return {}
    if not isinstance(data, dict):
        log_fallback(
            logger,
            _COMPONENT,
            reason="config_file_invalid_type",
            path=str(path),
            type=type(data).__name__,
        )
        return {}
    logger.debug(
        "clinic_config_loaded",
        extra={
            "component": _COMPONENT,
            "action": "load_disk",
            "result": "ok",
            "path": str(path),
        },
    )
    return data


__all__ = ["YamlWorkingHoursProvider"]
