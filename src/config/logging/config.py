"""Configuracao centralizada de logging JSON."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "clinic_agenda"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o servico.

    Deve ser chamada uma vez na inicializacao (agenda.bootstrap).

    Args:
        level: Nivel de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do servico para identificacao nos logs.
        correlation_id_getter: Funcao opcional que retorna o correlation_id
            do contexto atual.

    Raises:
        ValueError: Se o nivel de log for invalido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nivel de log invalido: {level}. "
            f"Validos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveFieldFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substitui handlers existentes para evitar duplicacao
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o modulo (service e correlation_id vem do filter)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
    **fields: object,
) -> None:
    """Log observavel de fallback aplicado (sem PII).

    Usado quando o motor segue em modo degradado: calendario externo fora,
    config da clinica ausente, cache indisponivel.

    Exemplo:
        log_fallback(
            logger,
            "conflict_detector",
            reason="external_timeout",
            elapsed_ms=5003.2,
            integration_id="12",
        )
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    extra.update(fields)

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
