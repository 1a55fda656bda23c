"""Registro de metricas via structured logging.

As metricas saem como logs JSON e sao agregadas fora do processo.

Metricas suportadas:
- Latencia: tempo de checagem de disponibilidade, busca de slots, layout
- Conflito: contador por tipo de conflito encontrado
- Fallback externo: integracoes que falharam e foram ignoradas

Uso:
    start = time.perf_counter()
    result = await detector.check(interval, professional_id)
    record_latency("conflict_detector", "check", (time.perf_counter() - start) * 1000)
    record_conflict(result.kind)
"""

from __future__ import annotations

import logging

from agenda.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latencia de operacao.

    Args:
        component: Nome do componente (ex: "availability_service")
        operation: Nome da operacao (ex: "check_availability")
        latency_ms: Latencia em milissegundos
        correlation_id: ID de correlacao (default: contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_conflict(
    conflict_kind: str,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de checagem de conflito (inclusive "none")."""
    logger.info(
        "metric_conflict",
        extra={
            "metric_type": "conflict",
            "component": "conflict_detector",
            "conflict_kind": conflict_kind,
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_external_fallback(
    integration_id: str,
    reason: str,
    correlation_id: str | None = None,
) -> None:
    """Registra integracao externa ignorada por falha ou timeout."""
    logger.info(
        "metric_external_fallback",
        extra={
            "metric_type": "external_fallback",
            "component": "external_calendar",
            "integration_id": integration_id,
            "reason": reason,
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )
