"""Observabilidade — correlation_id e metricas.

Uso:
    from agenda.observability import get_correlation_id, set_correlation_id
    from agenda.observability import record_latency, record_conflict
"""

from agenda.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from agenda.observability.metrics import (
    record_conflict,
    record_external_fallback,
    record_latency,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_conflict",
    "record_external_fallback",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
