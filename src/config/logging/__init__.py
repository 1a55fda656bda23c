"""Configuracao de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # No bootstrap
    configure_logging(level="INFO", service_name="clinic_agenda")

    # Em qualquer modulo
    logger = get_logger(__name__)
    logger.info("availability_checked", extra={"latency_ms": 42})

Todo log sai em JSON com correlation_id, service, level, logger, message
e asctime. Nunca logar nome de paciente nem tokens de integracao.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import SENSITIVE_LOG_FIELDS, CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveFieldFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
