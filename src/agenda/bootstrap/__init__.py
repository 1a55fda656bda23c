"""Bootstrap do motor de agenda — inicializacao e wiring.

Este modulo e o composition root: configura logging, valida settings e
conecta implementacoes concretas aos protocolos.

Uso:
    from agenda.bootstrap import initialize_app, create_availability_service

    # Na inicializacao do servico
    initialize_app()

    service = create_availability_service(
        repository=clinic_appointments,
        integration_store=clinic_integrations,
    )
"""

from __future__ import annotations

import logging

from agenda.bootstrap.dependencies import (
    create_availability_service,
    create_calendar_adapter,
    create_day_agenda_service,
    create_event_cache,
    create_working_hours_provider,
)
from agenda.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_calendar_settings,
    get_scheduling_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa o motor com logging JSON e correlation_id.

    Deve ser chamada uma vez no inicio do servico.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa o motor para testes (nivel DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatorias no startup.

    Em `staging`/`production` falha rapido para impedir boot invalido.
    Em `development` mantem alerta sem bloquear execucao local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"calendar: {error}" for error in get_calendar_settings().validate_oauth())

    scheduling = get_scheduling_settings()
    if scheduling.event_cache_backend == "redis" and not base.redis_url:
        errors.append(
            "scheduling: REDIS_URL obrigatorio com SCHEDULING_EVENT_CACHE_BACKEND=redis"
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuracao invalida para {environment}:\n{details}")


__all__ = [
    "create_availability_service",
    "create_calendar_adapter",
    "create_day_agenda_service",
    "create_event_cache",
    "create_working_hours_provider",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]
