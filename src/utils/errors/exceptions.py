"""Excecoes compartilhadas do motor de agenda.

Resultados de negocio (conflito, ausencia de profissional) nunca viram
excecao; aqui ficam apenas erros de programacao e falhas de infraestrutura
recuperaveis.
"""

from __future__ import annotations


class SchedulingError(Exception):
    """Base para erros do dominio de agendamento."""


class InvalidIntervalError(SchedulingError, ValueError):
    """Intervalo malformado (fim <= inicio ou duracao nao positiva)."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitorias."""


class ExternalSourceUnavailableError(InfrastructureError):
    """Calendario externo indisponivel, expirado ou com timeout.

    Sempre recuperado dentro do motor: a integracao contribui "sem conflito"
    na checagem corrente.
    """

    def __init__(
        self,
        integration_id: str,
        reason: str,
        *,
        requires_reauth: bool = False,
    ) -> None:
        super().__init__(f"integration {integration_id} unavailable: {reason}")
        self.integration_id = integration_id
        self.reason = reason
        self.requires_reauth = requires_reauth


class CacheBackendError(InfrastructureError):
    """Falha ao ler/gravar no backend de cache (tratada como cache miss)."""
