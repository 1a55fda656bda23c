"""Contrato do cache de eventos externos (consultivo, com TTL)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from agenda.domain.appointment import ExternalEvent


@runtime_checkable
class EventCacheProtocol(Protocol):
    """Cache de eventos por chave (integracao + janela).

    Miss e sempre seguro: o chamador busca de novo no provedor.
    """

    async def get(self, key: str) -> list[ExternalEvent] | None:
        ...

    async def set(self, key: str, events: list[ExternalEvent], ttl_seconds: int) -> None:
        ...
