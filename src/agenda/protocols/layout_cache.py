"""Contrato do cache de layout (sincrono, em processo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from agenda.domain.layout import LayoutAssignment


@runtime_checkable
class LayoutCacheProtocol(Protocol):
    """Cache consultivo de layouts ja calculados; expira por TTL."""

    def get(self, key: str) -> dict[str, LayoutAssignment] | None:
        ...

    def set(self, key: str, value: dict[str, LayoutAssignment]) -> None:
        ...
