"""Cache de eventos externos compartilhado via Redis.

Payload JSON com TTL nativo (SETEX). Falha do Redis vira cache miss:
o cache e consultivo e nunca derruba a checagem de disponibilidade.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from redis.exceptions import RedisError

from agenda.domain.appointment import ExternalEvent
from agenda.observability import get_correlation_id
from agenda.protocols.event_cache import EventCacheProtocol
from utils.errors import CacheBackendError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

EVENT_CACHE_PREFIX = "agenda:external_events:"


class RedisEventCache(EventCacheProtocol):
    """Store de eventos externos por chave (integracao + janela).

    Args:
        redis_client: Cliente Redis assincrono
    """

    __slots__ = ("_redis",)

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client

    def _key(self, key: str) -> str:
        return f"{EVENT_CACHE_PREFIX}{key}"

    async def get(self, key: str) -> list[ExternalEvent] | None:
        """Eventos em cache; None em miss, payload invalido ou Redis indisponivel."""
        try:
            raw = await self._read(key)
        except CacheBackendError as exc:
            self._log_backend_error("get", exc)
            return None
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            return [ExternalEvent.model_validate(item) for item in payload]
        except (json.JSONDecodeError, TypeError, ValidationError) as exc:
            logger.warning(
                "event_cache_payload_invalid",
                extra={
                    "component": "redis_event_cache",
                    "action": "get",
                    "result": "invalid_payload",
                    "error_type": type(exc).__name__,
                    "correlation_id": get_correlation_id(),
                },
            )
            return None

    async def set(self, key: str, events: list[ExternalEvent], ttl_seconds: int) -> None:
        """Grava com SETEX; ttl <= 0 nao grava e erro de Redis so gera log."""
        if ttl_seconds <= 0:
            return
        data = json.dumps([event.model_dump(mode="json") for event in events])
        try:
            await self._write(key, ttl_seconds, data)
        except CacheBackendError as exc:
            self._log_backend_error("set", exc)

    async def _read(self, key: str) -> bytes | str | None:
        try:
            return await self._redis.get(self._key(key))
        except (RedisError, OSError) as exc:
            raise CacheBackendError(f"redis get failed: {type(exc).__name__}") from exc

    async def _write(self, key: str, ttl_seconds: int, data: str) -> None:
        try:
            await self._redis.setex(self._key(key), ttl_seconds, data)
        except (RedisError, OSError) as exc:
            raise CacheBackendError(f"redis setex failed: {type(exc).__name__}") from exc

    def _log_backend_error(self, action: str, error: CacheBackendError) -> None:
        logger.warning(
            "event_cache_backend_error",
            extra={
                "component": "redis_event_cache",
                "action": action,
                "result": "error",
                "error_type": type(error.__cause__).__name__,
                "correlation_id": get_correlation_id(),
            },
        )


__all__ = ["EVENT_CACHE_PREFIX", "RedisEventCache"]
