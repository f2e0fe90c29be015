"""Redis Dedupe Store - dedupe de entregas de webhook.

Usa SET NX EX (set if not exists) para operação atômica entre
instâncias concorrentes.

Contrato de Keys:
    As keys devem ser IDs opacos (ex: X-Shopify-Webhook-Id).
    NUNCA passar dados sensíveis (PII, emails) como key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

DEDUPE_PREFIX = "dedupe:webhook:"


def _mask(key: str) -> str:
    return key[:8] + "..." if len(key) > 8 else key


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando Redis assíncrono."""

    def __init__(self, async_redis_client: AsyncRedis) -> None:
        self._redis = async_redis_client

    def _key(self, key: str) -> str:
        return f"{DEDUPE_PREFIX}{key}"

    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca chave atomicamente.

        Returns:
            True se duplicado, False se novo.

        Raises:
            RedisConnectionError: Falha ao acessar Redis.
        """
        try:
            was_set = await self._redis.set(self._key(key), "1", nx=True, ex=ttl)
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc
        is_duplicate = not was_set
        if is_duplicate:
            logger.debug("dedupe_duplicate_detected", extra={"key": _mask(key)})
        return is_duplicate
