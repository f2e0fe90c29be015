"""Redis Connection Store - leitura do registro de conexão por loja.

Layout (gravado pela camada de OAuth/persistência):

    HSET meta_connection:{shop} pixel_id <id> access_token <token> \
        token_expires_at <ISO-8601 opcional>
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.domain.meta_connection import MetaConnection
from app.protocols.connection_store import ConnectionStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "meta_connection:"


def _decode(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _parse_expiry(raw: str) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("connection_expiry_unparsable")
        return None


class RedisConnectionStore(ConnectionStoreProtocol):
    """Store de conexões em hash Redis (somente leitura)."""

    def __init__(self, async_redis_client: AsyncRedis, key_prefix: str = DEFAULT_PREFIX) -> None:
        self._redis = async_redis_client
        self._prefix = key_prefix

    def _key(self, shop: str) -> str:
        return f"{self._prefix}{shop.lower()}"

    async def get_connection(self, shop: str) -> MetaConnection | None:
        try:
            raw = await self._redis.hgetall(self._key(shop))
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler conexão no Redis") from exc
        if not raw:
            return None

        fields = {_decode(k): _decode(v) for k, v in raw.items()}
        return MetaConnection(
            shop=shop.lower(),
            pixel_id=fields.get("pixel_id", ""),
            access_token=fields.get("access_token", ""),
            token_expires_at=_parse_expiry(fields.get("token_expires_at", "")),
        )
