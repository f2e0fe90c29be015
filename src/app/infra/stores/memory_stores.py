"""Stores em memória - apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from app.protocols.connection_store import ConnectionStoreProtocol
from app.protocols.dedupe import AsyncDedupeProtocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.meta_connection import MetaConnection


class MemoryConnectionStore(ConnectionStoreProtocol):
    """Store de conexões em memória - apenas para dev/test."""

    def __init__(self, connections: Iterable[MetaConnection] = ()) -> None:
        self._store: dict[str, MetaConnection] = {
            conn.shop.lower(): conn for conn in connections
        }

    def add(self, connection: MetaConnection) -> None:
        """Registra conexão (seed de dev/test)."""
        self._store[connection.shop.lower()] = connection

    async def get_connection(self, shop: str) -> MetaConnection | None:
        return self._store.get(shop.lower())


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória - apenas para dev/test."""

    def __init__(self) -> None:
        self._store: dict[str, float] = {}  # key -> expires_at

    def _cleanup_expired(self) -> None:
        now = time.time()
        expired = [k for k, v in self._store.items() if v < now]
        for k in expired:
            del self._store[k]

    async def seen(self, key: str, ttl: int) -> bool:
        self._cleanup_expired()
        now = time.time()
        if key in self._store and self._store[key] > now:
            return True
        self._store[key] = now + ttl
        return False
