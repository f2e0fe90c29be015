"""Stores - implementações concretas de leitura/dedupe.

Módulos disponíveis:
    - redis_connection_store: Conexões Meta por loja em Redis
    - redis_dedupe_store: Dedupe de entregas de webhook em Redis
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryConnectionStore, MemoryDedupeStore
from app.infra.stores.redis_connection_store import RedisConnectionStore
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    "MemoryConnectionStore",
    "MemoryDedupeStore",
    "RedisConnectionStore",
    "RedisDedupeStore",
]
