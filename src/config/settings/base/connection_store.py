"""Settings do store de conexões Meta.

O registro de conexão (pixel + token por loja) é gravado pela camada de
OAuth/persistência; este serviço apenas lê.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

ConnectionStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class ConnectionStoreSettings:
    """Configurações do store de conexões.

    Attributes:
        backend: Backend de leitura (memory|redis)
        key_prefix: Prefixo das chaves Redis (hash por loja)
    """

    backend: ConnectionStoreBackend = "memory"
    key_prefix: str = "meta_connection:"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do store de conexões."""
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"CONNECTION_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("CONNECTION_STORE_BACKEND=memory proibido em staging/production")

        if self.backend == "redis" and not base.redis_url:
            errors.append("CONNECTION_STORE_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _load_connection_store_from_env() -> ConnectionStoreSettings:
    """Carrega ConnectionStoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("CONNECTION_STORE_BACKEND", "memory").lower()
    backend: ConnectionStoreBackend = (
        backend_str if backend_str in ("memory", "redis") else "memory"
    )
    return ConnectionStoreSettings(
        backend=backend,
        key_prefix=os.getenv("CONNECTION_STORE_KEY_PREFIX", "meta_connection:"),
    )


@lru_cache(maxsize=1)
def get_connection_store_settings() -> ConnectionStoreSettings:
    """Retorna instância cacheada de ConnectionStoreSettings."""
    return _load_connection_store_from_env()
