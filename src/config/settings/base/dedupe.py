"""Settings de dedupe de entregas de webhook.

A Shopify entrega webhooks pelo menos uma vez. Com dedupe ligado, entregas
repetidas (mesmo X-Shopify-Webhook-Id) são reconhecidas sem reenviar o
evento de conversão. Desligado por padrão: a chave de dedup enviada à Meta
é quem colapsa duplicatas no lado da plataforma de anúncios.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

DedupeBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe de entregas.

    Attributes:
        enabled: Liga a verificação de X-Shopify-Webhook-Id
        backend: Backend para dedupe (memory|redis)
        ttl_seconds: TTL para entradas de dedupe
    """

    enabled: bool = False
    backend: DedupeBackend = "memory"
    ttl_seconds: int = 86400  # 24h

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de dedupe.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        if not self.enabled:
            return errors

        if self.backend not in ("memory", "redis"):
            errors.append(f"DEDUPE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "DEDUPE_BACKEND=memory proibido em staging/production. Use Redis."
            )

        if self.backend == "redis" and not base.redis_url:
            errors.append("DEDUPE_BACKEND=redis requer REDIS_URL configurado")

        if self.ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    backend_str = os.getenv("DEDUPE_BACKEND", "memory").lower()
    backend: DedupeBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return DedupeSettings(
        enabled=os.getenv("WEBHOOK_DEDUPE_ENABLED", "").lower() in ("true", "1", "yes"),
        backend=backend,
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "86400")),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
