"""Protocolo de dedupe de entregas de webhook."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato mínimo assíncrono para stores de deduplicação.

    Método canônico:
    - seen(key: str, ttl: int) -> bool
      Verifica e marca de forma atômica. True se a chave já foi vista
      (duplicado); False se foi marcada agora (nova).
    """

    @abstractmethod
    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca a chave de forma atômica.

        Args:
            key: Chave opaca (ex: X-Shopify-Webhook-Id). Nunca PII.
            ttl: TTL em segundos
        """
