"""Settings específicas da Shopify (origem dos webhooks)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class ShopifySettings:
    """Configurações do canal Shopify.

    Attributes:
        api_secret: Secret do app, usado na validação HMAC dos webhooks
        dev_shop: Domínio da loja usada no seed do store em memória
    """

    api_secret: str = ""
    dev_shop: str = ""

    def validate(self, *, strict: bool) -> list[str]:
        """Valida configurações da Shopify.

        Args:
            strict: True em staging/production (secret obrigatório).
        """
        errors: list[str] = []
        if strict and not self.api_secret:
            errors.append("SHOPIFY_API_SECRET não configurado")
        return errors


def _load_from_env() -> ShopifySettings:
    """Carrega ShopifySettings a partir de variáveis de ambiente."""
    return ShopifySettings(
        api_secret=os.getenv("SHOPIFY_API_SECRET", ""),
        dev_shop=os.getenv("SHOPIFY_DEV_SHOP", "").lower(),
    )


@lru_cache(maxsize=1)
def get_shopify_settings() -> ShopifySettings:
    """Retorna instância cacheada de ShopifySettings."""
    return _load_from_env()
