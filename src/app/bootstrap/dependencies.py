"""Factories de stores, cliente CAPI e use case.

Centraliza a criação das implementações concretas a partir das
configurações de ambiente.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from api.connectors.meta_capi import create_capi_http_client
from app.bootstrap.clients import create_async_redis_client
from app.domain.meta_connection import MetaConnection
from app.infra.stores import (
    MemoryConnectionStore,
    MemoryDedupeStore,
    RedisConnectionStore,
    RedisDedupeStore,
)
from app.protocols.capi_client import CapiClientProtocol
from app.protocols.connection_store import ConnectionStoreProtocol
from app.protocols.dedupe import AsyncDedupeProtocol
from app.use_cases.conversions import TrackConversionUseCase
from config.settings import (
    get_base_settings,
    get_connection_store_settings,
    get_dedupe_settings,
    get_meta_capi_settings,
    get_shopify_settings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookRuntime:
    """Dependências do processamento de webhooks Shopify."""

    use_case: TrackConversionUseCase
    connection_store: ConnectionStoreProtocol
    dedupe: AsyncDedupeProtocol | None = None
    dedupe_ttl: int = 86400


# ──────────────────────────────────────────────────────────────────────────────
# Connection Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_connection_store() -> ConnectionStoreProtocol:
    """Cria store de conexões baseado na configuração.

    Lê CONNECTION_STORE_BACKEND:
    - "memory": MemoryConnectionStore, com seed opcional de
      SHOPIFY_DEV_SHOP + META_PIXEL_ID + META_ACCESS_TOKEN (dev only)
    - "redis": RedisConnectionStore (staging/production)
    """
    settings = get_connection_store_settings()

    if settings.backend == "redis":
        store = RedisConnectionStore(create_async_redis_client(), key_prefix=settings.key_prefix)
        logger.info("connection_store_created", extra={"backend": "redis"})
        return store

    if settings.backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryConnectionStore()
        seed = _dev_seed_connection()
        if seed is not None:
            store.add(seed)
        logger.info(
            "connection_store_created",
            extra={"backend": "memory", "seeded": seed is not None},
        )
        return store

    msg = f"CONNECTION_STORE_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def _dev_seed_connection() -> MetaConnection | None:
    shop = get_shopify_settings().dev_shop
    capi = get_meta_capi_settings()
    if not shop or not capi.pixel_id:
        return None
    return MetaConnection(shop=shop, pixel_id=capi.pixel_id, access_token=capi.access_token)


# ──────────────────────────────────────────────────────────────────────────────
# Dedupe Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_dedupe_store() -> AsyncDedupeProtocol | None:
    """Cria store de dedupe de entregas; None quando desligado."""
    settings = get_dedupe_settings()
    if not settings.enabled:
        logger.info("dedupe_store_disabled")
        return None

    if settings.backend == "redis":
        store: AsyncDedupeProtocol = RedisDedupeStore(create_async_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    if settings.backend == "memory":
        store = MemoryDedupeStore()
        logger.info("dedupe_store_created", extra={"backend": "memory"})
        return store

    msg = f"DEDUPE_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# CAPI / Use Case Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_capi_client() -> CapiClientProtocol:
    """Cria cliente HTTP da CAPI com as settings do ambiente."""
    return create_capi_http_client(get_meta_capi_settings())


def create_track_conversion_use_case(
    capi_client: CapiClientProtocol | None = None,
) -> TrackConversionUseCase:
    """Cria o use case de rastreamento."""
    return TrackConversionUseCase(
        capi_client or create_capi_client(),
        test_event_code=get_meta_capi_settings().test_event_code or None,
    )


def create_webhook_runtime() -> WebhookRuntime:
    """Monta todas as dependências do webhook Shopify."""
    return WebhookRuntime(
        use_case=create_track_conversion_use_case(),
        connection_store=create_connection_store(),
        dedupe=create_dedupe_store(),
        dedupe_ttl=get_dedupe_settings().ttl_seconds,
    )
