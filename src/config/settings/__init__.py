"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    ConnectionStoreBackend,
    ConnectionStoreSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_connection_store_settings,
    get_dedupe_settings,
)
from config.settings.meta_capi import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    MetaCapiSettings,
    get_meta_capi_settings,
)
from config.settings.shopify import ShopifySettings, get_shopify_settings

__all__ = [
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "BaseSettings",
    "ConnectionStoreBackend",
    "ConnectionStoreSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    "MetaCapiSettings",
    "ShopifySettings",
    "get_base_settings",
    "get_connection_store_settings",
    "get_dedupe_settings",
    "get_meta_capi_settings",
    "get_shopify_settings",
]
