"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.connection_store import (
    ConnectionStoreBackend,
    ConnectionStoreSettings,
    get_connection_store_settings,
)
from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.dedupe import (
    DedupeBackend,
    DedupeSettings,
    get_dedupe_settings,
)

__all__ = [
    "BaseSettings",
    "ConnectionStoreBackend",
    "ConnectionStoreSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    "get_base_settings",
    "get_connection_store_settings",
    "get_dedupe_settings",
]
