"""Protocolos e contratos do core da aplicação."""

from .capi_client import CapiClientProtocol
from .connection_store import ConnectionStoreProtocol
from .dedupe import AsyncDedupeProtocol

__all__ = [
    "AsyncDedupeProtocol",
    "CapiClientProtocol",
    "ConnectionStoreProtocol",
]
