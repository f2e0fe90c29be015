"""Protocolo de leitura do registro de conexão Meta por loja.

Escrita (OAuth, seleção de pixel, remoção) pertence a outra camada.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.meta_connection import MetaConnection


class ConnectionStoreProtocol(ABC):
    """Contrato assíncrono, somente leitura."""

    @abstractmethod
    async def get_connection(self, shop: str) -> MetaConnection | None:
        """Retorna a conexão da loja ou None se não houver."""
