"""Gerenciamento de correlation_id por entrega de webhook.

O correlation_id é injetado em todos os logs do processamento de uma
entrega. Usa ContextVar para ser async-safe entre entregas concorrentes.

Uso:
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Ordem de preferência dos headers de rastreamento
_CORRELATION_HEADERS = ("x-correlation-id", "x-shopify-webhook-id")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or str(uuid.uuid4())
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Primeiro header de rastreamento presente (chaves em minúsculas)."""
    for name in _CORRELATION_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None
