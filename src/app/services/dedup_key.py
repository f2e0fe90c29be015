"""Chave de deduplicação (event_id) dos eventos de conversão.

Formato: {plataforma}_{entidade}_{id}_{sufixo}_{timestamp_ms}

O timestamp de construção separa eventos distintos da mesma entidade
(checkout e depois compra no mesmo pedido). Não protege contra reentrega
do mesmo webhook no mesmo milissegundo; quem precisa de dedup exato de
retry deve passar uma chave própria (override) ao construtor.
"""

from __future__ import annotations

import secrets
import time
from enum import Enum

from app.domain.conversion_event import EventName

PLATFORM_PREFIX = "shopify"


class DedupEntity(str, Enum):
    """Tipo da entidade de origem."""

    ORDER = "order"
    CHECKOUT = "checkout"
    CUSTOMER = "customer"
    PRODUCT = "product"
    PAGE = "page"


EVENT_SUFFIXES: dict[EventName, str] = {
    EventName.PURCHASE: "purchase",
    EventName.INITIATE_CHECKOUT: "initiate_checkout",
    EventName.COMPLETE_REGISTRATION: "signup",
    EventName.ADD_TO_CART: "addtocart",
    EventName.VIEW_CONTENT: "viewcontent",
    EventName.PAGE_VIEW: "pageview",
}


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def make_dedup_key(
    entity: DedupEntity,
    entity_id: object,
    event_name: EventName,
    *,
    timestamp_ms: int | None = None,
    platform: str = PLATFORM_PREFIX,
) -> str:
    """Monta a chave de dedup para uma ocorrência de um tipo de evento.

    Função pura dado `timestamp_ms`; sem ele usa o relógio atual.

    Args:
        entity: Tipo da entidade de origem
        entity_id: Id da entidade (convertido para string; vazio vira "unknown")
        event_name: Tipo do evento
        timestamp_ms: Momento da construção em milissegundos
        platform: Prefixo da plataforma de origem
    """
    ts = now_ms() if timestamp_ms is None else timestamp_ms
    ident = str(entity_id) if entity_id not in (None, "") else "unknown"
    return f"{platform}_{entity.value}_{ident}_{EVENT_SUFFIXES[event_name]}_{ts}"


def make_page_view_key(*, timestamp_ms: int | None = None, platform: str = PLATFORM_PREFIX) -> str:
    """Chave para PageView, que não tem entidade: id aleatório curto."""
    return make_dedup_key(
        DedupEntity.PAGE,
        secrets.token_hex(4),
        EventName.PAGE_VIEW,
        timestamp_ms=timestamp_ms,
        platform=platform,
    )
