"""Processamento de webhook Shopify: conexão, dedupe, parse e pipeline.

Garante ao pipeline que a conexão, quando presente, tem pixel e token.
Erros de transporte chegam como TrackingResult(failed); qualquer outra
exceção sobe para a rota, que registra e confirma a entrega mesmo assim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.shopify_payloads import parse_trigger_payload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.protocols.connection_store import ConnectionStoreProtocol
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.use_cases.conversions import TrackConversionUseCase, TrackingResult

logger = logging.getLogger(__name__)

DEDUPE_KEY_PREFIX = "shopify_webhook:"


@dataclass(frozen=True)
class WebhookOutcome:
    """O que aconteceu com uma entrega.

    Attributes:
        handled: True se o pipeline foi invocado
        reason: Motivo quando não invocado (missing_shop, connection_missing, duplicate)
        result: Resultado do pipeline, quando invocado
    """

    handled: bool
    reason: str | None = None
    result: TrackingResult | None = None


async def process_shopify_webhook(
    *,
    topic: str,
    shop: str | None,
    payload: Mapping[str, Any],
    use_case: TrackConversionUseCase,
    connection_store: ConnectionStoreProtocol,
    webhook_id: str | None = None,
    dedupe: AsyncDedupeProtocol | None = None,
    dedupe_ttl: int = 86400,
) -> WebhookOutcome:
    """Processa uma entrega já autenticada.

    Sem PII em log: apenas topic, shop, webhook_id e o resultado.

    Args:
        topic: Tópico da rota (orders/create, checkouts/create, customers/create)
        shop: Domínio da loja (X-Shopify-Shop-Domain)
        payload: Corpo JSON do webhook
        use_case: TrackConversionUseCase injetado
        connection_store: Leitura da conexão Meta da loja
        webhook_id: X-Shopify-Webhook-Id (chave de dedupe)
        dedupe: Store de dedupe; None desliga a verificação
        dedupe_ttl: TTL em segundos das chaves de dedupe

    Raises:
        UnsupportedTopicError, MissingPayloadError:
            Payload que não corresponde ao tópico.
    """
    log_extra = {"topic": topic, "shop": shop, "webhook_id": webhook_id}

    if not shop:
        logger.warning("webhook_shop_missing", extra=log_extra)
        return WebhookOutcome(handled=False, reason="missing_shop")

    connection = await connection_store.get_connection(shop)
    if connection is None or not connection.is_configured:
        logger.info("webhook_connection_missing", extra=log_extra)
        return WebhookOutcome(handled=False, reason="connection_missing")

    if dedupe is not None and webhook_id:
        if await dedupe.seen(f"{DEDUPE_KEY_PREFIX}{webhook_id}", dedupe_ttl):
            logger.info("webhook_duplicate_ignored", extra=log_extra)
            return WebhookOutcome(handled=False, reason="duplicate")

    trigger = parse_trigger_payload(topic, payload)
    result = await use_case.execute(trigger, connection)

    logger.info(
        "webhook_processed",
        extra={
            **log_extra,
            "status": result.status.value,
            "event_name": result.event_name,
            "reason": result.reason,
            "fbtrace_id": result.fbtrace_id,
        },
    )
    return WebhookOutcome(handled=True, result=result)
