"""Endpoints de webhook da Shopify.

Endpoints:
- POST /webhooks/orders/create: Purchase
- POST /webhooks/checkouts/create: InitiateCheckout
- POST /webhooks/customers/create: CompleteRegistration

Segurança:
- Validação HMAC obrigatória (exceto em dev sem secret)

Isolamento de falhas:
- O evento é enviado à CAPI antes da resposta (uma chamada, timeout limitado)
- Qualquer falha do pipeline é registrada e a entrega é confirmada com 200
- Apenas HMAC inválido (401) e JSON inválido (400) são recusados
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.shopify.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    extract_webhook_headers,
    parse_webhook_request,
)
from app.coordinators.shopify import process_shopify_webhook
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.settings import get_shopify_settings

if TYPE_CHECKING:
    from app.bootstrap.dependencies import WebhookRuntime

logger = logging.getLogger(__name__)

router = APIRouter()

TOPIC_ORDERS_CREATE = "orders/create"
TOPIC_CHECKOUTS_CREATE = "checkouts/create"
TOPIC_CUSTOMERS_CREATE = "customers/create"


def _get_runtime() -> WebhookRuntime:
    """Obtém dependências do webhook (lazy, singleton no bootstrap)."""
    from app.bootstrap import get_webhook_runtime

    return get_webhook_runtime()


async def _process_webhook_safe(
    *,
    topic: str,
    payload: dict[str, Any],
    shop: str | None,
    webhook_id: str | None,
) -> None:
    """Executa o pipeline sem propagar exceções para a resposta."""
    try:
        runtime = _get_runtime()
        await process_shopify_webhook(
            topic=topic,
            shop=shop,
            payload=payload,
            use_case=runtime.use_case,
            connection_store=runtime.connection_store,
            webhook_id=webhook_id,
            dedupe=runtime.dedupe,
            dedupe_ttl=runtime.dedupe_ttl,
        )
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={
                "channel": "shopify",
                "topic": topic,
                "shop": shop,
                "webhook_id": webhook_id,
            },
        )


async def _receive_webhook(request: Request, topic: str) -> Response | dict[str, Any]:
    headers = dict(request.headers)
    token = set_correlation_id(correlation_id_from_headers(headers))

    try:
        settings = get_shopify_settings()
        raw_body = await request.body()
        webhook_headers = extract_webhook_headers(headers)

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=headers,
                secret=settings.api_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "shopify",
                    "topic": topic,
                    "shop": webhook_headers.shop_domain,
                    "error": str(exc),
                },
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "shopify",
                    "topic": topic,
                    "shop": webhook_headers.shop_domain,
                    "error": str(exc),
                },
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "shopify",
                "topic": topic,
                "header_topic": webhook_headers.topic,
                "shop": webhook_headers.shop_domain,
                "webhook_id": webhook_headers.webhook_id,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        await _process_webhook_safe(
            topic=topic,
            payload=payload,
            shop=webhook_headers.shop_domain,
            webhook_id=webhook_headers.webhook_id,
        )

        return {
            "status": "received",
            "correlation_id": get_correlation_id(),
        }

    finally:
        reset_correlation_id(token)


@router.post("/orders/create", response_model=None)
async def receive_order_created(request: Request) -> Response | dict[str, Any]:
    """orders/create → Purchase."""
    return await _receive_webhook(request, TOPIC_ORDERS_CREATE)


@router.post("/checkouts/create", response_model=None)
async def receive_checkout_created(request: Request) -> Response | dict[str, Any]:
    """checkouts/create → InitiateCheckout."""
    return await _receive_webhook(request, TOPIC_CHECKOUTS_CREATE)


@router.post("/customers/create", response_model=None)
async def receive_customer_created(request: Request) -> Response | dict[str, Any]:
    """customers/create → CompleteRegistration."""
    return await _receive_webhook(request, TOPIC_CUSTOMERS_CREATE)
