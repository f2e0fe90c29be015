"""Parse e validação inicial do webhook Shopify (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .signature import SignatureResult, _get_header, verify_shopify_hmac

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


@dataclass(frozen=True)
class ShopifyWebhookHeaders:
    """Headers de roteamento enviados pela Shopify."""

    topic: str | None = None
    shop_domain: str | None = None
    webhook_id: str | None = None


def extract_webhook_headers(headers: Mapping[str, str]) -> ShopifyWebhookHeaders:
    return ShopifyWebhookHeaders(
        topic=_get_header(headers, "x-shopify-topic"),
        shop_domain=_normalize_shop(_get_header(headers, "x-shopify-shop-domain")),
        webhook_id=_get_header(headers, "x-shopify-webhook-id"),
    )


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> tuple[dict[str, object], SignatureResult]:
    """Valida HMAC e parseia JSON do webhook.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: SHOPIFY_API_SECRET

    Raises:
        InvalidSignatureError: Se o HMAC for inválido
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_shopify_hmac(raw_body, headers, secret)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result


def _normalize_shop(shop: str | None) -> str | None:
    if shop is None:
        return None
    shop = shop.strip().lower()
    return shop or None
