"""Webhook Shopify: HMAC, headers e parsing seguro."""

from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    ShopifyWebhookHeaders,
    WebhookRequestError,
    extract_webhook_headers,
    parse_webhook_request,
)
from .signature import SignatureResult, compute_shopify_hmac, verify_shopify_hmac

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "ShopifyWebhookHeaders",
    "SignatureResult",
    "WebhookRequestError",
    "compute_shopify_hmac",
    "extract_webhook_headers",
    "parse_webhook_request",
    "verify_shopify_hmac",
]
