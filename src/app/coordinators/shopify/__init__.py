"""Coordenação de webhooks Shopify."""

from .webhook_handler import WebhookOutcome, process_shopify_webhook

__all__ = ["WebhookOutcome", "process_shopify_webhook"]
