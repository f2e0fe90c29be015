"""Conector Shopify (entrada de webhooks)."""
