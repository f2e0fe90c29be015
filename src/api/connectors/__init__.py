"""Connectors - adapters de borda para APIs externas.

Estrutura:
- shopify/: entrada de webhooks (HMAC, headers, JSON)
- meta_capi/: envio de eventos para a Conversions API da Meta
- http_base.py: cliente httpx de uma tentativa compartilhado

Cada connector isola as falhas da sua integração.
"""

__all__: list[str] = []
