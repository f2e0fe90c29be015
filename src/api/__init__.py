"""API - camada de borda.

Responsabilidades:
- Receber webhooks Shopify e validar HMAC e JSON
- Entregar eventos à Conversions API da Meta
- Expor health/readiness

Subpastas:
- connectors/: adapters HTTP por integração
- routes/: endpoints HTTP (webhooks, health)

NÃO PODE conter: construção de eventos, hashing de PII, orquestração de use cases.
"""
