"""Conector da Conversions API (CAPI) da Meta.

Único ponto de IO com a plataforma de anúncios:
- Cliente HTTP de envio de eventos
- Modelo de resposta
- Erros e parsing de erros da Graph API
"""

from .http_client import CapiHttpClient, create_capi_http_client
from .meta_errors import CapiTransportError, MetaApiError, parse_meta_error
from .models import CapiResponse

__all__ = [
    "CapiHttpClient",
    "CapiResponse",
    "CapiTransportError",
    "MetaApiError",
    "create_capi_http_client",
    "parse_meta_error",
]
