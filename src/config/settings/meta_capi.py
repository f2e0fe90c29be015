"""Settings da Conversions API (CAPI) da Meta.

Configurações do envio server-side de eventos de conversão via Graph API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v18.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"


@dataclass(frozen=True)
class MetaCapiSettings:
    """Configurações da Conversions API.

    Attributes:
        api_version: Versão da Graph API (ex: v18.0)
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout da chamada única de envio
        test_event_code: Código de teste (Events Manager > Test Events)
        pixel_id: Pixel da loja de desenvolvimento (seed do store em memória)
        access_token: Token da loja de desenvolvimento (seed do store em memória)
    """

    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    request_timeout_seconds: float = 10.0

    test_event_code: str = ""

    # Credenciais de desenvolvimento (carregadas de env)
    pixel_id: str = ""
    access_token: str = ""

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def get_events_endpoint(self, pixel_id: str) -> str:
        """Retorna URL de ingestão de eventos do pixel.

        Returns:
            URL completa no formato: https://graph.facebook.com/v18.0/{pixel}/events

        Raises:
            ValueError: Se pixel_id vazio.
        """
        if not pixel_id:
            raise ValueError("pixel_id é obrigatório")
        return f"{self.api_endpoint}/{pixel_id}/events"

    def validate(self) -> list[str]:
        """Valida configurações mínimas da CAPI.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_version.startswith("v"):
            errors.append("META_GRAPH_API_VERSION deve começar com 'v' (ex: v18.0)")

        if not self.api_base_url.startswith("https://"):
            errors.append("META_GRAPH_API_BASE_URL deve usar https")

        if self.request_timeout_seconds <= 0:
            errors.append("META_CAPI_TIMEOUT_SECONDS deve ser > 0")

        if bool(self.pixel_id) != bool(self.access_token):
            errors.append("META_PIXEL_ID e META_ACCESS_TOKEN devem ser definidos juntos")

        return errors


def _load_from_env() -> MetaCapiSettings:
    """Carrega MetaCapiSettings a partir de variáveis de ambiente."""
    return MetaCapiSettings(
        api_version=os.getenv("META_GRAPH_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("META_GRAPH_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("META_CAPI_TIMEOUT_SECONDS", "10")),
        test_event_code=os.getenv("META_CAPI_TEST_EVENT_CODE", ""),
        pixel_id=os.getenv("META_PIXEL_ID", ""),
        access_token=os.getenv("META_ACCESS_TOKEN", ""),
    )


@lru_cache(maxsize=1)
def get_meta_capi_settings() -> MetaCapiSettings:
    """Retorna instância cacheada de MetaCapiSettings."""
    return _load_from_env()
