"""Cliente HTTP da Conversions API (CAPI) da Meta.

Envia um lote de ConversionEvent em uma única chamada para
POST {graph}/{version}/{pixel_id}/events com corpo:

    {"data": [...], "access_token": "...", "test_event_code": "..."}

Comportamento:
- Uma tentativa, timeout limitado (padrão 10s), sem retry
- Resposta não-2xx ou com `error` vira CapiTransportError com detalhe da Meta
- Logging estruturado sem tokens nem PII (apenas pixel_id e fbtrace_id)
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.meta_capi.meta_errors import CapiTransportError, parse_meta_error
from api.connectors.meta_capi.meta_logging import log_meta_error, log_success
from api.connectors.meta_capi.models import CapiResponse
from app.domain.conversion_event import ConversionEvent, EventName, UserIdentity
from app.observability import record_latency
from app.services.dedup_key import DedupEntity, make_dedup_key, now_ms
from app.services.pii import hash_pii

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from config.settings import MetaCapiSettings

logger: logging.Logger = logging.getLogger(__name__)

_TEST_PROBE_EMAIL = "test@example.com"


class CapiHttpClient(HttpClient):
    """Transporte de eventos de conversão para a CAPI.

    Args:
        settings: MetaCapiSettings (endpoint, versão, timeout, test code)
        transport: Transport httpx opcional (testes)
    """

    def __init__(
        self,
        settings: MetaCapiSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                default_headers={"Content-Type": "application/json"},
            ),
            transport=transport,
        )
        self._settings = settings

    async def send_events(
        self,
        pixel_id: str,
        access_token: str,
        events: Sequence[ConversionEvent],
        test_event_code: str | None = None,
    ) -> CapiResponse:
        """Envia o lote de eventos em uma chamada.

        Args:
            pixel_id: Identificador de destino (pixel/dataset)
            access_token: Credencial da CAPI (vai no corpo, nunca em log)
            events: Lote ordenado e não vazio
            test_event_code: Código de teste; usa o das settings se None

        Returns:
            CapiResponse com events_received, messages e fbtrace_id.

        Raises:
            ValueError: Lote vazio ou credencial ausente.
            CapiTransportError: Rejeição, timeout ou resposta inválida.
        """
        if not events:
            raise ValueError("events must not be empty")
        if not access_token or not access_token.strip():
            raise ValueError("access_token é obrigatório para envio à CAPI")

        url = self._settings.get_events_endpoint(pixel_id)
        body = self._build_body(access_token, events, test_event_code)

        started = time.perf_counter()
        try:
            response = await self.post(url, json=body)
        except HttpError as exc:
            raise CapiTransportError(
                f"CAPI request failed: {exc}",
                is_timeout=exc.is_timeout,
            ) from exc
        finally:
            record_latency("capi", "send_events", (time.perf_counter() - started) * 1000)

        return self._process_response(response, pixel_id)

    def _build_body(
        self,
        access_token: str,
        events: Sequence[ConversionEvent],
        test_event_code: str | None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "data": [event.to_capi_payload() for event in events],
            "access_token": access_token,
        }
        code = test_event_code if test_event_code is not None else self._settings.test_event_code
        if code:
            body["test_event_code"] = code
        return body

    def _process_response(self, response: httpx.Response, pixel_id: str) -> CapiResponse:
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.warning(
                "capi_response_invalid_json",
                extra={"pixel_id": pixel_id, "status_code": response.status_code},
            )
            raise CapiTransportError(
                f"CAPI request failed: invalid JSON (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc

        meta_error = parse_meta_error(response_data)
        if meta_error is not None or not response.is_success:
            if meta_error is not None:
                log_meta_error(meta_error, pixel_id, response.status_code)
            detail = meta_error.error_message if meta_error else f"HTTP {response.status_code}"
            raise CapiTransportError(
                f"CAPI request failed: {detail}",
                status_code=response.status_code,
                meta_error=meta_error,
            )

        try:
            capi_response = CapiResponse.model_validate(response_data)
        except ValidationError as exc:
            raise CapiTransportError(
                "CAPI request failed: unexpected response shape",
                status_code=response.status_code,
            ) from exc

        log_success(pixel_id, capi_response.events_received, capi_response.fbtrace_id)
        return capi_response

    async def test_connection(self, pixel_id: str, access_token: str) -> bool:
        """Envia um PageView de teste; True se a Meta recebeu o evento."""
        probe = ConversionEvent(
            name=EventName.PAGE_VIEW,
            event_time=now_ms() // 1000,
            identity=UserIdentity(email=hash_pii(_TEST_PROBE_EMAIL)),
            dedup_key=make_dedup_key(DedupEntity.PAGE, "connection_test", EventName.PAGE_VIEW),
        )
        try:
            response = await self.send_events(pixel_id, access_token, [probe])
        except (CapiTransportError, ValueError) as exc:
            logger.warning(
                "capi_connection_test_failed",
                extra={"pixel_id": pixel_id, "error": str(exc)},
            )
            return False
        return response.events_received > 0


def create_capi_http_client(
    settings: MetaCapiSettings | None = None,
) -> CapiHttpClient:
    """Factory para criar cliente CAPI com config padrão.

    Args:
        settings: MetaCapiSettings opcional. Se None, carrega do ambiente.
    """
    from config.settings import get_meta_capi_settings

    return CapiHttpClient(settings or get_meta_capi_settings())
