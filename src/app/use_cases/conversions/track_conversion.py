"""Use case de rastreamento: gatilho -> ConversionEvent -> CAPI.

Uma entrega de webhook gera no máximo um evento, enviado no máximo uma vez.
O resultado é sempre tipado (sent, skipped, failed); o adapter decide o
que responder para a origem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from app.domain.errors import ConversionDeliveryError
from app.domain.shopify_payloads import CheckoutPayload, CustomerPayload, OrderPayload
from app.observability import record_conversion
from app.services.event_builder import (
    build_complete_registration,
    build_initiate_checkout,
    build_purchase,
)

if TYPE_CHECKING:
    from app.domain.conversion_event import ConversionEvent
    from app.domain.meta_connection import MetaConnection
    from app.domain.shopify_payloads import TriggerPayload
    from app.protocols.capi_client import CapiClientProtocol
    from app.services.event_builder import ClientData


class TrackingStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class TrackingResult:
    """Resultado de uma tentativa de rastreamento."""

    status: TrackingStatus
    event_name: str | None = None
    reason: str | None = None
    dedup_key: str | None = None
    events_received: int = 0
    fbtrace_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is TrackingStatus.SENT


class TrackConversionUseCase:
    """Constrói o evento do gatilho e entrega à CAPI.

    Args:
        capi_client: Transporte de eventos (CapiClientProtocol)
        test_event_code: Código de teste aplicado a todos os envios
        logger: Logger opcional (padrão: logger do módulo)
    """

    def __init__(
        self,
        capi_client: CapiClientProtocol,
        *,
        test_event_code: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._capi_client = capi_client
        self._test_event_code = test_event_code or None
        self._logger = logger or logging.getLogger(__name__)

    async def execute(
        self,
        payload: TriggerPayload,
        connection: MetaConnection | None,
        *,
        dedup_key: str | None = None,
        client: ClientData | None = None,
    ) -> TrackingResult:
        """Rastreia um gatilho Shopify já validado.

        Sem conexão configurada não há construção nem envio.

        Raises:
            MissingPayloadError: Gatilho sem dados para o builder.
        """
        skip_reason = _skip_reason(connection)
        if skip_reason is not None:
            self._logger.info(
                "conversion_skipped",
                extra={"trigger": payload.kind, "reason": skip_reason},
            )
            record_conversion(payload.kind, TrackingStatus.SKIPPED.value, skip_reason)
            return TrackingResult(status=TrackingStatus.SKIPPED, reason=skip_reason)

        event = self._build_event(payload, dedup_key=dedup_key, client=client)
        return await self.send(event, connection)

    async def send(
        self,
        event: ConversionEvent,
        connection: MetaConnection | None,
    ) -> TrackingResult:
        """Entrega um evento já construído (um evento, uma chamada)."""
        event_name = event.name.value
        skip_reason = _skip_reason(connection)
        if skip_reason is not None or connection is None:
            reason = skip_reason or "not_configured"
            record_conversion(event_name, TrackingStatus.SKIPPED.value, reason)
            return TrackingResult(
                status=TrackingStatus.SKIPPED,
                event_name=event_name,
                reason=reason,
                dedup_key=event.dedup_key,
            )

        try:
            response = await self._capi_client.send_events(
                connection.pixel_id,
                connection.access_token,
                [event],
                test_event_code=self._test_event_code,
            )
        except ConversionDeliveryError as exc:
            self._logger.warning(
                "conversion_send_failed",
                extra={
                    "event_name": event_name,
                    "event_id": event.dedup_key,
                    "pixel_id": connection.pixel_id,
                    "status_code": exc.status_code,
                    "fbtrace_id": exc.fbtrace_id,
                    "error": str(exc),
                },
            )
            record_conversion(event_name, TrackingStatus.FAILED.value, "transport_error")
            return TrackingResult(
                status=TrackingStatus.FAILED,
                event_name=event_name,
                reason=str(exc),
                dedup_key=event.dedup_key,
                fbtrace_id=exc.fbtrace_id,
            )

        self._logger.info(
            "conversion_sent",
            extra={
                "event_name": event_name,
                "event_id": event.dedup_key,
                "pixel_id": connection.pixel_id,
                "events_received": response.events_received,
                "fbtrace_id": response.fbtrace_id,
            },
        )
        record_conversion(event_name, TrackingStatus.SENT.value)
        return TrackingResult(
            status=TrackingStatus.SENT,
            event_name=event_name,
            dedup_key=event.dedup_key,
            events_received=response.events_received,
            fbtrace_id=response.fbtrace_id or None,
        )

    @staticmethod
    def _build_event(
        payload: TriggerPayload,
        *,
        dedup_key: str | None,
        client: ClientData | None,
    ) -> ConversionEvent:
        if isinstance(payload, OrderPayload):
            return build_purchase(payload, dedup_key=dedup_key, client=client)
        if isinstance(payload, CheckoutPayload):
            return build_initiate_checkout(payload, dedup_key=dedup_key, client=client)
        if isinstance(payload, CustomerPayload):
            return build_complete_registration(payload, dedup_key=dedup_key, client=client)
        raise TypeError(f"unsupported trigger payload: {type(payload).__name__}")


def _skip_reason(connection: MetaConnection | None) -> str | None:
    if connection is None or not connection.is_configured:
        return "not_configured"
    if connection.is_expired():
        return "credential_expired"
    return None
