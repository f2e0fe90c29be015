"""Protocolo do transporte de eventos para a CAPI.

Evita dependência direta da camada api no caso de uso.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from api.connectors.meta_capi.models import CapiResponse
    from app.domain.conversion_event import ConversionEvent


class CapiClientProtocol(Protocol):
    """Contrato mínimo do cliente CAPI."""

    async def send_events(
        self,
        pixel_id: str,
        access_token: str,
        events: Sequence[ConversionEvent],
        test_event_code: str | None = None,
    ) -> CapiResponse: ...
