"""Erros e helpers de parsing para a Conversions API da Meta."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from api.connectors.http_base import HttpError
from app.domain.errors import ConversionDeliveryError


@dataclass(frozen=True)
class MetaApiError:
    """Erro estruturado retornado pela Graph API."""

    error_type: str
    error_code: int
    error_message: str
    error_subcode: int | None = None
    fbtrace_id: str | None = None


class CapiTransportError(HttpError, ConversionDeliveryError):
    """Falha no envio de eventos para a CAPI.

    Carrega o detalhe do erro da Meta quando disponível.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        is_timeout: bool = False,
        meta_error: MetaApiError | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, is_timeout=is_timeout)
        self.meta_error = meta_error

    @property
    def fbtrace_id(self) -> str | None:
        return self.meta_error.fbtrace_id if self.meta_error else None


def parse_meta_error(response_data: Any) -> MetaApiError | None:
    """Extrai o objeto `error` do response da Graph API.

    Returns:
        MetaApiError se houver erro, None se sucesso.
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    code = error_obj.get("code", 0)
    subcode = error_obj.get("error_subcode")
    return MetaApiError(
        error_type=str(error_obj.get("type", "unknown")),
        error_code=code if isinstance(code, int) else 0,
        error_message=str(error_obj.get("error_user_msg") or error_obj.get("message") or "unknown error"),
        error_subcode=subcode if isinstance(subcode, int) else None,
        fbtrace_id=error_obj.get("fbtrace_id") or response_data.get("fbtrace_id"),
    )
