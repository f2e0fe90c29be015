"""Helpers de logging para a CAPI (sem PII nem tokens)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import MetaApiError

logger = logging.getLogger(__name__)


def log_meta_error(
    meta_error: MetaApiError,
    pixel_id: str,
    status_code: int,
) -> None:
    """Loga erro da Meta sem expor dados sensíveis."""
    logger.warning(
        "capi_request_rejected",
        extra={
            "pixel_id": pixel_id,
            "status_code": status_code,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "error_subcode": meta_error.error_subcode,
            "fbtrace_id": meta_error.fbtrace_id,
        },
    )


def log_success(
    pixel_id: str,
    events_received: int,
    fbtrace_id: str,
) -> None:
    logger.info(
        "capi_events_sent",
        extra={
            "pixel_id": pixel_id,
            "events_received": events_received,
            "fbtrace_id": fbtrace_id,
        },
    )
