"""Observabilidade - correlation_id e métricas em logs estruturados."""

from app.observability.correlation import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_conversion, record_latency

__all__ = [
    "correlation_id_from_headers",
    "get_correlation_id",
    "record_conversion",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
