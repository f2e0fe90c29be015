"""Registro de métricas via structured logging.

As métricas são logs estruturados agregados depois pelo backend de logs
(Cloud Logging, BigQuery, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Conversão: contador de resultados do pipeline por evento e status
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "capi")
        operation: Nome da operação (ex: "send_events")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação; o filter de logging preenche se None
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_conversion(
    event_name: str,
    status: str,
    reason: str | None = None,
) -> None:
    """Conta um resultado do pipeline (sent, skipped, failed)."""
    logger.info(
        "metric_conversion",
        extra={
            "metric_type": "conversion",
            "event_name": event_name,
            "status": status,
            "reason": reason,
        },
    )
