"""Filter que carimba service e correlation_id em cada record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Enriquece records sem descartar nenhum.

    O correlation_id vem do getter (ContextVar preenchida pela rota de
    webhook a partir de X-Correlation-Id ou X-Shopify-Webhook-Id). Um
    correlation_id passado em `extra` tem precedência.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id()
        record.service = self._service_name
        return True
