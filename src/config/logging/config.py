"""Setup do logging JSON do serviço.

Um único handler em stderr; cada record recebe service e correlation_id
da entrega de webhook em curso.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "capi_relay"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Instala o handler JSON no root logger (chamado pelo bootstrap).

    Raises:
        ValueError: Nível fora de VALID_LOG_LEVELS.
    """
    level_name = level.upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL inválido: {level}")

    handler = logging.StreamHandler()
    handler.setLevel(level_name)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(logger: logging.Logger, component: str, reason: str | None = None) -> None:
    """Registra que um campo malformado foi trocado por valor padrão.

    Args:
        logger: Logger do módulo chamador
        component: Campo afetado (ex: "event_builder.money")
        reason: Código curto do motivo (ex: "unparsable_money"), nunca o valor
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    logger.info("field_fallback_applied", extra=extra)
