"""Bootstrap da aplicação - inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_webhook_runtime

    # Na inicialização do serviço
    initialize_app()

    # Dependências do webhook
    runtime = get_webhook_runtime()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_connection_store_settings,
    get_dedupe_settings,
    get_meta_capi_settings,
    get_shopify_settings,
)

if TYPE_CHECKING:
    from app.bootstrap.dependencies import WebhookRuntime

# Nome do serviço para logs e métricas
SERVICE_NAME = "capi_relay"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação.

    Deve ser chamada uma vez no início do serviço. Configura logging
    estruturado JSON com correlation_id.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"meta_capi: {error}" for error in get_meta_capi_settings().validate())
    errors.extend(
        f"shopify: {error}" for error in get_shopify_settings().validate(strict=strict_mode)
    )
    errors.extend(
        f"connection_store: {error}" for error in get_connection_store_settings().validate(base)
    )
    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate(base))

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


@lru_cache(maxsize=1)
def get_webhook_runtime() -> WebhookRuntime:
    """Obtém as dependências do webhook (singleton)."""
    from app.bootstrap.dependencies import create_webhook_runtime

    return create_webhook_runtime()
