"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, build_gateway_components

    # Na inicialização do serviço
    initialize_app()
    components = build_gateway_components()
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from app.bootstrap.dependencies import (
    GatewayComponents,
    build_gateway_components,
    create_rate_limiter,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_messaging_settings,
    get_rate_limit_settings,
    get_webhook_settings,
)

if TYPE_CHECKING:
    from config.settings import MessagingSettings, RateLimitSettings, WebhookSettings

# Nome do serviço para logs
SERVICE_NAME = "integration_gateway"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)

__all__ = [
    "GatewayComponents",
    "build_gateway_components",
    "create_rate_limiter",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes.

    Configura logging em nível DEBUG sem JSON para facilitar debug.
    """
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
        json_output=False,
    )


def validate_runtime_settings(
    *,
    rate_limit_settings: RateLimitSettings | None = None,
    webhook_settings: WebhookSettings | None = None,
    messaging_settings: MessagingSettings | None = None,
) -> None:
    """Valida settings obrigatórias no startup.

    Recebe as settings que de fato serão usadas pelos componentes; as
    ausentes vêm do ambiente. Em `staging`/`production` falha rápido para
    impedir boot inválido (inclusive exigindo secrets das plataformas Meta).
    Em `development` mantém alerta sem bloquear execução local, exceto para
    políticas de rate limit inválidas, com as quais os limitadores não podem
    ser montados.
    """
    base_settings = get_base_settings()
    environment = base_settings.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    rate_limit_settings = rate_limit_settings or get_rate_limit_settings()
    webhook_settings = webhook_settings or get_webhook_settings()
    messaging_settings = messaging_settings or get_messaging_settings()

    rate_limit_errors = [f"rate_limit: {error}" for error in rate_limit_settings.validate()]
    errors: list[str] = [f"base: {error}" for error in base_settings.validate()]
    errors.extend(rate_limit_errors)
    errors.extend(f"messaging: {error}" for error in messaging_settings.validate())
    errors.extend(
        f"webhooks: {error}" for error in webhook_settings.validate(strict=strict_mode)
    )

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
    if strict_mode or rate_limit_errors:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
