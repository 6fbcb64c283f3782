"""Entrypoint do gateway de integrações.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.middleware import CorrelationIdMiddleware, RateLimitMiddleware, RequestMetricsMiddleware
from api.routes import create_api_router
from app.bootstrap import build_gateway_components, initialize_app, validate_runtime_settings
from app.infra.ratelimit import run_sweeper
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap import GatewayComponents

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Inicia a varredura periódica de buckets ociosos

    Shutdown:
    - Cancela a varredura
    - Fecha o cliente HTTP do forwarder
    """
    components: GatewayComponents = app.state.components
    logger.info("app_starting", extra={"service": get_base_settings().service_name})
    sweeper = asyncio.create_task(
        run_sweeper(
            components.limiters,
            components.rate_limit_settings.sweep_interval_seconds,
        ),
        name="rate_limit_sweeper",
    )

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": get_base_settings().service_name})
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        await components.forwarder.aclose()


def create_app(components: GatewayComponents | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        components: Conjunto pré-montado (testes). Padrão: montado do ambiente.

    Returns:
        Aplicação FastAPI configurada.

    Raises:
        RuntimeError: Configuração inválida (ver validate_runtime_settings).
    """
    if components is None:
        validate_runtime_settings()
        components = build_gateway_components()
    else:
        validate_runtime_settings(
            rate_limit_settings=components.rate_limit_settings,
            webhook_settings=components.webhook_settings,
            messaging_settings=components.messaging_settings,
        )

    fastapi_app = FastAPI(
        title="Integration Gateway",
        description="Gateway multi-tenant de webhooks de integrações",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.components = components

    # add_middleware empilha: o último registrado é o mais externo
    fastapi_app.add_middleware(
        RateLimitMiddleware,
        limiter=components.general_limiter,
        metrics=components.metrics,
    )
    fastapi_app.add_middleware(RequestMetricsMiddleware, metrics=components.metrics)
    fastapi_app.add_middleware(CorrelationIdMiddleware)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    settings = get_base_settings()
    logger.info("Starting integration gateway in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
