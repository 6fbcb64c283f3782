"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.webhooks import integrations_router, payments_router

INTEGRATIONS_WEBHOOK_PREFIX = "/api/v1/integrations/webhooks"
WEBHOOK_PREFIX = "/api/v1/webhooks"


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks e métricas na raiz
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(
        integrations_router,
        prefix=INTEGRATIONS_WEBHOOK_PREFIX,
        tags=["webhooks"],
    )
    api_router.include_router(
        payments_router,
        prefix=WEBHOOK_PREFIX,
        tags=["webhooks"],
    )

    return api_router
