"""Rotas HTTP da API: adapters de entrada.

Estrutura:
- routes/health/: health, readiness e /metrics
- routes/webhooks/: webhooks por plataforma (delegam ao WebhookPipeline)

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
