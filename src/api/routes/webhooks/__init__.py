"""Rotas de webhook (integrações de mensageria, pagamentos e agenda)."""

from api.routes.webhooks.router import integrations_router, payments_router

__all__ = ["integrations_router", "payments_router"]
