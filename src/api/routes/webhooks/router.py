"""Endpoints de webhook por plataforma.

Cada rota declara seu WebhookRoute (plataforma e esquema de autenticação)
e delega ao WebhookPipeline compartilhado em app.state. Entregas aceitas
seguem ao forwarder do serviço de mensageria.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response

from api.pipeline import WebhookRoute

if TYPE_CHECKING:
    from app.bootstrap import GatewayComponents

TAWKTO_SIGNATURE_HEADER = "X-Tawk-Signature"

integrations_router = APIRouter()
payments_router = APIRouter()

META_ROUTES: dict[str, WebhookRoute] = {
    platform: WebhookRoute(platform=platform)
    for platform in ("whatsapp", "messenger", "instagram")
}
TELEGRAM_ROUTE = WebhookRoute(platform="telegram", scheme="telegram")
WEBCHAT_ROUTE = WebhookRoute(platform="webchat")
TAWKTO_ROUTE = WebhookRoute(platform="tawkto", signature_header=TAWKTO_SIGNATURE_HEADER)
MERCADOPAGO_ROUTE = WebhookRoute(platform="mercadopago", scheme="mercadopago")
GOOGLE_CALENDAR_ROUTE = WebhookRoute(platform="google_calendar", scheme="channel_token")


async def _dispatch(request: Request, route: WebhookRoute) -> Response:
    components: GatewayComponents = request.app.state.components
    return await components.pipeline.handle(request, route, components.forwarder.forward)


def _register_meta_platform(platform: str) -> None:
    """GET (handshake hub.*) e POST (entregas assinadas) no mesmo path.

    Cada plataforma também responde em /tenants/{tenant_id}/{platform},
    onde o tenant vem do path (consultado depois da query e antes do header).
    """
    route = META_ROUTES[platform]

    async def meta_webhook(request: Request) -> Response:
        return await _dispatch(request, route)

    integrations_router.add_api_route(
        f"/{platform}",
        meta_webhook,
        methods=["GET", "POST"],
        name=f"{platform}_webhook",
    )
    integrations_router.add_api_route(
        f"/tenants/{{tenant_id}}/{platform}",
        meta_webhook,
        methods=["GET", "POST"],
        name=f"{platform}_tenant_webhook",
    )


for _platform in META_ROUTES:
    _register_meta_platform(_platform)


@integrations_router.post("/telegram")
async def telegram_webhook(request: Request) -> Response:
    """Updates do bot (secret token consultivo)."""
    return await _dispatch(request, TELEGRAM_ROUTE)


@integrations_router.post("/webchat")
async def webchat_webhook(request: Request) -> Response:
    return await _dispatch(request, WEBCHAT_ROUTE)


@integrations_router.post("/tawkto")
async def tawkto_webhook(request: Request) -> Response:
    """Eventos do Tawk.to (HMAC em X-Tawk-Signature)."""
    return await _dispatch(request, TAWKTO_ROUTE)


@payments_router.post("/mercadopago")
async def mercadopago_webhook(request: Request) -> Response:
    """Notificações do Mercado Pago (x-signature sobre o manifest)."""
    return await _dispatch(request, MERCADOPAGO_ROUTE)


@payments_router.post("/google-calendar")
async def google_calendar_webhook(request: Request) -> Response:
    """Push notifications do Google Calendar (X-Goog-Channel-Token)."""
    return await _dispatch(request, GOOGLE_CALENDAR_ROUTE)
