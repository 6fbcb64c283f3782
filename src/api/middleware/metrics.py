"""Middleware de métricas HTTP (todas as rotas)."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from api.middleware.client_identity import resolve_tenant_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.observability import MetricsRecorder


UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """Template da rota (ex: /api/v1/webhooks/mercadopago) ou UNMATCHED_ENDPOINT.

    O path bruto nunca vira label, assim as séries ficam limitadas às rotas
    registradas. Antes do roteamento (rate limit geral) a rota é resolvida
    contra o router da aplicação.
    """
    route = request.scope.get("route")
    if route is None:
        route = _match_route(request)
    return getattr(route, "path", None) or UNMATCHED_ENDPOINT


def _match_route(request: Request) -> object | None:
    app = request.scope.get("app")
    for route in getattr(getattr(app, "router", None), "routes", ()):
        match, _ = route.matches(request.scope)
        if match is not Match.NONE:
            return route
    return None


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Conta requests, mede duração e acompanha requests em andamento."""

    def __init__(self, app: ASGIApp, *, metrics: MetricsRecorder) -> None:
        super().__init__(app)
        self._metrics = metrics

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        self._metrics.http_requests_in_flight.inc()
        started_at = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            self._metrics.http_requests_in_flight.dec()
            self._metrics.record_http_request(
                method=request.method,
                endpoint=endpoint_label(request),
                status_code=status_code,
                duration_seconds=time.perf_counter() - started_at,
                tenant_id=resolve_tenant_id(request),
            )
