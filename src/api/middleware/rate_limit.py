"""Middleware do rate limiter geral (por IP, todas as rotas).

Os limitadores de webhook e de tenant rodam dentro do WebhookPipeline,
onde a rota (e o path param tenant_id) já é conhecida.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from api.middleware.client_identity import resolve_client_ip
from api.middleware.metrics import endpoint_label
from api.responses import error_response
from utils.errors import RateLimitExceededError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.observability import MetricsRecorder
    from app.protocols.rate_limiter import RateLimiterProtocol

logger = logging.getLogger(__name__)

GENERAL_LIMIT_CODE = "RATE_LIMIT_EXCEEDED"
GENERAL_LIMIT_MESSAGE = "Too many requests, please try again later"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejeita com 429 quando o bucket do IP do cliente esgota."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        limiter: RateLimiterProtocol,
        metrics: MetricsRecorder,
    ) -> None:
        super().__init__(app)
        self._limiter = limiter
        self._metrics = metrics

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        client_ip = resolve_client_ip(request)
        if self._limiter.allow(client_ip):
            return await call_next(request)

        endpoint = endpoint_label(request)
        self._metrics.record_rate_limit_hit(endpoint, client_ip)
        logger.info(
            "rate_limit_exceeded",
            extra={
                "limiter": self._limiter.name,
                "endpoint": endpoint,
                "client_ip": client_ip,
            },
        )
        return error_response(
            RateLimitExceededError(
                GENERAL_LIMIT_MESSAGE,
                code=GENERAL_LIMIT_CODE,
                limiter=self._limiter.name,
                key=client_ip,
            )
        )
