"""Pipeline de validação de webhooks inbound.

Fluxo por request:
1. Admissão: limitador de webhook (por IP) e de tenant (se identificado)
2. GET: handshake hub.* (sempre terminal, nunca chega ao handler)
3. Demais métodos: lê o corpo bruto, autentica conforme o esquema da
   plataforma e entrega o WebhookEnvelope ao handler downstream

Todo estado terminal gera exatamente um log e uma observação de métricas.
Os validadores em api/connectors são puros (sem log); o registro acontece
apenas aqui.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from fastapi.responses import PlainTextResponse

from api.connectors.google_calendar import CHANNEL_TOKEN_HEADER, verify_channel_token
from api.connectors.mercadopago import (
    DATA_ID_PARAM,
    REQUEST_ID_HEADER,
    verify_mercadopago_signature,
)
from api.connectors.mercadopago import SIGNATURE_HEADER as MERCADOPAGO_SIGNATURE_HEADER
from api.connectors.meta.webhook import (
    SIGNATURE_HEADER,
    verify_signature,
    verify_webhook_challenge,
)
from api.connectors.telegram import SECRET_TOKEN_HEADER, verify_secret_token
from api.middleware.client_identity import resolve_client_ip, resolve_tenant_id
from api.middleware.metrics import endpoint_label
from api.responses import error_response, success_response, webhook_error_response
from app.observability import get_correlation_id
from app.protocols.models import WebhookEnvelope
from utils.errors import GatewayError, InfrastructureError, RateLimitExceededError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

    from app.observability import MetricsRecorder
    from app.protocols.rate_limiter import RateLimiterProtocol
    from config.settings import WebhookSettings

    WebhookHandler = Callable[[WebhookEnvelope], Awaitable[None]]

logger = logging.getLogger(__name__)

VerificationScheme = Literal["meta_hmac", "telegram", "mercadopago", "channel_token"]

WEBHOOK_LIMIT_CODE = "WEBHOOK_RATE_LIMIT_EXCEEDED"
WEBHOOK_LIMIT_MESSAGE = "Webhook rate limit exceeded"
TENANT_LIMIT_CODE = "TENANT_RATE_LIMIT_EXCEEDED"
TENANT_LIMIT_MESSAGE = "Tenant rate limit exceeded"

PROCESSED_MESSAGE = "Webhook processed successfully"
VERIFIED_MESSAGE = "Webhook verification successful"

OUTCOME_FORWARDED = "admitted_forwarded"
OUTCOME_VERIFIED = "verified"
OUTCOME_FORWARD_FAILED = "forward_failed"


@dataclass(frozen=True, slots=True)
class WebhookRoute:
    """Descrição estática de uma rota de webhook.

    Attributes:
        platform: Chave da plataforma em WebhookSettings (ex: google_calendar)
        scheme: Esquema de autenticação das entregas (não-GET)
        signature_header: Header do HMAC no esquema meta_hmac
    """

    platform: str
    scheme: VerificationScheme = "meta_hmac"
    signature_header: str = SIGNATURE_HEADER


class WebhookPipeline:
    """Orquestra admissão, verificação e entrega de webhooks."""

    def __init__(
        self,
        *,
        webhook_limiter: RateLimiterProtocol,
        tenant_limiter: RateLimiterProtocol,
        settings: WebhookSettings,
        metrics: MetricsRecorder,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._webhook_limiter = webhook_limiter
        self._tenant_limiter = tenant_limiter
        self._settings = settings
        self._metrics = metrics
        self._wall_clock = wall_clock

    async def handle(
        self,
        request: Request,
        route: WebhookRoute,
        handler: WebhookHandler,
    ) -> Response:
        """Processa o request até um estado terminal e retorna a resposta."""
        started_at = time.perf_counter()
        client_ip = resolve_client_ip(request)
        tenant_id = resolve_tenant_id(request)

        try:
            self._admit(request, client_ip, tenant_id)

            if request.method == "GET":
                response = self._verify_subscription(request, route)
                outcome = OUTCOME_VERIFIED
            else:
                envelope = await self._authenticate(request, route, client_ip, tenant_id)
                await self._deliver(handler, envelope)
                response = success_response(PROCESSED_MESSAGE)
                outcome = OUTCOME_FORWARDED
        except GatewayError as exc:
            logger.log(
                exc.log_level,
                "webhook_rejected",
                extra={
                    "platform": route.platform,
                    "reason": exc.reason,
                    "status_code": exc.status_code,
                    "outcome": exc.outcome,
                    "client_ip": client_ip,
                    "tenant_id": tenant_id,
                },
            )
            self._record(route, exc.status_code, exc.outcome, started_at, tenant_id)
            return error_response(exc)
        except InfrastructureError as exc:
            logger.exception(
                "webhook_forward_failed",
                extra={
                    "platform": route.platform,
                    "error_type": type(exc.__cause__ or exc).__name__,
                    "outcome": OUTCOME_FORWARD_FAILED,
                    "tenant_id": tenant_id,
                },
            )
            response = webhook_error_response()
            self._record(route, response.status_code, OUTCOME_FORWARD_FAILED, started_at, tenant_id)
            return response

        logger.info(
            "webhook_accepted",
            extra={
                "platform": route.platform,
                "method": request.method,
                "status_code": response.status_code,
                "outcome": outcome,
                "tenant_id": tenant_id,
            },
        )
        self._record(route, response.status_code, outcome, started_at, tenant_id)
        return response

    async def _deliver(self, handler: WebhookHandler, envelope: WebhookEnvelope) -> None:
        """Entrega ao handler; falha inesperada vira InfrastructureError."""
        try:
            await handler(envelope)
        except (GatewayError, InfrastructureError):
            raise
        except Exception as exc:
            raise InfrastructureError("webhook_handler_failed") from exc

    def _admit(self, request: Request, client_ip: str, tenant_id: str | None) -> None:
        """Aplica os limitadores de webhook e de tenant, nessa ordem."""
        endpoint = endpoint_label(request)

        if not self._webhook_limiter.allow(client_ip):
            self._metrics.record_rate_limit_hit(endpoint, client_ip)
            raise RateLimitExceededError(
                WEBHOOK_LIMIT_MESSAGE,
                code=WEBHOOK_LIMIT_CODE,
                limiter=self._webhook_limiter.name,
                key=client_ip,
            )

        if tenant_id is None:
            return

        if not self._tenant_limiter.allow(tenant_id):
            self._metrics.record_rate_limit_hit(endpoint, tenant_id)
            raise RateLimitExceededError(
                TENANT_LIMIT_MESSAGE,
                code=TENANT_LIMIT_CODE,
                limiter=self._tenant_limiter.name,
                key=tenant_id,
            )

    def _verify_subscription(self, request: Request, route: WebhookRoute) -> Response:
        """Handshake hub.mode/hub.verify_token/hub.challenge."""
        params = request.query_params
        challenge = verify_webhook_challenge(
            params.get("hub.mode"),
            params.get("hub.verify_token"),
            params.get("hub.challenge"),
            self._settings.verify_token_for(route.platform),
        )
        if challenge is None:
            return success_response(VERIFIED_MESSAGE)
        return PlainTextResponse(challenge)

    async def _authenticate(
        self,
        request: Request,
        route: WebhookRoute,
        client_ip: str,
        tenant_id: str | None,
    ) -> WebhookEnvelope:
        """Lê o corpo bruto e o valida conforme o esquema da rota.

        O corpo fica em cache no Request (nova leitura é possível) e segue
        inalterado no envelope.
        """
        body = await request.body()
        self._metrics.observe_payload_size(route.platform, len(body))
        headers = request.headers

        if route.scheme == "meta_hmac":
            body = verify_signature(
                body,
                headers.get(route.signature_header),
                self._settings.secret_for(route.platform),
            )
        elif route.scheme == "telegram":
            verify_secret_token(
                headers.get(SECRET_TOKEN_HEADER),
                self._settings.secret_for(route.platform),
            )
        elif route.scheme == "mercadopago":
            verify_mercadopago_signature(
                signature_header=headers.get(MERCADOPAGO_SIGNATURE_HEADER),
                request_id=headers.get(REQUEST_ID_HEADER),
                data_id=request.query_params.get(DATA_ID_PARAM),
                secret=self._settings.secret_for(route.platform),
                max_age_seconds=self._settings.mercadopago_max_age_seconds,
                now=self._wall_clock(),
            )
        elif route.scheme == "channel_token":
            verify_channel_token(
                headers.get(CHANNEL_TOKEN_HEADER),
                self._settings.verify_token_for(route.platform),
            )

        return WebhookEnvelope(
            platform=route.platform,
            body=body,
            headers=dict(headers.items()),
            query_params=dict(request.query_params.items()),
            client_ip=client_ip,
            tenant_id=tenant_id,
            correlation_id=get_correlation_id(),
        )

    def _record(
        self,
        route: WebhookRoute,
        status_code: int,
        outcome: str,
        started_at: float,
        tenant_id: str | None,
    ) -> None:
        self._metrics.record_webhook(
            platform=route.platform,
            status_code=status_code,
            outcome=outcome,
            duration_seconds=time.perf_counter() - started_at,
            tenant_id=tenant_id,
        )
