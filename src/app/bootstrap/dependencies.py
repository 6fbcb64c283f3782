"""Factories de componentes: criação de implementações concretas.

Constrói uma única vez, no boot, os limitadores, o recorder de métricas,
o forwarder e o pipeline. Nada aqui é estado global: cada chamada cria
instâncias isoladas (testes montam o próprio conjunto).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.pipeline import WebhookPipeline
from app.infra.messaging import MessagingServiceForwarder
from app.infra.ratelimit import TokenBucketRateLimiter
from app.observability import MetricsRecorder
from config.settings import (
    get_messaging_settings,
    get_rate_limit_settings,
    get_webhook_settings,
)

if TYPE_CHECKING:
    from app.protocols.forwarder import WebhookForwarderProtocol
    from app.protocols.rate_limiter import RateLimiterProtocol
    from config.settings import (
        MessagingSettings,
        RateLimitPolicy,
        RateLimitSettings,
        WebhookSettings,
    )


@dataclass(frozen=True, slots=True)
class GatewayComponents:
    """Componentes do gateway, compartilhados por middlewares e rotas.

    Attributes:
        general_limiter: Limitador geral por IP (todas as rotas)
        webhook_limiter: Limitador por IP das rotas de webhook
        tenant_limiter: Limitador por tenant das rotas de webhook
        metrics: Recorder Prometheus
        forwarder: Colaborador downstream das entregas aceitas
        pipeline: Pipeline de validação de webhooks
        rate_limit_settings: Políticas e intervalos de limpeza
        webhook_settings: Credenciais por plataforma
        messaging_settings: Configuração do serviço de mensageria
    """

    general_limiter: RateLimiterProtocol
    webhook_limiter: RateLimiterProtocol
    tenant_limiter: RateLimiterProtocol
    metrics: MetricsRecorder
    forwarder: WebhookForwarderProtocol
    pipeline: WebhookPipeline
    rate_limit_settings: RateLimitSettings
    webhook_settings: WebhookSettings
    messaging_settings: MessagingSettings

    @property
    def limiters(self) -> tuple[RateLimiterProtocol, ...]:
        return (self.general_limiter, self.webhook_limiter, self.tenant_limiter)


def create_rate_limiter(
    policy: RateLimitPolicy,
    *,
    name: str,
    bucket_ttl_seconds: float,
) -> TokenBucketRateLimiter:
    """Cria limitador token bucket a partir de uma política."""
    return TokenBucketRateLimiter(
        policy.rps,
        policy.burst,
        name=name,
        bucket_ttl_seconds=bucket_ttl_seconds,
    )


def build_gateway_components(
    *,
    rate_limit_settings: RateLimitSettings | None = None,
    webhook_settings: WebhookSettings | None = None,
    messaging_settings: MessagingSettings | None = None,
    metrics: MetricsRecorder | None = None,
    forwarder: WebhookForwarderProtocol | None = None,
) -> GatewayComponents:
    """Monta o conjunto de componentes.

    Settings ausentes vêm do ambiente; metrics e forwarder podem ser
    substituídos por dublês em testes.
    """
    rate_limit_settings = rate_limit_settings or get_rate_limit_settings()
    webhook_settings = webhook_settings or get_webhook_settings()
    messaging_settings = messaging_settings or get_messaging_settings()
    metrics = metrics or MetricsRecorder()
    forwarder = forwarder or MessagingServiceForwarder(messaging_settings)

    ttl = rate_limit_settings.bucket_ttl_seconds
    general_limiter = create_rate_limiter(
        rate_limit_settings.general, name="general", bucket_ttl_seconds=ttl
    )
    webhook_limiter = create_rate_limiter(
        rate_limit_settings.webhook, name="webhook", bucket_ttl_seconds=ttl
    )
    tenant_limiter = create_rate_limiter(
        rate_limit_settings.tenant, name="tenant", bucket_ttl_seconds=ttl
    )

    pipeline = WebhookPipeline(
        webhook_limiter=webhook_limiter,
        tenant_limiter=tenant_limiter,
        settings=webhook_settings,
        metrics=metrics,
    )

    return GatewayComponents(
        general_limiter=general_limiter,
        webhook_limiter=webhook_limiter,
        tenant_limiter=tenant_limiter,
        metrics=metrics,
        forwarder=forwarder,
        pipeline=pipeline,
        rate_limit_settings=rate_limit_settings,
        webhook_settings=webhook_settings,
        messaging_settings=messaging_settings,
    )
