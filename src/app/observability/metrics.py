"""Métricas Prometheus do gateway.

MetricsRecorder concentra os coletores de HTTP, webhooks, rate limiting e
erros. Cada instância registra seus coletores num CollectorRegistry próprio
(injetável), o que isola testes e permite expor o registry em /metrics.

Uso:
    metrics = MetricsRecorder()
    metrics.record_rate_limit_hit("/api/v1/integrations/webhooks/whatsapp", "1.1.1.1")
    body = metrics.render()
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Buckets de tamanho de payload: 100B, 200B, ... 51.2KB
PAYLOAD_SIZE_BUCKETS: tuple[float, ...] = tuple(100.0 * 2**i for i in range(10)) + (float("inf"),)

# Segmentos de rota reconhecidos como plataforma
KNOWN_PLATFORMS: tuple[str, ...] = (
    "whatsapp",
    "messenger",
    "instagram",
    "telegram",
    "webchat",
    "tawkto",
    "mercadopago",
    "google-calendar",
)

UNKNOWN_TENANT = "unknown"


def platform_from_path(path: str) -> str:
    """Deriva o label de plataforma a partir do path da rota.

    Retorna o primeiro segmento que seja uma plataforma conhecida
    (google-calendar vira google_calendar), ou "api".
    """
    for segment in path.strip("/").split("/"):
        if segment in KNOWN_PLATFORMS:
            return segment.replace("-", "_")
    return "api"


class MetricsRecorder:
    """Coletores de métricas do gateway."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status", "platform"],
            registry=self.registry,
        )
        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint", "platform"],
            registry=self.registry,
        )
        self.http_requests_in_flight = Gauge(
            "http_requests_in_flight",
            "Current number of HTTP requests being processed",
            registry=self.registry,
        )
        self.webhook_requests_total = Counter(
            "webhook_requests_total",
            "Total number of webhook requests",
            ["platform", "status", "tenant_id", "outcome"],
            registry=self.registry,
        )
        self.webhook_processing_duration = Histogram(
            "webhook_processing_duration_seconds",
            "Webhook processing duration in seconds",
            ["platform", "tenant_id"],
            registry=self.registry,
        )
        self.webhook_payload_size = Histogram(
            "webhook_payload_size_bytes",
            "Webhook payload size in bytes",
            ["platform"],
            buckets=PAYLOAD_SIZE_BUCKETS,
            registry=self.registry,
        )
        self.rate_limit_hits = Counter(
            "rate_limit_hits_total",
            "Total number of rate limit hits",
            ["endpoint", "key"],
            registry=self.registry,
        )
        self.errors_total = Counter(
            "errors_total",
            "Total number of errors by type",
            ["type", "platform", "tenant_id"],
            registry=self.registry,
        )

    def record_http_request(
        self,
        *,
        method: str,
        endpoint: str,
        status_code: int,
        duration_seconds: float,
        tenant_id: str | None = None,
    ) -> None:
        """Registra uma requisição HTTP concluída (qualquer rota)."""
        platform = platform_from_path(endpoint)
        self.http_requests_total.labels(method, endpoint, str(status_code), platform).inc()
        self.http_request_duration.labels(method, endpoint, platform).observe(duration_seconds)

        if status_code >= 400:
            error_type = "server_error" if status_code >= 500 else "http_error"
            self.errors_total.labels(error_type, platform, tenant_id or UNKNOWN_TENANT).inc()

    def record_webhook(
        self,
        *,
        platform: str,
        status_code: int,
        outcome: str,
        duration_seconds: float,
        tenant_id: str | None = None,
    ) -> None:
        """Registra o estado terminal de um webhook no pipeline."""
        tenant = tenant_id or UNKNOWN_TENANT
        self.webhook_requests_total.labels(platform, str(status_code), tenant, outcome).inc()
        self.webhook_processing_duration.labels(platform, tenant).observe(duration_seconds)

        if status_code >= 400:
            self.errors_total.labels("webhook_error", platform, tenant).inc()

    def observe_payload_size(self, platform: str, size_bytes: int) -> None:
        if size_bytes > 0:
            self.webhook_payload_size.labels(platform).observe(size_bytes)

    def record_rate_limit_hit(self, endpoint: str, key: str) -> None:
        self.rate_limit_hits.labels(endpoint, key).inc()

    def render(self) -> bytes:
        """Serializa o registry no formato texto do Prometheus."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST
