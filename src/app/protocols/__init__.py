"""Protocolos e contratos do core da aplicação."""

from .forwarder import WebhookForwarderProtocol
from .models import WebhookEnvelope
from .rate_limiter import RateLimiterProtocol

__all__ = [
    "RateLimiterProtocol",
    "WebhookEnvelope",
    "WebhookForwarderProtocol",
]
