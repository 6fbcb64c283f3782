"""Webhook Meta: handshake de verificação e assinatura HMAC."""

from api.connectors.meta.webhook.signature import (
    SIGNATURE_HEADER,
    SIGNATURE_PREFIX,
    compute_signature,
    verify_signature,
)
from api.connectors.meta.webhook.verify import HUB_MODE_SUBSCRIBE, verify_webhook_challenge

__all__ = [
    "HUB_MODE_SUBSCRIBE",
    "SIGNATURE_HEADER",
    "SIGNATURE_PREFIX",
    "compute_signature",
    "verify_signature",
    "verify_webhook_challenge",
]
