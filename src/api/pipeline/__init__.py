"""Pipeline de validação de webhooks (admissão, verificação, entrega)."""

from api.pipeline.webhook_pipeline import (
    PROCESSED_MESSAGE,
    VERIFIED_MESSAGE,
    WebhookPipeline,
    WebhookRoute,
)

__all__ = [
    "PROCESSED_MESSAGE",
    "VERIFIED_MESSAGE",
    "WebhookPipeline",
    "WebhookRoute",
]
