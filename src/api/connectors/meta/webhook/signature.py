"""Validação de assinatura HMAC-SHA256 de webhooks.

Formato usado pela Meta (WhatsApp, Messenger, Instagram) e reaproveitado
por Webchat e Tawk.to: header `sha256=<hex>` calculado sobre os bytes brutos
do corpo. Um corpo re-serializado, mesmo equivalente, não confere.
"""

from __future__ import annotations

import hashlib
import hmac

from api.connectors.secure_compare import constant_time_equals
from utils.errors import ConfigurationError, UnauthorizedError

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def compute_signature(secret: str, body: bytes) -> str:
    """Calcula HMAC-SHA256(secret, body) em hex minúsculo."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(
    body: bytes,
    signature_header: str | None,
    secret: str | None,
) -> bytes:
    """Valida a assinatura do webhook e devolve o corpo para replay.

    Args:
        body: Corpo bruto do request
        signature_header: Valor do header de assinatura (ex: "sha256=ab12...")
        secret: Secret configurado para a plataforma

    Raises:
        ConfigurationError: Se não houver secret configurado
        UnauthorizedError: Se a assinatura estiver ausente ou não conferir

    Returns:
        O mesmo `body`, inalterado.
    """
    if not secret:
        raise ConfigurationError("missing_webhook_secret")

    if not signature_header:
        raise UnauthorizedError("Missing webhook signature", reason="missing_signature")

    provided = signature_header
    if provided.startswith(SIGNATURE_PREFIX):
        provided = provided[len(SIGNATURE_PREFIX):]

    expected = compute_signature(secret, body)
    if not constant_time_equals(provided, expected):
        raise UnauthorizedError("Invalid webhook signature", reason="signature_mismatch")

    return body
