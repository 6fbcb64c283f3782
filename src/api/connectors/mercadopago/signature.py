"""Validação do header x-signature de webhooks do Mercado Pago.

Formato: `x-signature: ts=<timestamp>,v1=<hex>`. O HMAC-SHA256 é calculado
sobre o manifest `id:<data.id>;request-id:<x-request-id>;ts:<ts>;`, não
sobre o corpo.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass

from api.connectors.secure_compare import constant_time_equals
from utils.errors import ConfigurationError, UnauthorizedError

SIGNATURE_HEADER = "x-signature"
REQUEST_ID_HEADER = "x-request-id"
DATA_ID_PARAM = "data.id"
DEFAULT_MAX_AGE_SECONDS = 300

# Timestamps acima disso estão em milissegundos
_MILLISECONDS_THRESHOLD = 10**11


@dataclass(frozen=True, slots=True)
class ParsedSignature:
    """Partes do header x-signature."""

    ts: str
    v1: str


def parse_x_signature(header_value: str) -> ParsedSignature:
    """Extrai ts e v1 do header.

    Raises:
        UnauthorizedError: Se ts ou v1 estiverem ausentes
    """
    parts: dict[str, str] = {}
    for chunk in header_value.split(","):
        key, sep, value = chunk.strip().partition("=")
        if sep:
            parts[key.strip()] = value.strip()

    ts = parts.get("ts", "")
    v1 = parts.get("v1", "")
    if not ts or not v1:
        raise UnauthorizedError("Invalid x-signature format", reason="invalid_signature_format")
    return ParsedSignature(ts=ts, v1=v1)


def build_manifest(data_id: str | None, request_id: str | None, ts: str) -> str:
    """Monta o template assinado pelo Mercado Pago."""
    return f"id:{data_id or ''};request-id:{request_id or ''};ts:{ts};"


def compute_manifest_signature(secret: str, manifest: str) -> str:
    return hmac.new(
        secret.encode("utf-8"), manifest.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def _timestamp_seconds(ts: str) -> float:
    try:
        value = int(ts)
    except ValueError as exc:
        raise UnauthorizedError(
            "Invalid x-signature timestamp", reason="invalid_timestamp"
        ) from exc
    if value > _MILLISECONDS_THRESHOLD:
        return value / 1000
    return float(value)


def verify_mercadopago_signature(
    *,
    signature_header: str | None,
    request_id: str | None,
    data_id: str | None,
    secret: str | None,
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    now: float | None = None,
) -> None:
    """Valida x-signature e a idade do timestamp.

    Args:
        signature_header: Valor do header x-signature
        request_id: Valor do header x-request-id
        data_id: Query param data.id
        secret: Secret de webhook do Mercado Pago
        max_age_seconds: Idade máxima aceita para `ts`
        now: Epoch atual em segundos (injetável em testes)

    Raises:
        ConfigurationError: Se não houver secret configurado
        UnauthorizedError: Header ausente/malformado, hash divergente ou
            timestamp antigo
    """
    if not secret:
        raise ConfigurationError("missing_mercadopago_secret")

    if not signature_header:
        raise UnauthorizedError("Missing x-signature header", reason="missing_signature")

    parsed = parse_x_signature(signature_header)
    expected = compute_manifest_signature(
        secret, build_manifest(data_id, request_id, parsed.ts)
    )
    if not constant_time_equals(parsed.v1, expected):
        raise UnauthorizedError("Invalid webhook signature", reason="signature_mismatch")

    current = time.time() if now is None else now
    if current - _timestamp_seconds(parsed.ts) > max_age_seconds:
        raise UnauthorizedError("Webhook timestamp is too old", reason="timestamp_too_old")
