"""Verificação de webhook exigida pela Meta (handshake hub.*)."""

from __future__ import annotations

from api.connectors.secure_compare import constant_time_equals
from utils.errors import BadRequestError, ConfigurationError, ForbiddenError

HUB_MODE_SUBSCRIBE = "subscribe"


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str | None:
    """Valida o handshake de assinatura e retorna o challenge a ecoar.

    Ordem de validação:
    1. hub.mode diferente de "subscribe" -> 400
    2. hub.verify_token ausente -> 400
    3. token esperado não configurado -> 500
    4. hub.verify_token diferente do esperado -> 403

    Args:
        hub_mode: Valor de hub.mode
        hub_verify_token: Valor de hub.verify_token
        hub_challenge: Valor de hub.challenge
        expected_token: Token configurado para a plataforma

    Raises:
        BadRequestError: Parâmetros de protocolo inválidos
        ConfigurationError: Token esperado ausente
        ForbiddenError: Token não confere

    Returns:
        O challenge, ou None se ausente (o chamador responde JSON genérico).
    """
    if hub_mode != HUB_MODE_SUBSCRIBE:
        raise BadRequestError("Invalid hub.mode", reason="invalid_hub_mode")

    if not hub_verify_token:
        raise BadRequestError("Missing hub.verify_token", reason="missing_verify_token")

    if not expected_token:
        raise ConfigurationError("missing_expected_verify_token")

    if not constant_time_equals(hub_verify_token, expected_token):
        raise ForbiddenError("Invalid webhook verify token", reason="verify_token_mismatch")

    return hub_challenge or None
