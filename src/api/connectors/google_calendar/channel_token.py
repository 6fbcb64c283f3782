"""Validação de notificações push do Google Calendar.

O Google envia o token definido no watch() no header X-Goog-Channel-Token.
Diferente do Telegram, aqui o token é obrigatório.
"""

from __future__ import annotations

from api.connectors.secure_compare import constant_time_equals
from utils.errors import ConfigurationError, UnauthorizedError

CHANNEL_TOKEN_HEADER = "X-Goog-Channel-Token"


def verify_channel_token(header_value: str | None, expected_token: str | None) -> None:
    """Confere o token do canal de notificação.

    Raises:
        ConfigurationError: Se não houver token configurado
        UnauthorizedError: Se o header estiver ausente ou divergir
    """
    if not expected_token:
        raise ConfigurationError("missing_channel_token")

    if not header_value:
        raise UnauthorizedError("Missing channel token", reason="missing_channel_token")

    if not constant_time_equals(header_value, expected_token):
        raise UnauthorizedError("Invalid channel token", reason="channel_token_mismatch")
