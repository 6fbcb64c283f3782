"""Validação do secret token de webhooks do Telegram.

O Telegram não assina o corpo; opcionalmente envia o secret definido no
setWebhook no header X-Telegram-Bot-Api-Secret-Token. A validação é
consultiva: só rejeita quando header e secret configurado existem e
divergem.
"""

from __future__ import annotations

from api.connectors.secure_compare import constant_time_equals
from utils.errors import UnauthorizedError

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def verify_secret_token(header_value: str | None, expected_token: str | None) -> bool:
    """Confere o secret token quando ambos os lados estão presentes.

    Args:
        header_value: Valor recebido no header (pode faltar)
        expected_token: Secret configurado (pode faltar)

    Raises:
        UnauthorizedError: Se ambos existirem e não conferirem

    Returns:
        True se o token foi efetivamente comparado; False se a checagem
        foi pulada por ausência de um dos lados.
    """
    if not header_value or not expected_token:
        return False

    if not constant_time_equals(header_value, expected_token):
        raise UnauthorizedError("Invalid secret token", reason="secret_token_mismatch")

    return True
