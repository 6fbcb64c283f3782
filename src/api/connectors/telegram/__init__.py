"""Connector Telegram Bot API (webhook)."""

from api.connectors.telegram.secret_token import SECRET_TOKEN_HEADER, verify_secret_token

__all__ = ["SECRET_TOKEN_HEADER", "verify_secret_token"]
