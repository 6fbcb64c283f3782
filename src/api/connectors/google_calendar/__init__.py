"""Connector Google Calendar (notificações push)."""

from api.connectors.google_calendar.channel_token import (
    CHANNEL_TOKEN_HEADER,
    verify_channel_token,
)

__all__ = ["CHANNEL_TOKEN_HEADER", "verify_channel_token"]
