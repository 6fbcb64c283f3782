"""Connectors da família Meta (WhatsApp, Messenger, Instagram)."""
