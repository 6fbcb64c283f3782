"""Agregador de settings do gateway de integrações.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Downstream
from config.settings.messaging import MessagingSettings, get_messaging_settings

# Rate limiting
from config.settings.rate_limit import (
    RateLimitPolicy,
    RateLimitSettings,
    get_rate_limit_settings,
)

# Webhooks por plataforma
from config.settings.webhooks import (
    META_PLATFORMS,
    SUPPORTED_PLATFORMS,
    PlatformCredentials,
    WebhookSettings,
    build_webhook_settings,
    get_webhook_settings,
)

__all__ = [
    # Constants
    "DEFAULT_SERVICE_NAME",
    "META_PLATFORMS",
    "SUPPORTED_PLATFORMS",
    # Base
    "BaseSettings",
    "Environment",
    # Downstream
    "MessagingSettings",
    # Webhooks
    "PlatformCredentials",
    # Rate limiting
    "RateLimitPolicy",
    "RateLimitSettings",
    "WebhookSettings",
    "build_webhook_settings",
    "get_base_settings",
    "get_messaging_settings",
    "get_rate_limit_settings",
    "get_webhook_settings",
]
