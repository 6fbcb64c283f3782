"""Settings de validação de webhooks por plataforma.

Cada plataforma tem um par imutável (secret, verify_token) carregado do
ambiente no boot. O mapeamento é somente leitura durante a vida do processo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Plataforma -> (env do secret, env do verify token)
PLATFORM_ENV_KEYS: dict[str, tuple[str, str]] = {
    "whatsapp": ("WHATSAPP_WEBHOOK_SECRET", "WHATSAPP_VERIFY_TOKEN"),
    "messenger": ("MESSENGER_WEBHOOK_SECRET", "MESSENGER_VERIFY_TOKEN"),
    "instagram": ("INSTAGRAM_WEBHOOK_SECRET", "INSTAGRAM_VERIFY_TOKEN"),
    "telegram": ("TELEGRAM_WEBHOOK_SECRET", "TELEGRAM_VERIFY_TOKEN"),
    "webchat": ("WEBCHAT_WEBHOOK_SECRET", "WEBCHAT_VERIFY_TOKEN"),
    "tawkto": ("TAWKTO_WEBHOOK_SECRET", "TAWKTO_VERIFY_TOKEN"),
    "mercadopago": ("MP_WEBHOOK_SECRET", "MP_VERIFY_TOKEN"),
    "google_calendar": ("GOOGLE_CALENDAR_WEBHOOK_SECRET", "GOOGLE_CALENDAR_WEBHOOK_TOKEN"),
}

SUPPORTED_PLATFORMS: frozenset[str] = frozenset(PLATFORM_ENV_KEYS)

# Plataformas Meta exigem secret HMAC e verify token em produção
META_PLATFORMS: frozenset[str] = frozenset({"whatsapp", "messenger", "instagram"})


@dataclass(frozen=True)
class PlatformCredentials:
    """Credenciais de webhook de uma plataforma.

    Attributes:
        secret: Secret compartilhado (HMAC ou secret token)
        verify_token: Token esperado no handshake hub.verify_token
    """

    secret: str = ""
    verify_token: str = ""


_EMPTY_CREDENTIALS = PlatformCredentials()


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações de validação de webhooks.

    Attributes:
        credentials: Mapeamento imutável plataforma -> credenciais
        mercadopago_max_age_seconds: Idade máxima do `ts` do x-signature
    """

    credentials: Mapping[str, PlatformCredentials] = field(
        default_factory=lambda: MappingProxyType({})
    )
    mercadopago_max_age_seconds: int = 300

    def for_platform(self, platform: str) -> PlatformCredentials:
        """Retorna credenciais da plataforma (vazias se desconhecida)."""
        return self.credentials.get(platform, _EMPTY_CREDENTIALS)

    def secret_for(self, platform: str) -> str:
        return self.for_platform(platform).secret

    def verify_token_for(self, platform: str) -> str:
        return self.for_platform(platform).verify_token

    def validate(self, *, strict: bool = False) -> list[str]:
        """Valida credenciais mínimas.

        Args:
            strict: Se True, exige secret e verify token das plataformas Meta.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.mercadopago_max_age_seconds <= 0:
            errors.append("MERCADOPAGO_SIGNATURE_MAX_AGE_SECONDS deve ser > 0")

        if not strict:
            return errors

        for platform in sorted(META_PLATFORMS):
            secret_env, token_env = PLATFORM_ENV_KEYS[platform]
            credentials = self.for_platform(platform)
            if not credentials.secret:
                errors.append(f"{secret_env} não configurado")
            if not credentials.verify_token:
                errors.append(f"{token_env} não configurado")

        return errors


def build_webhook_settings(
    credentials: Mapping[str, PlatformCredentials],
    mercadopago_max_age_seconds: int = 300,
) -> WebhookSettings:
    """Cria WebhookSettings com cópia imutável do mapeamento."""
    return WebhookSettings(
        credentials=MappingProxyType(dict(credentials)),
        mercadopago_max_age_seconds=mercadopago_max_age_seconds,
    )


def _load_from_env() -> WebhookSettings:
    """Carrega WebhookSettings de variáveis de ambiente."""
    credentials = {
        platform: PlatformCredentials(
            secret=os.getenv(secret_env, ""),
            verify_token=os.getenv(token_env, ""),
        )
        for platform, (secret_env, token_env) in PLATFORM_ENV_KEYS.items()
    }
    return build_webhook_settings(
        credentials,
        mercadopago_max_age_seconds=int(
            os.getenv("MERCADOPAGO_SIGNATURE_MAX_AGE_SECONDS", "300")
        ),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
