"""Settings do serviço de mensageria downstream.

Destino dos webhooks aceitos pelo pipeline de validação.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

INBOUND_PATH = "/api/v1/webhooks/inbound"


@dataclass(frozen=True)
class MessagingSettings:
    """Configurações do encaminhamento ao serviço de mensageria.

    Attributes:
        service_url: URL base do serviço (vazio = encaminhamento desativado)
        request_timeout_seconds: Timeout das requisições HTTP
        user_agent: User-Agent enviado ao serviço
    """

    service_url: str = ""
    request_timeout_seconds: float = 10.0
    user_agent: str = "integration-gateway/1.0"

    @property
    def enabled(self) -> bool:
        return bool(self.service_url)

    @property
    def inbound_endpoint(self) -> str:
        """URL completa do endpoint de ingestão."""
        return f"{self.service_url.rstrip('/')}{INBOUND_PATH}"

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.service_url and not self.service_url.startswith(("http://", "https://")):
            errors.append("MESSAGING_SERVICE_URL deve começar com http:// ou https://")
        if self.request_timeout_seconds <= 0:
            errors.append("MESSAGING_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> MessagingSettings:
    """Carrega MessagingSettings de variáveis de ambiente."""
    return MessagingSettings(
        service_url=os.getenv("MESSAGING_SERVICE_URL", ""),
        request_timeout_seconds=float(
            os.getenv("MESSAGING_REQUEST_TIMEOUT_SECONDS", "10")
        ),
    )


@lru_cache(maxsize=1)
def get_messaging_settings() -> MessagingSettings:
    """Retorna instância cacheada de MessagingSettings."""
    return _load_from_env()
