"""Protocolo para encaminhamento de webhooks validados.

Evita dependência direta da camada api em clientes HTTP concretos.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.models import WebhookEnvelope


class WebhookForwarderProtocol(ABC):
    """Contrato mínimo do colaborador downstream."""

    @abstractmethod
    async def forward(self, envelope: WebhookEnvelope) -> None:
        """Entrega o webhook validado ao serviço de mensageria.

        Raises:
            MessagingServiceError: Se a entrega falhar.
        """

    async def aclose(self) -> None:
        """Libera recursos (clientes HTTP). Padrão: nada a fazer."""
        return None
