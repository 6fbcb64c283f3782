"""Modelos compartilhados entre o pipeline HTTP e os colaboradores downstream."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class WebhookEnvelope:
    """Webhook já validado, pronto para o handler da plataforma.

    `body` são os bytes brutos exatamente como recebidos (os mesmos cobertos
    pela assinatura), disponíveis para nova leitura pelo handler.

    Attributes:
        platform: Plataforma de origem (ex: whatsapp)
        body: Corpo bruto do request
        headers: Headers recebidos (chaves em minúsculas)
        query_params: Query string decodificada
        client_ip: IP resolvido do cliente
        tenant_id: Tenant identificado no request (se houver)
        correlation_id: ID de rastreamento
        received_at: Instante de recebimento (UTC)
    """

    platform: str
    body: bytes
    headers: Mapping[str, str]
    query_params: Mapping[str, str]
    client_ip: str
    tenant_id: str | None = None
    correlation_id: str = ""
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def size(self) -> int:
        return len(self.body)
