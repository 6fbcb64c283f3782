"""Encaminhamento de webhooks validados ao serviço de mensageria.

Implementação de IO, pertence a app/infra. A normalização por plataforma
é responsabilidade do serviço de mensageria; aqui o payload segue como
recebido (JSON decodificado quando possível).
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

import httpx

from app.observability import CORRELATION_HEADER
from app.protocols.forwarder import WebhookForwarderProtocol
from utils.errors import MessagingServiceError

if TYPE_CHECKING:
    from app.protocols.models import WebhookEnvelope
    from config.settings import MessagingSettings

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non_standard_json_constant_{name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError("non_finite_json_number")
    return value


def build_forward_payload(envelope: WebhookEnvelope) -> dict[str, Any]:
    """Monta o corpo enviado ao serviço de mensageria.

    Corpo que não é JSON estrito (inclusive NaN/Infinity) segue como texto.
    """
    try:
        payload: Any = (
            json.loads(
                envelope.body,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
            if envelope.body
            else {}
        )
    except ValueError:
        payload = envelope.body.decode("utf-8", errors="replace")

    return {
        "platform": envelope.platform,
        "tenant_id": envelope.tenant_id,
        "correlation_id": envelope.correlation_id,
        "received_at": envelope.received_at.isoformat(),
        "payload": payload,
    }


class MessagingServiceForwarder(WebhookForwarderProtocol):
    """Cliente httpx para POST /api/v1/webhooks/inbound."""

    __slots__ = ("_http_client", "_owns_client", "_settings")

    def __init__(
        self,
        settings: MessagingSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds,
            )
        return self._http_client

    async def forward(self, envelope: WebhookEnvelope) -> None:
        if not self._settings.enabled:
            logger.warning(
                "messaging_forward_skipped",
                extra={
                    "platform": envelope.platform,
                    "reason": "messaging_service_url_not_configured",
                },
            )
            return

        client = await self._get_http_client()
        try:
            response = await client.post(
                self._settings.inbound_endpoint,
                json=build_forward_payload(envelope),
                headers={
                    "User-Agent": self._settings.user_agent,
                    CORRELATION_HEADER: envelope.correlation_id,
                },
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise MessagingServiceError("messaging_service_timeout") from exc
        except httpx.HTTPStatusError as exc:
            raise MessagingServiceError(
                f"messaging_service_status_{exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MessagingServiceError("messaging_service_unreachable") from exc
        except (TypeError, ValueError) as exc:
            raise MessagingServiceError("messaging_payload_not_serializable") from exc

        logger.info(
            "messaging_forward_completed",
            extra={
                "platform": envelope.platform,
                "status_code": response.status_code,
                "payload_size": envelope.size,
            },
        )

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
