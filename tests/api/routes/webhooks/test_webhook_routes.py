"""Testes end-to-end das rotas de webhook via ASGI."""

from __future__ import annotations

import hashlib
import hmac
import json

import httpx
import pytest

from app.app import create_app
from app.bootstrap import build_gateway_components
from app.infra.messaging import MessagingServiceForwarder
from app.protocols import WebhookForwarderProtocol
from config.settings import (
    MessagingSettings,
    PlatformCredentials,
    RateLimitPolicy,
    RateLimitSettings,
    build_webhook_settings,
)
from tests.fakes.fake_forwarder import RecordingForwarder

SECRET = "testsecret"
VERIFY_TOKEN = "verify-me"
WHATSAPP_PATH = "/api/v1/integrations/webhooks/whatsapp"


def _signature(body: bytes) -> str:
    return "sha256=" + hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()


def _build_client(
    forwarder: WebhookForwarderProtocol,
    *,
    general: RateLimitPolicy | None = None,
) -> httpx.AsyncClient:
    components = build_gateway_components(
        rate_limit_settings=RateLimitSettings(general=general or RateLimitPolicy(100, 200)),
        webhook_settings=build_webhook_settings(
            {
                platform: PlatformCredentials(secret=SECRET, verify_token=VERIFY_TOKEN)
                for platform in ("whatsapp", "messenger", "instagram", "webchat", "tawkto")
            }
        ),
        messaging_settings=MessagingSettings(),
        forwarder=forwarder,
    )
    app = create_app(components)
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    )


@pytest.mark.asyncio
async def test_post_without_signature_returns_401() -> None:
    forwarder = RecordingForwarder()

    async with _build_client(forwarder) as client:
        response = await client.post(WHATSAPP_PATH, content=b"{}")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
    assert forwarder.envelopes == []


@pytest.mark.asyncio
async def test_post_with_valid_signature_reaches_forwarder() -> None:
    forwarder = RecordingForwarder()
    body = b'{"object":"whatsapp_business_account"}'

    async with _build_client(forwarder) as client:
        response = await client.post(
            WHATSAPP_PATH,
            content=body,
            headers={
                "X-Hub-Signature-256": _signature(body),
                "Content-Type": "application/json",
                "X-Correlation-ID": "corr-e2e-1",
            },
        )

    assert response.status_code == 200
    assert response.json() == {"code": "SUCCESS", "message": "Webhook processed successfully"}
    assert response.headers["X-Correlation-ID"] == "corr-e2e-1"
    assert len(forwarder.envelopes) == 1
    assert forwarder.envelopes[0].body == body
    assert forwarder.envelopes[0].correlation_id == "corr-e2e-1"


@pytest.mark.asyncio
@pytest.mark.parametrize("platform", ["whatsapp", "messenger", "instagram"])
async def test_handshake_on_meta_routes(platform: str) -> None:
    async with _build_client(RecordingForwarder()) as client:
        ok = await client.get(
            f"/api/v1/integrations/webhooks/{platform}",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": VERIFY_TOKEN,
                "hub.challenge": "abc123",
            },
        )
        forbidden = await client.get(
            f"/api/v1/integrations/webhooks/{platform}",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "wrong",
                "hub.challenge": "abc123",
            },
        )

    assert ok.status_code == 200
    assert ok.text == "abc123"
    assert forbidden.status_code == 403
    assert "abc123" not in forbidden.text


@pytest.mark.asyncio
async def test_tenant_path_header_is_recorded_on_envelope() -> None:
    forwarder = RecordingForwarder()
    body = b"{}"

    async with _build_client(forwarder) as client:
        await client.post(
            "/api/v1/integrations/webhooks/webchat",
            content=body,
            headers={"X-Hub-Signature-256": _signature(body), "X-Tenant-ID": "acme"},
        )

    assert forwarder.envelopes[0].tenant_id == "acme"
    assert forwarder.envelopes[0].platform == "webchat"


@pytest.mark.asyncio
async def test_mercadopago_without_secret_returns_configuration_error() -> None:
    async with _build_client(RecordingForwarder()) as client:
        response = await client.post("/api/v1/webhooks/mercadopago", content=b"{}")

    assert response.status_code == 500
    assert response.json() == {
        "code": "CONFIGURATION_ERROR",
        "message": "Internal configuration error",
    }


@pytest.mark.asyncio
async def test_general_limiter_applies_before_webhook_pipeline() -> None:
    forwarder = RecordingForwarder()

    async with _build_client(forwarder, general=RateLimitPolicy(1, 1)) as client:
        first = await client.post(WHATSAPP_PATH, content=b"{}")
        second = await client.post(WHATSAPP_PATH, content=b"{}")

    assert first.status_code == 401
    assert second.status_code == 429
    assert second.json()["code"] == "RATE_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_metrics_endpoint_exposes_webhook_counters() -> None:
    async with _build_client(RecordingForwarder()) as client:
        await client.post(WHATSAPP_PATH, content=b"{}")
        response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "webhook_requests_total" in response.text
    assert 'outcome="rejected_unauthorized"' in response.text


@pytest.mark.asyncio
async def test_signed_body_with_nan_is_forwarded_as_text() -> None:
    delivered: list[dict[str, object]] = []

    def messaging(request: httpx.Request) -> httpx.Response:
        delivered.append(json.loads(request.content))
        return httpx.Response(202)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(messaging))
    forwarder = MessagingServiceForwarder(
        MessagingSettings(service_url="http://messaging:8080"),
        http_client=http_client,
    )
    body = b'{"entry": NaN}'

    async with _build_client(forwarder) as client:
        response = await client.post(
            WHATSAPP_PATH,
            content=body,
            headers={"X-Hub-Signature-256": _signature(body)},
        )
    await http_client.aclose()

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["code"] == "SUCCESS"
    assert [item["payload"] for item in delivered] == ['{"entry": NaN}']


@pytest.mark.asyncio
async def test_tenant_scoped_path_supplies_tenant_id() -> None:
    forwarder = RecordingForwarder()
    body = b'{"object":"whatsapp_business_account"}'
    headers = {"X-Hub-Signature-256": _signature(body), "X-Tenant-ID": "from-header"}
    tenant_path = "/api/v1/integrations/webhooks/tenants/acme/whatsapp"

    async with _build_client(forwarder) as client:
        from_path = await client.post(tenant_path, content=body, headers=headers)
        from_query = await client.post(
            tenant_path, content=body, headers=headers, params={"tenant_id": "globex"}
        )
        exposition = (await client.get("/metrics")).text

    assert from_path.status_code == 200
    assert from_query.status_code == 200
    assert [envelope.tenant_id for envelope in forwarder.envelopes] == ["acme", "globex"]
    assert 'endpoint="/api/v1/integrations/webhooks/tenants/{tenant_id}/whatsapp"' in exposition
    assert "/tenants/acme/" not in exposition


@pytest.mark.asyncio
async def test_tenant_scoped_path_serves_handshake() -> None:
    async with _build_client(RecordingForwarder()) as client:
        response = await client.get(
            "/api/v1/integrations/webhooks/tenants/acme/instagram",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": VERIFY_TOKEN,
                "hub.challenge": "abc123",
            },
        )

    assert response.status_code == 200
    assert response.text == "abc123"
