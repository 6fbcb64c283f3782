"""Construção manual de Requests Starlette para testes de unidade."""

from __future__ import annotations

from urllib.parse import urlencode

from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route


async def _endpoint(request: Request) -> PlainTextResponse:
    return PlainTextResponse("")


def build_request(
    *,
    method: str = "POST",
    path: str = "/api/v1/integrations/webhooks/whatsapp",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    query: dict[str, str] | None = None,
    path_params: dict[str, str] | None = None,
    client: tuple[str, int] | None = ("10.0.0.1", 5000),
    route_path: str | None = None,
) -> Request:
    """Request já roteado; route_path é o template casado (default: path)."""
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "raw_path": path.encode(),
        "query_string": urlencode(query or {}).encode(),
        "headers": [
            (key.lower().encode(), value.encode()) for key, value in (headers or {}).items()
        ],
        "path_params": path_params or {},
        "client": client,
        "route": Route(route_path or path, endpoint=_endpoint),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)
