"""Resolução da identidade do cliente para rate limiting.

IP do cliente, na ordem de precedência dos headers do proxy/load balancer:
X-Forwarded-For, X-Real-IP, X-Client-IP e, por fim, o endereço remoto do
transporte. A ordem é fixa e acompanha a cadeia de proxies do deploy.

Tenant: query param `tenant_id`, path param `tenant_id`, header
`X-Tenant-ID`, nessa ordem. Sem nenhum deles, não há tenant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import Request

CLIENT_IP_HEADERS: tuple[str, ...] = ("X-Forwarded-For", "X-Real-IP", "X-Client-IP")
TENANT_PARAM = "tenant_id"
TENANT_HEADER = "X-Tenant-ID"
UNKNOWN_CLIENT = "unknown"


def resolve_client_ip(request: Request) -> str:
    """Retorna o IP do cliente conforme a precedência de headers.

    Em X-Forwarded-For com múltiplos saltos ("cliente, proxy1, proxy2")
    usa o primeiro, que identifica o cliente de origem.
    """
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header, "")
        candidate = value.split(",", 1)[0].strip()
        if candidate:
            return candidate

    if request.client is not None and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def resolve_tenant_id(request: Request) -> str | None:
    """Retorna o tenant_id do request, ou None se não identificado.

    Ordem: query `tenant_id`, path param `{tenant_id}` (rotas /tenants/...),
    header X-Tenant-ID.
    """
    tenant_id = (
        request.query_params.get(TENANT_PARAM)
        or request.path_params.get(TENANT_PARAM)
        or request.headers.get(TENANT_HEADER)
    )
    return tenant_id or None
