"""Middlewares HTTP do gateway.

Ordem de execução (externo -> interno):
CorrelationIdMiddleware -> RequestMetricsMiddleware -> RateLimitMiddleware
"""

from api.middleware.client_identity import resolve_client_ip, resolve_tenant_id
from api.middleware.correlation import CorrelationIdMiddleware
from api.middleware.metrics import RequestMetricsMiddleware
from api.middleware.rate_limit import RateLimitMiddleware

__all__ = [
    "CorrelationIdMiddleware",
    "RateLimitMiddleware",
    "RequestMetricsMiddleware",
    "resolve_client_ip",
    "resolve_tenant_id",
]
