"""Endpoints de health check, readiness e métricas."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from config.settings import get_base_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    code: str = "SUCCESS"
    message: str
    data: dict[str, Any]


@dataclass(frozen=True, slots=True)
class ComponentCheck:
    """Resultado de checagem de componente."""

    status: Literal["ok", "degraded", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    settings = get_base_settings()
    return HealthResponse(
        message="Service is healthy",
        data={
            "status": "healthy",
            "service": settings.service_name,
            "environment": settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: pipeline montado e forwarder configurado.

    Forwarder sem URL deixa o serviço `degraded` (aceita e descarta
    webhooks), mas ainda pronto.
    """
    components = getattr(request.app.state, "components", None)
    pipeline_check = (
        ComponentCheck(status="ok")
        if components is not None
        else ComponentCheck(status="failed", error="not_initialized")
    )
    messaging_check = _check_messaging(components)

    ready = pipeline_check.status == "ok"
    payload = {
        "code": "SUCCESS" if ready else "NOT_READY",
        "message": "Service is ready" if ready else "Service is not ready",
        "data": {
            "checks": {
                "pipeline": pipeline_check.as_dict(),
                "messaging_service": messaging_check.as_dict(),
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


@router.get("/metrics", include_in_schema=False)
async def metrics_endpoint(request: Request) -> Response:
    """Exposição Prometheus (pull)."""
    metrics = request.app.state.components.metrics
    return Response(content=metrics.render(), media_type=metrics.content_type)


def _check_messaging(components: Any | None) -> ComponentCheck:
    if components is None:
        return ComponentCheck(status="failed", error="not_initialized")
    if not components.messaging_settings.enabled:
        return ComponentCheck(status="degraded", error="not_configured")
    return ComponentCheck(status="ok")
