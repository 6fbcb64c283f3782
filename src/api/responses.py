"""Respostas HTTP padronizadas do gateway.

Corpo uniforme: {"code": <identificador estável>, "message": <texto>}.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from utils.errors import GatewayError

SUCCESS_CODE = "SUCCESS"


def error_response(exc: GatewayError) -> JSONResponse:
    """Converte uma rejeição do pipeline em JSONResponse."""
    return JSONResponse(content=exc.to_payload(), status_code=exc.status_code)


def success_response(message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        content={"code": SUCCESS_CODE, "message": message},
        status_code=status_code,
    )


def webhook_error_response() -> JSONResponse:
    """Falha do handler downstream após validação bem-sucedida."""
    return JSONResponse(
        content={"code": "WEBHOOK_ERROR", "message": "Failed to process webhook"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
