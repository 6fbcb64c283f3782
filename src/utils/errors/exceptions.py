"""Exceções do gateway.

Duas famílias:
- GatewayError: rejeições do pipeline de validação, mapeadas para HTTP.
- InfrastructureError: falhas de IO com serviços downstream.
"""

from __future__ import annotations

import logging


class GatewayError(Exception):
    """Base para rejeições de request com resposta estruturada.

    Attributes:
        status_code: Status HTTP da resposta
        code: Identificador estável exposto ao cliente
        message: Texto legível exposto ao cliente
        reason: Motivo detalhado apenas para logs (sem PII)
        outcome: Estado terminal do pipeline
        log_level: Severidade usada no log da rejeição
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    outcome: str = "rejected_internal"
    log_level: int = logging.ERROR

    def __init__(
        self,
        message: str,
        *,
        reason: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message
        self.reason = reason or self.code.lower()

    def to_payload(self) -> dict[str, str]:
        """Corpo JSON uniforme de erro."""
        return {"code": self.code, "message": self.message}


class RateLimitExceededError(GatewayError):
    """Orçamento de requisições esgotado (esperado sob carga, só contado)."""

    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"
    outcome = "rejected_rate_limit"
    log_level = logging.INFO

    def __init__(
        self,
        message: str,
        *,
        code: str,
        limiter: str,
        key: str,
    ) -> None:
        super().__init__(message, reason=f"{limiter}_limit", code=code)
        self.limiter = limiter
        self.key = key


class UnauthorizedError(GatewayError):
    """Assinatura ou token secreto ausente/inválido."""

    status_code = 401
    code = "UNAUTHORIZED"
    outcome = "rejected_unauthorized"


class BadRequestError(GatewayError):
    """Parâmetros de protocolo malformados (falha do cliente)."""

    status_code = 400
    code = "INVALID_REQUEST"
    outcome = "rejected_bad_request"
    log_level = logging.WARNING


class ForbiddenError(GatewayError):
    """Verify token do handshake não confere."""

    status_code = 403
    code = "FORBIDDEN"
    outcome = "rejected_forbidden"


class ConfigurationError(GatewayError):
    """Secret/token ausente para a plataforma (falha do operador).

    A mensagem ao cliente é genérica para não revelar qual credencial falta;
    o detalhe fica em `reason`.
    """

    status_code = 500
    code = "CONFIGURATION_ERROR"
    outcome = "rejected_config_error"

    def __init__(self, reason: str) -> None:
        super().__init__("Internal configuration error", reason=reason)


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class MessagingServiceError(InfrastructureError):
    """Falha ao encaminhar payload ao serviço de mensageria."""
