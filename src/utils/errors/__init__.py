"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    GatewayError,
    InfrastructureError,
    MessagingServiceError,
    RateLimitExceededError,
    UnauthorizedError,
)

__all__ = [
    "BadRequestError",
    "ConfigurationError",
    "ForbiddenError",
    "GatewayError",
    "InfrastructureError",
    "MessagingServiceError",
    "RateLimitExceededError",
    "UnauthorizedError",
]
