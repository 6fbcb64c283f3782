"""Testes da hierarquia de exceções do gateway."""

from __future__ import annotations

import logging

import pytest

from utils.errors import (
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    GatewayError,
    RateLimitExceededError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "code", "outcome"),
    [
        (UnauthorizedError("x"), 401, "UNAUTHORIZED", "rejected_unauthorized"),
        (BadRequestError("x"), 400, "INVALID_REQUEST", "rejected_bad_request"),
        (ForbiddenError("x"), 403, "FORBIDDEN", "rejected_forbidden"),
        (ConfigurationError("missing"), 500, "CONFIGURATION_ERROR", "rejected_config_error"),
    ],
)
def test_status_code_and_outcome(
    exc: GatewayError, status_code: int, code: str, outcome: str
) -> None:
    assert exc.status_code == status_code
    assert exc.code == code
    assert exc.outcome == outcome


def test_rate_limit_error_carries_limiter_and_key() -> None:
    exc = RateLimitExceededError(
        "Tenant rate limit exceeded",
        code="TENANT_RATE_LIMIT_EXCEEDED",
        limiter="tenant",
        key="acme",
    )

    assert exc.status_code == 429
    assert exc.reason == "tenant_limit"
    assert exc.log_level == logging.INFO
    assert exc.to_payload() == {
        "code": "TENANT_RATE_LIMIT_EXCEEDED",
        "message": "Tenant rate limit exceeded",
    }


def test_configuration_error_hides_reason_from_payload() -> None:
    exc = ConfigurationError("missing_webhook_secret")

    assert exc.reason == "missing_webhook_secret"
    assert "missing_webhook_secret" not in str(exc.to_payload())


def test_default_reason_derives_from_code() -> None:
    assert UnauthorizedError("Invalid").reason == "unauthorized"
