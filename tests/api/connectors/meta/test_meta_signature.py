"""Testes da validação HMAC-SHA256 (X-Hub-Signature-256)."""

from __future__ import annotations

import pytest

from api.connectors.meta.webhook import compute_signature, verify_signature
from utils.errors import ConfigurationError, UnauthorizedError

SECRET = "testsecret"
BODY = b"{}"
# HMAC-SHA256("testsecret", "{}"), calculado com `openssl dgst -sha256 -hmac testsecret`.
KNOWN_DIGEST = "9d3515542a0f0bd9f5f4caee4692c621b9ef29f8038b891b4f5509b04851dba3"


def test_compute_signature_matches_known_vector() -> None:
    assert compute_signature(SECRET, BODY) == KNOWN_DIGEST
    assert compute_signature(SECRET, BODY) == compute_signature(SECRET, BODY)


def test_valid_signature_returns_body_unchanged() -> None:
    body = b'{"object": "whatsapp_business_account"}'
    header = f"sha256={compute_signature(SECRET, body)}"

    assert verify_signature(body, header, SECRET) is body


def test_signature_without_prefix_is_accepted() -> None:
    assert verify_signature(BODY, KNOWN_DIGEST, SECRET) == BODY


def test_missing_secret_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        verify_signature(BODY, f"sha256={KNOWN_DIGEST}", "")

    assert exc_info.value.status_code == 500
    assert exc_info.value.reason == "missing_webhook_secret"
    assert "secret" not in exc_info.value.message.lower()


@pytest.mark.parametrize("header", [None, ""])
def test_missing_signature_header_is_unauthorized(header: str | None) -> None:
    with pytest.raises(UnauthorizedError) as exc_info:
        verify_signature(BODY, header, SECRET)

    assert exc_info.value.code == "UNAUTHORIZED"
    assert exc_info.value.reason == "missing_signature"


def test_each_flipped_body_byte_fails() -> None:
    body = b'{"entry": [1, 2, 3]}'
    header = f"sha256={compute_signature(SECRET, body)}"

    for index in range(len(body)):
        tampered = bytearray(body)
        tampered[index] ^= 0x01
        with pytest.raises(UnauthorizedError):
            verify_signature(bytes(tampered), header, SECRET)


def test_each_flipped_signature_char_fails() -> None:
    for index, char in enumerate(KNOWN_DIGEST):
        replacement = "0" if char != "0" else "1"
        tampered = KNOWN_DIGEST[:index] + replacement + KNOWN_DIGEST[index + 1 :]
        with pytest.raises(UnauthorizedError) as exc_info:
            verify_signature(BODY, f"sha256={tampered}", SECRET)
        assert exc_info.value.reason == "signature_mismatch"


def test_reserialized_body_fails() -> None:
    compact = b'{"a":1}'
    header = f"sha256={compute_signature(SECRET, compact)}"

    with pytest.raises(UnauthorizedError):
        verify_signature(b'{"a": 1}', header, SECRET)
