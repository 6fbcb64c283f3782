"""Testes de config.logging.

Cobre: configure_logging, get_logger, CorrelationIdFilter,
create_json_formatter, create_text_formatter.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest
from pythonjsonlogger.json import JsonFormatter

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    create_text_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "event", level: int = logging.INFO, name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("INFO", logging.INFO),
            ("debug", logging.DEBUG),
            ("Warning", logging.WARNING),
            ("ERROR", logging.ERROR),
        ],
    )
    def test_sets_root_level_case_insensitive(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_existing_handlers_with_single_filtered_handler(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(correlation_id_getter=lambda: "corr-1")

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_text_output_uses_plain_formatter(self) -> None:
        configure_logging(json_output=False)
        assert not isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    def test_quiets_http_client_loggers(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "integration_gateway"


class TestGetLogger:
    def test_returns_named_singleton(self) -> None:
        logger = get_logger("api.pipeline")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "api.pipeline"
        assert get_logger("api.pipeline") is logger


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_injects_correlation_id_and_service(self) -> None:
        record = _record()
        assert CorrelationIdFilter("gateway", lambda: "corr-123").filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "gateway"

    def test_explicit_correlation_id_is_preserved(self) -> None:
        record = _record()
        record.correlation_id = "explicit-id"
        CorrelationIdFilter("gateway", lambda: "from-getter").filter(record)
        assert record.correlation_id == "explicit-id"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record(level=logging.ERROR)
        assert CorrelationIdFilter("gateway").filter(record) is True
        assert record.correlation_id == ""


class TestFormatters:
    """Testes para os formatters JSON e texto."""

    def test_required_fields_and_rename_map(self) -> None:
        assert REQUIRED_LOG_FIELDS == (
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        )
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_output_renames_fields_and_keeps_extras(self) -> None:
        record = _record("webhook_rejected", logging.ERROR, "api.pipeline.webhook_pipeline")
        record.correlation_id = "abc-123"
        record.service = "integration_gateway"
        record.platform = "whatsapp"
        record.reason = "signature_mismatch"

        payload = json.loads(create_json_formatter().format(record))

        assert payload["level"] == "ERROR"
        assert payload["logger"] == "api.pipeline.webhook_pipeline"
        assert payload["message"] == "webhook_rejected"
        assert payload["correlation_id"] == "abc-123"
        assert payload["platform"] == "whatsapp"
        assert payload["reason"] == "signature_mismatch"

    def test_text_output_includes_correlation_id(self) -> None:
        record = _record("app_starting", name="app")
        record.correlation_id = "corr-9"
        assert "[corr-9] app: app_starting" in create_text_formatter().format(record)


def test_end_to_end_json_line_carries_service_and_correlation_id() -> None:
    configure_logging(
        level="INFO",
        service_name="gateway_test",
        correlation_id_getter=lambda: "int-test-001",
    )
    stream = io.StringIO()
    logging.getLogger().handlers[0].setStream(stream)

    get_logger("integration.test").info("webhook_accepted", extra={"platform": "telegram"})

    payload = json.loads(stream.getvalue().strip())
    assert payload["service"] == "gateway_test"
    assert payload["correlation_id"] == "int-test-001"
    assert payload["platform"] == "telegram"
