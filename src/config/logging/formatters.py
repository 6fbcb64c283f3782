"""Formatters de logging estruturado.

Define o formatter JSON com campos obrigatórios e o formatter texto usado
em desenvolvimento local.

Nunca incluir secrets, tokens ou payloads brutos nos campos extras.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado (ordem estável na saída)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Campos passados via `extra` (ex.: platform, reason, status_code) são
    anexados ao objeto JSON.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "WARNING",
            "logger": "api.pipeline.webhook_pipeline",
            "message": "webhook_rejected",
            "correlation_id": "abc-123",
            "service": "integration_gateway",
            "platform": "whatsapp",
            "reason": "signature_mismatch"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Formatter legível para terminal (desenvolvimento/testes)."""
    return logging.Formatter(TEXT_FORMAT)
