"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id chega no header X-Correlation-ID (ou é gerado), é injetado
em todos os logs e devolvido na resposta. Usa ContextVar para ser
thread/async-safe.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = "X-Correlation-ID"

# IDs aceitos do cliente: curtos e apenas ASCII seguro para logs
_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def sanitize_correlation_id(raw: str | None) -> str | None:
    """Retorna o ID se for seguro para logs; None caso contrário."""
    if raw is None:
        return None
    candidate = raw.strip()
    if not _SAFE_ID_RE.match(candidate):
        return None
    return candidate


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID recebido. Se None ou inseguro, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = sanitize_correlation_id(correlation_id) or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
