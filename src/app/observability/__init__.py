"""Observabilidade: correlation_id e métricas Prometheus.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import MetricsRecorder
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    sanitize_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import MetricsRecorder, platform_from_path

__all__ = [
    "CORRELATION_HEADER",
    "MetricsRecorder",
    "generate_correlation_id",
    "get_correlation_id",
    "platform_from_path",
    "reset_correlation_id",
    "sanitize_correlation_id",
    "set_correlation_id",
]
