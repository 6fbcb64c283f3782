"""Settings de rate limiting.

Três limitadores independentes, cada um com seu par (rps, burst):
- general: por IP, em todas as rotas
- webhook: por IP, apenas nas rotas de ingestão de webhook
- tenant: por tenant_id, quando o request identifica um tenant
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class RateLimitPolicy:
    """Orçamento de um token bucket.

    Attributes:
        rps: Tokens repostos por segundo
        burst: Capacidade máxima do bucket
    """

    rps: float
    burst: int

    def validate(self, prefix: str) -> list[str]:
        errors: list[str] = []
        if self.rps <= 0:
            errors.append(f"{prefix}_RPS deve ser > 0")
        if self.burst < 1:
            errors.append(f"{prefix}_BURST deve ser >= 1")
        return errors


@dataclass(frozen=True)
class RateLimitSettings:
    """Configurações dos três limitadores e da limpeza de buckets.

    Attributes:
        general: Política do limitador geral (por IP)
        webhook: Política do limitador de webhooks (por IP)
        tenant: Política do limitador por tenant
        bucket_ttl_seconds: Tempo ocioso após o qual um bucket é descartado
        sweep_interval_seconds: Intervalo entre varreduras de buckets ociosos
    """

    general: RateLimitPolicy = field(default_factory=lambda: RateLimitPolicy(100, 200))
    webhook: RateLimitPolicy = field(default_factory=lambda: RateLimitPolicy(50, 100))
    tenant: RateLimitPolicy = field(default_factory=lambda: RateLimitPolicy(20, 40))
    bucket_ttl_seconds: float = 600.0
    sweep_interval_seconds: float = 60.0

    def validate(self) -> list[str]:
        """Valida as políticas e os intervalos de limpeza.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []
        errors.extend(self.general.validate("RATE_LIMIT"))
        errors.extend(self.webhook.validate("WEBHOOK_RATE_LIMIT"))
        errors.extend(self.tenant.validate("TENANT_RATE_LIMIT"))

        if self.bucket_ttl_seconds <= 0:
            errors.append("RATE_LIMIT_BUCKET_TTL_SECONDS deve ser > 0")

        if self.sweep_interval_seconds <= 0:
            errors.append("RATE_LIMIT_SWEEP_INTERVAL_SECONDS deve ser > 0")

        return errors


def _load_policy(prefix: str, default_rps: str, default_burst: str) -> RateLimitPolicy:
    return RateLimitPolicy(
        rps=float(os.getenv(f"{prefix}_RPS", default_rps)),
        burst=int(os.getenv(f"{prefix}_BURST", default_burst)),
    )


def _load_from_env() -> RateLimitSettings:
    """Carrega RateLimitSettings a partir de variáveis de ambiente."""
    return RateLimitSettings(
        general=_load_policy("RATE_LIMIT", "100", "200"),
        webhook=_load_policy("WEBHOOK_RATE_LIMIT", "50", "100"),
        tenant=_load_policy("TENANT_RATE_LIMIT", "20", "40"),
        bucket_ttl_seconds=float(os.getenv("RATE_LIMIT_BUCKET_TTL_SECONDS", "600")),
        sweep_interval_seconds=float(
            os.getenv("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", "60")
        ),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Retorna instância cacheada de RateLimitSettings."""
    return _load_from_env()
