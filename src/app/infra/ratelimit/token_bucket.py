"""Rate limiter token bucket em memória, por chave.

Cada chave recebe um bucket criado na primeira requisição, com capacidade
`burst` e reposição contínua de `rps` tokens/segundo. Cada requisição
admitida consome exatamente um token.

O mapa de buckets é o único estado mutável compartilhado do pipeline e é
protegido por um único lock (operação O(1)). Buckets ociosos além do TTL
são removidos por evict_stale(), chamado periodicamente pelo app.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.protocols.rate_limiter import RateLimiterProtocol

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_BUCKET_TTL_SECONDS = 600.0


@dataclass(slots=True)
class TokenBucket:
    """Estado de um bucket. Invariante: 0 <= tokens <= capacity."""

    capacity: float
    refill_rate: float
    tokens: float
    last_refill: float
    last_seen: float

    def refill(self, now: float) -> None:
        elapsed = max(0.0, now - self.last_refill)
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def try_consume(self, now: float) -> bool:
        """Repõe tokens até `now` e consome um se disponível."""
        self.refill(now)
        self.last_seen = now
        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        return False


class TokenBucketRateLimiter(RateLimiterProtocol):
    """Limitador por chave com um token bucket por chave.

    Args:
        rps: Tokens repostos por segundo (> 0)
        burst: Capacidade do bucket (>= 1)
        name: Identificador do limitador em logs/métricas
        bucket_ttl_seconds: Ociosidade após a qual o bucket é descartado
        clock: Relógio monotônico (injetável em testes)
    """

    def __init__(
        self,
        rps: float,
        burst: int,
        *,
        name: str = "general",
        bucket_ttl_seconds: float = DEFAULT_BUCKET_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rps <= 0:
            raise ValueError("rps deve ser > 0")
        if burst < 1:
            raise ValueError("burst deve ser >= 1")
        if bucket_ttl_seconds <= 0:
            raise ValueError("bucket_ttl_seconds deve ser > 0")

        self.name = name
        self._rps = float(rps)
        self._burst = float(burst)
        self._ttl = bucket_ttl_seconds
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        self._lock = threading.Lock()

    @property
    def rps(self) -> float:
        return self._rps

    @property
    def burst(self) -> int:
        return int(self._burst)

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = TokenBucket(
                    capacity=self._burst,
                    refill_rate=self._rps,
                    tokens=self._burst,
                    last_refill=now,
                    last_seen=now,
                )
                self._buckets[key] = bucket
            return bucket.try_consume(now)

    def evict_stale(self, now: float | None = None) -> int:
        current = self._clock() if now is None else now
        cutoff = current - self._ttl
        with self._lock:
            stale = [key for key, bucket in self._buckets.items() if bucket.last_seen < cutoff]
            for key in stale:
                del self._buckets[key]
        return len(stale)

    def tokens_for(self, key: str) -> float | None:
        """Tokens disponíveis agora para a chave (None se sem bucket)."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                return None
            bucket.refill(now)
            return bucket.tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
