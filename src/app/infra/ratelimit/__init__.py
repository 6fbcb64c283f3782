"""Rate limiting em memória (token bucket por chave)."""

from app.infra.ratelimit.sweeper import run_sweeper, sweep_once
from app.infra.ratelimit.token_bucket import TokenBucket, TokenBucketRateLimiter

__all__ = ["TokenBucket", "TokenBucketRateLimiter", "run_sweeper", "sweep_once"]
