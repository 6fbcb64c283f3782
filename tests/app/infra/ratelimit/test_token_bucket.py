"""Testes do TokenBucketRateLimiter."""

from __future__ import annotations

import threading

import pytest

from app.infra.ratelimit import TokenBucketRateLimiter
from tests.fakes.fake_clock import FakeClock


def test_allows_burst_then_denies_next_request() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=2, burst=5, clock=clock)

    results = [limiter.allow("1.1.1.1") for _ in range(5)]

    assert results == [True] * 5
    assert limiter.allow("1.1.1.1") is False


def test_refills_exactly_one_token_after_one_interval() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=2, burst=3, clock=clock)
    for _ in range(3):
        limiter.allow("key")
    assert limiter.allow("key") is False

    clock.advance(0.5)

    assert limiter.allow("key") is True
    assert limiter.allow("key") is False


def test_refill_is_capped_at_burst() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=10, burst=2, clock=clock)
    limiter.allow("key")

    clock.advance(3600)

    assert limiter.tokens_for("key") == 2.0
    assert [limiter.allow("key") for _ in range(3)] == [True, True, False]


def test_keys_are_isolated() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=1, burst=1, clock=clock)

    assert limiter.allow("A") is True
    assert limiter.allow("A") is False
    assert limiter.allow("B") is True


def test_evict_stale_removes_only_idle_buckets() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=1, burst=1, bucket_ttl_seconds=600, clock=clock)
    limiter.allow("idle")
    clock.advance(601)
    limiter.allow("active")

    evicted = limiter.evict_stale()

    assert evicted == 1
    assert len(limiter) == 1
    assert limiter.tokens_for("idle") is None
    assert limiter.tokens_for("active") is not None


def test_evicted_key_starts_with_full_bucket() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=0.001, burst=2, bucket_ttl_seconds=10, clock=clock)
    limiter.allow("ip")
    limiter.allow("ip")
    assert limiter.allow("ip") is False

    clock.advance(11)
    limiter.evict_stale()

    assert limiter.allow("ip") is True
    assert limiter.allow("ip") is True


def test_tokens_for_unknown_key_returns_none() -> None:
    limiter = TokenBucketRateLimiter(rps=1, burst=1)
    assert limiter.tokens_for("missing") is None


@pytest.mark.parametrize(
    ("rps", "burst", "ttl"),
    [(0, 1, 600), (-1, 1, 600), (1, 0, 600), (1, 1, 0)],
)
def test_invalid_configuration_raises(rps: float, burst: int, ttl: float) -> None:
    with pytest.raises(ValueError):
        TokenBucketRateLimiter(rps=rps, burst=burst, bucket_ttl_seconds=ttl)


def test_concurrent_allow_never_exceeds_burst() -> None:
    clock = FakeClock()
    limiter = TokenBucketRateLimiter(rps=1, burst=50, clock=clock)
    admitted: list[bool] = []
    lock = threading.Lock()

    def worker() -> None:
        for _ in range(20):
            result = limiter.allow("shared")
            with lock:
                admitted.append(result)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(admitted) == 50
    assert limiter.tokens_for("shared") == 0.0
