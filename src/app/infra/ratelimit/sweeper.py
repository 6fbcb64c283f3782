"""Varredura periódica de buckets ociosos dos limitadores."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.protocols.rate_limiter import RateLimiterProtocol

logger = logging.getLogger(__name__)


def sweep_once(limiters: Iterable[RateLimiterProtocol]) -> int:
    """Remove buckets ociosos de todos os limitadores. Retorna o total removido."""
    evicted_total = 0
    for limiter in limiters:
        evicted = limiter.evict_stale()
        if evicted:
            logger.debug(
                "rate_limit_buckets_evicted",
                extra={"limiter": limiter.name, "evicted": evicted},
            )
        evicted_total += evicted
    return evicted_total


async def run_sweeper(
    limiters: Iterable[RateLimiterProtocol],
    interval_seconds: float,
) -> None:
    """Loop de limpeza até cancelamento (shutdown do app)."""
    targets = tuple(limiters)
    logger.info(
        "rate_limit_sweeper_started",
        extra={"interval_seconds": interval_seconds, "limiters": [t.name for t in targets]},
    )
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            sweep_once(targets)
    finally:
        logger.info("rate_limit_sweeper_stopped")
