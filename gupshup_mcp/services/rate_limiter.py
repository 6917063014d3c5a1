# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Outbound rate limiter for partner API calls.

Fixed-window token bucket per endpoint key. Buckets refill completely once
their window has elapsed, so bursts at window boundaries are possible. The
limiter never rejects: callers over budget are suspended until the window
ends.
"""

import asyncio
import re
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LimitConfig:
    """Requests allowed per window."""

    max_requests: int
    window_ms: int


@dataclass
class BucketState:
    tokens: int
    last_refill: float  # ms


ENDPOINT_LIMITS: list[tuple[re.Pattern[str], LimitConfig]] = [
    (re.compile(r"/templates$"), LimitConfig(max_requests=10, window_ms=60_000)),
    (re.compile(r"/token$"), LimitConfig(max_requests=10, window_ms=60_000)),
    (re.compile(r"/health$"), LimitConfig(max_requests=10, window_ms=60_000)),
    (re.compile(r"/capping$"), LimitConfig(max_requests=10, window_ms=60_000)),
    (re.compile(r"/template/analytics"), LimitConfig(max_requests=10, window_ms=60_000)),
    (re.compile(r"/subscription"), LimitConfig(max_requests=5, window_ms=60_000)),
    (re.compile(r"/media/"), LimitConfig(max_requests=10, window_ms=1_000)),
    (re.compile(r"/account/login"), LimitConfig(max_requests=10, window_ms=60_000)),
]

DEFAULT_LIMIT = LimitConfig(max_requests=10, window_ms=1_000)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """Per-endpoint token buckets.

    Buckets are keyed by the exact string given to acquire(). Callers that
    want query-string variants of a path to share a bucket must strip the
    query themselves.
    """

    def __init__(
        self,
        limits: list[tuple[re.Pattern[str], LimitConfig]] | None = None,
        default: LimitConfig = DEFAULT_LIMIT,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """
        Args:
            limits: Ordered (pattern, config) table, first match wins
            default: Config for endpoints matching no pattern
            clock: Millisecond clock (monotonic by default)
            sleep: Coroutine taking seconds (asyncio.sleep by default)
        """
        self._limits = ENDPOINT_LIMITS if limits is None else limits
        self._default = default
        self._clock = clock or _monotonic_ms
        self._sleep = sleep or asyncio.sleep
        self._buckets: dict[str, BucketState] = {}

    def get_limit_config(self, endpoint: str) -> LimitConfig:
        """Return the config of the first pattern matching endpoint."""
        for pattern, config in self._limits:
            if pattern.search(endpoint):
                return config
        return self._default

    async def acquire(self, endpoint: str) -> bool:
        """Take one token for endpoint, waiting for the window to end if empty."""
        config = self.get_limit_config(endpoint)
        now = self._clock()

        bucket = self._buckets.get(endpoint)
        if bucket is None:
            bucket = BucketState(tokens=config.max_requests, last_refill=now)
            self._buckets[endpoint] = bucket

        elapsed = now - bucket.last_refill
        if elapsed >= config.window_ms:
            bucket.tokens = config.max_requests
            bucket.last_refill = now

        if bucket.tokens > 0:
            bucket.tokens -= 1
            return True

        wait_ms = config.window_ms - elapsed
        logger.debug("Rate limit reached, waiting", endpoint=endpoint, wait_ms=wait_ms)
        await self._sleep(wait_ms / 1000)
        bucket.tokens = config.max_requests - 1
        bucket.last_refill = self._clock()
        return True
