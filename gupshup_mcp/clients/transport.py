# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Retrying HTTP transport shared by the gateway clients.

Retries transient failures (network errors, 429 and 5xx gateway statuses)
with exponential backoff plus jitter. Whatever response ends the loop is
handed back to the caller, which decides how to report a failure.
"""

import asyncio
import math
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx
import structlog

from ..config import RETRY_LIMITS, clamp_setting

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})
RETRYABLE_ERROR_MARKERS = ("timeout", "network", "fetch", "econnreset")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry tuning. Build with from_config() to get clamped values."""

    max_retries: int = 3
    retry_base_ms: int = 300
    retry_max_ms: int = 5000
    retry_jitter_ms: int = 150

    @classmethod
    def from_config(
        cls,
        max_retries: Any = None,
        retry_base_ms: Any = None,
        retry_max_ms: Any = None,
        retry_jitter_ms: Any = None,
    ) -> "RetryPolicy":
        """Clamp raw configuration into range instead of rejecting it."""
        return cls(
            max_retries=clamp_setting(max_retries, *RETRY_LIMITS["max_retries"]),
            retry_base_ms=clamp_setting(retry_base_ms, *RETRY_LIMITS["retry_base_ms"]),
            retry_max_ms=clamp_setting(retry_max_ms, *RETRY_LIMITS["retry_max_ms"]),
            retry_jitter_ms=clamp_setting(retry_jitter_ms, *RETRY_LIMITS["retry_jitter_ms"]),
        )

    @classmethod
    def disabled(cls) -> "RetryPolicy":
        return cls(max_retries=0)

    def backoff_ms(self, attempt: int, random_fn: Callable[[], float] = random.random) -> int:
        """Delay before retry number attempt + 1."""
        jitter = math.floor(random_fn() * (self.retry_jitter_ms + 1))
        return min(self.retry_max_ms, self.retry_base_ms * 2**attempt + jitter)


def is_retryable_error(exc: Exception) -> bool:
    """Timeouts and network-level failures are worth another attempt."""
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    text = str(exc).lower()
    return any(marker in text for marker in RETRYABLE_ERROR_MARKERS)


class RetryingTransport:
    """Sends one logical request, retrying transient failures."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        random_fn: Callable[[], float] | None = None,
        logger: Any = None,
    ):
        """
        Args:
            http_client: Client used for every attempt
            policy: Retry tuning (RetryPolicy() when omitted)
            sleep: Coroutine taking seconds (asyncio.sleep by default)
            random_fn: Jitter source in [0, 1)
            logger: structlog logger for retry events
        """
        self._http_client = http_client
        self.policy = policy or RetryPolicy()
        self._sleep = sleep or asyncio.sleep
        self._random = random_fn or random.random
        self._logger = logger or structlog.get_logger(__name__)

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: str | None = None,
    ) -> httpx.Response:
        """Send with retries and return the last response.

        Raises:
            Exception: Whatever the last attempt raised, when it is not retryable
                or retries are exhausted
        """
        attempt = 0
        while True:
            try:
                response = await self._http_client.request(
                    method, url, headers=headers, content=content
                )
            except Exception as e:
                if attempt < self.policy.max_retries and is_retryable_error(e):
                    await self._backoff(attempt, reason=str(e) or type(e).__name__)
                    attempt += 1
                    continue
                raise

            if response.is_success:
                return response

            if response.status_code in RETRYABLE_STATUSES and attempt < self.policy.max_retries:
                await self._backoff(attempt, reason=f"HTTP {response.status_code}")
                attempt += 1
                continue

            return response

    async def _backoff(self, attempt: int, reason: str) -> None:
        delay_ms = self.policy.backoff_ms(attempt, self._random)
        self._logger.info(
            "gateway.retry",
            attempt=attempt + 1,
            max_retries=self.policy.max_retries,
            delay_ms=delay_ms,
            reason=reason,
        )
        await self._sleep(delay_ms / 1000)
