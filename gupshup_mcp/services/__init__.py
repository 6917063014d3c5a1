# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Shared client state: rate-limit buckets and token cache."""

from .rate_limiter import DEFAULT_LIMIT, ENDPOINT_LIMITS, LimitConfig, RateLimiter
from .token_manager import TokenManager

__all__ = [
    "DEFAULT_LIMIT",
    "ENDPOINT_LIMITS",
    "LimitConfig",
    "RateLimiter",
    "TokenManager",
]
