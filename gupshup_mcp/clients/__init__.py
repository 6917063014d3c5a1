# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Gupshup HTTP clients."""

from .enterprise_client import GupshupEnterpriseClient, parse_gateway_body
from .partner_client import GupshupClient
from .transport import RetryingTransport, RetryPolicy, is_retryable_error

__all__ = [
    "GupshupClient",
    "GupshupEnterpriseClient",
    "RetryPolicy",
    "RetryingTransport",
    "is_retryable_error",
    "parse_gateway_body",
]
