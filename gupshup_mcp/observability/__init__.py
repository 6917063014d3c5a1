# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Logging and redaction."""

from .logging_config import GatewayLogLevel, build_gateway_logger, configure_logging, redact_event
from .redaction import (
    MASK,
    REDACTED,
    mask_message,
    mask_phone,
    mask_userid,
    redact_mapping,
    redact_value,
)

__all__ = [
    "GatewayLogLevel",
    "MASK",
    "REDACTED",
    "build_gateway_logger",
    "configure_logging",
    "mask_message",
    "mask_phone",
    "mask_userid",
    "redact_event",
    "redact_mapping",
    "redact_value",
]
