# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Configuration module."""

from .settings import (
    DEFAULT_BASE_URL,
    DEFAULT_SMS_ENDPOINT,
    DEFAULT_WHATSAPP_ENDPOINT,
    RETRY_LIMITS,
    Settings,
    clamp_setting,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SMS_ENDPOINT",
    "DEFAULT_WHATSAPP_ENDPOINT",
    "RETRY_LIMITS",
    "Settings",
    "clamp_setting",
    "clear_settings_cache",
    "get_settings",
]
