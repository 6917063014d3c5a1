# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Application settings using Pydantic Settings."""

import math
from functools import lru_cache
from typing import Any, Literal

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://partner.gupshup.io"
DEFAULT_SMS_ENDPOINT = "https://enterprise.smsgupshup.com/GatewayAPI/rest"
DEFAULT_WHATSAPP_ENDPOINT = "https://media.smsgupshup.com/GatewayAPI/rest"

# field: (default, lower, upper)
RETRY_LIMITS: dict[str, tuple[int, int, int]] = {
    "max_retries": (3, 0, 10),
    "retry_base_ms": (300, 50, 10_000),
    "retry_max_ms": (5000, 100, 60_000),
    "retry_jitter_ms": (150, 0, 10_000),
}


def clamp_setting(value: Any, default: int, lower: int, upper: int) -> int:
    """Floor a numeric setting into [lower, upper].

    None, NaN and non-numeric input fall back to default.
    """
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return int(math.floor(min(upper, max(lower, number))))


class Settings(BaseSettings):
    """Gateway configuration settings.

    All settings are read from GUPSHUP_* environment variables (or a .env
    file). Credentials are optional here; the clients report what is missing
    on first use.
    """

    model_config = SettingsConfigDict(
        env_prefix="GUPSHUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "gupshup-mcp"
    app_version: str = "0.2.0"

    # Partner API
    partner_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_app_id: str | None = None

    # Enterprise gateway (SMS / WhatsApp)
    user_id: str | None = None
    password: str | None = None
    whatsapp_user_id: str | None = None
    whatsapp_password: str | None = None
    api_endpoint: str = DEFAULT_SMS_ENDPOINT
    whatsapp_api_endpoint: str = DEFAULT_WHATSAPP_ENDPOINT

    # Gateway request logging
    log_level: Literal["off", "info", "debug"] = "off"
    redact_logs: bool = True

    # Retry tuning, clamped to RETRY_LIMITS
    max_retries: int = 3
    retry_base_ms: int = 300
    retry_max_ms: int = 5000
    retry_jitter_ms: int = 150

    # HTTP
    timeout_seconds: float = 30.0

    # Server logging (stderr; stdout carries the MCP protocol)
    server_log_level: str = "INFO"
    server_log_format: Literal["json", "text"] = "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept OFF/Info/DEBUG spellings."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("server_log_level")
    @classmethod
    def validate_server_log_level(cls, v: str) -> str:
        """Validate server log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("max_retries", "retry_base_ms", "retry_max_ms", "retry_jitter_ms", mode="before")
    @classmethod
    def clamp_retry_setting(cls, v: Any, info: ValidationInfo) -> int:
        """Out-of-range or malformed values are clamped, not rejected."""
        return clamp_setting(v, *RETRY_LIMITS[info.field_name])

    @property
    def has_partner_credentials(self) -> bool:
        return bool(self.partner_token)

    @property
    def has_sms_credentials(self) -> bool:
        return bool(self.user_id and self.password)

    @property
    def has_whatsapp_credentials(self) -> bool:
        return bool(self.whatsapp_user_id and self.whatsapp_password)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
