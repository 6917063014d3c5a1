# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Gupshup MCP error codes, exceptions and HTTP error translation.

Every error raised by the gateway core inherits from GupshupError and carries
a machine-readable code, a human-readable message and a remediation hint
that the MCP layer can hand back to the LLM.

Tool result shape:
```json
{
  "error": "MISSING_CREDENTIALS",
  "message": "Missing SMS credentials. Set GUPSHUP_USER_ID and GUPSHUP_PASSWORD.",
  "details": {"settings": ["GUPSHUP_USER_ID", "GUPSHUP_PASSWORD"]},
  "suggestion": "Set the missing environment variables and restart the server"
}
```
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class GupshupErrorCode(str, Enum):
    """Standard error codes for the gateway core."""

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"

    # Validation
    RESERVED_PARAM = "RESERVED_PARAM"
    INVALID_PARAMS = "INVALID_PARAMS"

    # Upstream
    GATEWAY_HTTP_ERROR = "GATEWAY_HTTP_ERROR"
    API_ERROR = "API_ERROR"
    TOKEN_LOOKUP_FAILED = "TOKEN_LOOKUP_FAILED"
    UNEXPECTED_TOKEN_RESPONSE = "UNEXPECTED_TOKEN_RESPONSE"


ERROR_CODE_SUGGESTIONS: dict[GupshupErrorCode, str] = {
    GupshupErrorCode.CONFIGURATION_ERROR: "Set the missing environment variable and restart the server",
    GupshupErrorCode.MISSING_CREDENTIALS: "Set the missing environment variables and restart the server",
    GupshupErrorCode.RESERVED_PARAM: "Remove credential fields from the request; they are injected automatically",
    GupshupErrorCode.INVALID_PARAMS: "Verify required parameters are provided and have correct types",
    GupshupErrorCode.GATEWAY_HTTP_ERROR: "Check the gateway response body; retry later for transient failures",
    GupshupErrorCode.API_ERROR: "Follow the hint in the message and retry",
    GupshupErrorCode.TOKEN_LOOKUP_FAILED: "Verify the app id with list_apps and check GUPSHUP_PARTNER_TOKEN",
    GupshupErrorCode.UNEXPECTED_TOKEN_RESPONSE: "The partner API changed its token payload; report the details",
}


class GupshupError(Exception):
    """Base exception for gateway errors.

    Usage:
        raise GupshupError(
            code=GupshupErrorCode.INVALID_PARAMS,
            message="Parameter 'send_to' is required",
            details={"parameter": "send_to"},
        )
    """

    def __init__(
        self,
        code: GupshupErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        self.code = code if isinstance(code, GupshupErrorCode) else GupshupErrorCode(code)
        self.message = message
        self.details = details
        self.suggestion = suggestion or ERROR_CODE_SUGGESTIONS.get(self.code)
        super().__init__(message)

    def to_tool_result(self) -> dict[str, Any]:
        """Convert to the flat dict returned to MCP callers."""
        result: dict[str, Any] = {
            "error": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GupshupError):
    """Raised when a required setting is missing."""

    def __init__(self, setting: str, message: str | None = None):
        super().__init__(
            code=GupshupErrorCode.CONFIGURATION_ERROR,
            message=message or f"{setting} is required. Set it as an environment variable.",
            details={"setting": setting},
        )
        self.setting = setting


class MissingCredentialsError(GupshupError):
    """Raised when a channel's userid/password pair is incomplete."""

    def __init__(self, channel_label: str, settings: list[str]):
        super().__init__(
            code=GupshupErrorCode.MISSING_CREDENTIALS,
            message=f"Missing {channel_label} credentials. Set {' and '.join(settings)}.",
            details={"settings": settings},
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ReservedParamError(GupshupError):
    """Raised when caller params try to override injected credentials."""

    def __init__(self, param: str):
        super().__init__(
            code=GupshupErrorCode.RESERVED_PARAM,
            message=f'Param "{param}" is reserved and cannot be overridden.',
            details={"parameter": param},
        )


class InvalidParamsError(GupshupError):
    """Raised when required parameters are missing or invalid."""

    def __init__(self, param: str, reason: str = "is required"):
        super().__init__(
            code=GupshupErrorCode.INVALID_PARAMS,
            message=f"Parameter '{param}' {reason}",
            details={"parameter": param, "reason": reason},
        )


# =============================================================================
# Upstream Errors
# =============================================================================


class GatewayHTTPError(GupshupError):
    """Raised when the Enterprise gateway answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            code=GupshupErrorCode.GATEWAY_HTTP_ERROR,
            message=f"HTTP {status_code}: {body}",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.body = body


class GupshupAPIError(GupshupError):
    """Raised when the partner API answers with a non-success status or a non-JSON body."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            code=GupshupErrorCode.API_ERROR,
            message=translate_error(status_code, body),
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.body = body


class TokenLookupError(GupshupError):
    """Raised when the app token endpoint answers with a non-success status."""

    def __init__(self, app_id: str, status_code: int, body: str):
        super().__init__(
            code=GupshupErrorCode.TOKEN_LOOKUP_FAILED,
            message=f"Failed to get app token for {app_id}: {status_code} {body}",
            details={"app_id": app_id, "status_code": status_code},
        )
        self.app_id = app_id
        self.status_code = status_code


class UnexpectedTokenResponseError(GupshupError):
    """Raised when a successful token lookup lacks the token.token string."""

    def __init__(self, app_id: str, payload: str):
        super().__init__(
            code=GupshupErrorCode.UNEXPECTED_TOKEN_RESPONSE,
            message=f"Unexpected token response for app {app_id}: {payload}",
            details={"app_id": app_id},
        )
        self.app_id = app_id
        self.payload = payload


# =============================================================================
# HTTP Error Translation
# =============================================================================


@dataclass(frozen=True)
class ErrorRule:
    """Maps an exact status code or a body pattern to an actionable message."""

    match: int | re.Pattern[str]
    message: str

    def matches(self, status_code: int, body: str) -> bool:
        if isinstance(self.match, int):
            return self.match == status_code
        return self.match.search(body) is not None


ERROR_RULES: list[ErrorRule] = [
    ErrorRule(401, "Token expired or invalid. Check your GUPSHUP_PARTNER_TOKEN env var."),
    ErrorRule(429, "Rate limited on this endpoint. Wait for the rate-limit window to reset and retry."),
    ErrorRule(
        re.compile(r"Invalid app id", re.IGNORECASE),
        "App ID not found. Run `list_apps` to see valid app IDs.",
    ),
    ErrorRule(
        re.compile(r"Template not found", re.IGNORECASE),
        "Template not found. Run `list_templates` to see available templates.",
    ),
    ErrorRule(
        re.compile(r"enableSample is required", re.IGNORECASE),
        "Sample text is mandatory for template approval. "
        "Provide the `example` parameter with variables filled in.",
    ),
    ErrorRule(
        re.compile(r"Template analytics not enabled", re.IGNORECASE),
        "Template analytics not enabled. "
        "Run `enable_template_analytics` first before querying analytics.",
    ),
]


def translate_error(status_code: int, body: str, rules: list[ErrorRule] | None = None) -> str:
    """Turn a partner API failure into a message the caller can act on.

    Rules are evaluated in order and the first match wins. Unmatched failures
    fall back to a generic message embedding the status and raw body.
    """
    for rule in ERROR_RULES if rules is None else rules:
        if rule.matches(status_code, body):
            return rule.message
    return f"Gupshup API error ({status_code}): {body}"
