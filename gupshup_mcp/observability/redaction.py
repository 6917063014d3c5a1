# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""
Redaction for gateway log metadata

Masks credentials, phone numbers and message bodies before a log line is
rendered. Rules are key-based: the same value is left alone under a neutral
key and masked under a sensitive one. Secret and phone markers match anywhere
in the key, ignoring case; send_to, msg, message and userid match exactly.
"""

import re
from typing import Any

REDACTED = "***REDACTED***"
MASK = "****"

SECRET_KEY_MARKERS = ("password", "token", "secret")
PHONE_KEY_MARKERS = ("phone",)
PHONE_KEYS = frozenset({"send_to"})
MESSAGE_KEYS = frozenset({"msg", "message"})
USERID_KEYS = frozenset({"userid"})

_NON_DIGITS = re.compile(r"\D")


def mask_phone(value: str) -> str:
    """Keep the first 5 and last 3 digits of a phone number (or list of them)."""
    digits = _NON_DIGITS.sub("", value)
    if len(digits) < 7:
        return MASK
    return f"{digits[:5]}{MASK}{digits[-3:]}"


def mask_userid(value: str) -> str:
    """Keep the first 2 and last 2 characters of a gateway user id."""
    if len(value) <= 4:
        return MASK
    return f"{value[:2]}{MASK}{value[-2:]}"


def mask_message(value: str) -> str:
    """Replace a message body with its length."""
    return f"[REDACTED_MESSAGE len={len(value)}]"


def _redact_string(key: str, value: str) -> str:
    key_lower = key.lower()
    if any(marker in key_lower for marker in SECRET_KEY_MARKERS):
        return REDACTED
    if key in PHONE_KEYS or any(marker in key_lower for marker in PHONE_KEY_MARKERS):
        return mask_phone(value)
    if key in MESSAGE_KEYS:
        return mask_message(value)
    if key in USERID_KEYS:
        return mask_userid(value)
    return value


def redact_value(key: str | None, value: Any) -> Any:
    """Redact a value according to the key it is stored under.

    Dicts are walked with their own keys, list elements inherit the key of
    the list.
    """
    if isinstance(value, dict):
        return redact_mapping(value)
    if isinstance(value, (list, tuple)):
        return [redact_value(key, item) for item in value]
    if isinstance(value, str) and key is not None:
        return _redact_string(key, value)
    return value


def redact_mapping(data: dict[str, Any]) -> dict[str, Any]:
    """Return a redacted copy of a metadata dict."""
    return {key: redact_value(str(key), value) for key, value in data.items()}
