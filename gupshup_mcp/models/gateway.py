# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Enterprise gateway models."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Channel(str, Enum):
    """Enterprise gateway channels, each with its own credentials and endpoint."""

    SMS = "sms"
    WHATSAPP = "whatsapp"

    @property
    def label(self) -> str:
        return "SMS" if self is Channel.SMS else "WhatsApp"


@dataclass(frozen=True)
class CredentialPair:
    """userid/password pair for one channel."""

    user_id: str | None = None
    password: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.user_id and self.password)


GatewayStatus = Literal["success", "error", "unknown"]


class GatewayResponse(BaseModel):
    """Parsed legacy `status | code | message` gateway response."""

    raw: str = Field(..., description="Response body as received")
    status: GatewayStatus = Field(..., description="Classification of the first segment")
    code: str | None = Field(None, description="Second segment, when present")
    message: str = Field(..., description="Remaining segments, or the raw body")

    @classmethod
    def parse(cls, raw: str) -> "GatewayResponse":
        """Parse a pipe-delimited body."""
        parts = [part.strip() for part in raw.split("|")]
        head = parts[0].lower()
        if "success" in head:
            status: GatewayStatus = "success"
        elif "error" in head:
            status = "error"
        else:
            status = "unknown"
        return cls(
            raw=raw,
            status=status,
            code=parts[1] if len(parts) > 1 else None,
            message="|".join(parts[2:]) if len(parts) > 2 else raw,
        )


class CredentialStatus(BaseModel):
    """Which channels have a complete credential pair."""

    sms: bool
    whatsapp: bool
