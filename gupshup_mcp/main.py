# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Gupshup MCP server entry point (stdio transport)."""

import sys

import structlog

from .config import Settings, get_settings
from .observability import configure_logging
from .server import create_server

logger = structlog.get_logger(__name__)


def has_any_credentials(settings: Settings) -> bool:
    """At least one Enterprise credential pair or a partner token."""
    return (
        settings.has_sms_credentials
        or settings.has_whatsapp_credentials
        or settings.has_partner_credentials
    )


def main() -> None:
    """Run the MCP server over stdio."""
    settings = get_settings()
    configure_logging(settings.server_log_level, settings.server_log_format)

    if not has_any_credentials(settings):
        logger.error(
            "No Gupshup credentials configured",
            hint=(
                "Set GUPSHUP_USER_ID and GUPSHUP_PASSWORD, "
                "GUPSHUP_WHATSAPP_USER_ID and GUPSHUP_WHATSAPP_PASSWORD, "
                "or GUPSHUP_PARTNER_TOKEN"
            ),
        )
        sys.exit(1)

    logger.info("Starting Gupshup MCP server", version=settings.app_version)
    mcp = create_server(settings)
    mcp.run()


if __name__ == "__main__":
    main()
