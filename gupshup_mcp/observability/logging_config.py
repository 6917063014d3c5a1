# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Structured logging setup.

Two streams are configured here:

- the server log, structlog over stdlib logging on stderr (stdout is the
  MCP stdio transport);
- the gateway request log, one redacted JSON line per event, gated by the
  GUPSHUP_LOG_LEVEL setting (off | info | debug).
"""

import logging
import sys
from typing import Any, Literal, TextIO

import structlog

from .redaction import redact_mapping

GatewayLogLevel = Literal["off", "info", "debug"]

# Gateway events are only emitted at info and debug.
_GATEWAY_LEVELS: dict[str, int] = {
    "off": logging.CRITICAL,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_RESERVED_EVENT_KEYS = frozenset({"event", "level", "timestamp"})


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure server-side structured logging on stderr."""
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )


def redact_event(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor masking sensitive metadata before rendering."""
    metadata = {k: v for k, v in event_dict.items() if k not in _RESERVED_EVENT_KEYS}
    event_dict.update(redact_mapping(metadata))
    return event_dict


def build_gateway_logger(
    level: GatewayLogLevel = "off",
    redact: bool = True,
    stream: TextIO | None = None,
) -> Any:
    """Build the per-client gateway request logger.

    Args:
        level: off suppresses everything, info drops debug lines
        redact: apply redact_event before rendering
        stream: destination for JSON lines (defaults to stderr)
    """
    processors: list[Any] = [structlog.processors.add_log_level]
    if redact:
        processors.append(redact_event)
    processors.extend(
        [
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.JSONRenderer(),
        ]
    )
    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream if stream is not None else sys.stderr),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_GATEWAY_LEVELS[level]),
        context_class=dict,
    )
