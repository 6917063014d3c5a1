#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Exercise the Enterprise gateway client from the command line.

Reads the same GUPSHUP_* environment variables as the server.

Usage:
    python scripts/smoke_enterprise.py check
    python scripts/smoke_enterprise.py opt-in 919999999999
    python scripts/smoke_enterprise.py send-template 919999999999 1234567 var1=Rahul
    python scripts/smoke_enterprise.py send-sms 919999999999,918888888888 "Hello"
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from gupshup_mcp.clients import GupshupEnterpriseClient
from gupshup_mcp.config import get_settings
from gupshup_mcp.errors import GupshupError
from gupshup_mcp.models import GatewayResponse


def parse_variables(pairs: list[str]) -> dict[str, str]:
    variables = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        variables[key] = value
    return variables


def render(result: Any) -> str:
    if isinstance(result, GatewayResponse):
        result = result.model_dump()
    return json.dumps(result, indent=2)


async def run(args: argparse.Namespace) -> int:
    client = GupshupEnterpriseClient.from_settings(get_settings())
    try:
        if args.command == "check":
            result: Any = client.check_credentials()
            print(render(result.model_dump()))
            return 0
        if args.command == "opt-in":
            result = await client.whatsapp_opt_in(args.phone)
        elif args.command == "send-template":
            result = await client.whatsapp_send_template(
                send_to=args.phone,
                template_id=args.template_id,
                variables=args.variables,
            )
        else:
            result = await client.sms_send_text(send_to=args.phones, message=args.message)
        print(render(result))
        return 0
    except GupshupError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        await client.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gupshup Enterprise gateway smoke test")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Show which channels have credentials")

    opt_in = sub.add_parser("opt-in", help="Opt a phone number in for WhatsApp")
    opt_in.add_argument("phone")

    template = sub.add_parser("send-template", help="Send a WhatsApp template")
    template.add_argument("phone")
    template.add_argument("template_id")
    template.add_argument("variables", nargs="*", metavar="key=value")

    sms = sub.add_parser("send-sms", help="Send an SMS")
    sms.add_argument("phones", help="Comma-separated phone numbers")
    sms.add_argument("message")

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if args.command == "send-template":
        try:
            args.variables = parse_variables(args.variables)
        except ValueError as e:
            parser.error(str(e))
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
