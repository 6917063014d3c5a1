# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Partner account tools: apps, usage and app tokens."""

from urllib.parse import urlencode

from ..clients import GupshupClient
from ..models import ToolResult, UsageSummaryParams


def mask_token(token: str) -> str:
    if len(token) > 8:
        return f"{token[:3]}{'*' * (len(token) - 7)}{token[-4:]}"
    return "****"


async def list_apps(client: GupshupClient) -> ToolResult:
    data = await client.partner_request("GET", "/partner/account/api/partnerApps")
    return ToolResult.from_json(data.get("partnerApps") or [])


async def get_usage_summary(client: GupshupClient, params: UsageSummaryParams) -> ToolResult:
    query = urlencode({"from": params.from_date, "to": params.to_date})
    data = await client.app_request("GET", f"/partner/app/{{appId}}/usage?{query}", params.app_id)
    return ToolResult.from_json(data)


async def get_app_token(client: GupshupClient, app_id: str | None = None) -> ToolResult:
    """Fetch (or reuse) the app token and show it masked."""
    resolved = client.resolve_app_id(app_id)
    token = await client.token_manager.get_app_token(resolved)
    return ToolResult.from_text(
        f"App token for {resolved}: {mask_token(token)}\n\n"
        "Token is valid and cached. It is used internally for all app-scope API calls."
    )
