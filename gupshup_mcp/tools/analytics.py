# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Template analytics and app health tools."""

import asyncio
import json
from urllib.parse import urlencode

from ..clients import GupshupClient
from ..models import CompareTemplatesParams, EnableAnalyticsParams, GetAnalyticsParams, ToolResult

ANALYTICS_PAGE_LIMIT = 30


async def enable_template_analytics(client: GupshupClient, params: EnableAnalyticsParams) -> ToolResult:
    data = await client.app_request(
        "POST",
        "/partner/app/{appId}/template/analytics",
        params.app_id,
        {"enable": params.enable},
    )
    state = "enabled" if params.enable else "disabled"
    return ToolResult.from_text(f"Template analytics {state}.\n{json.dumps(data, indent=2)}")


async def get_template_analytics(client: GupshupClient, params: GetAnalyticsParams) -> ToolResult:
    query = {
        "start": str(params.start),
        "end": str(params.end),
        "template_ids": ",".join(params.template_ids),
        "limit": str(ANALYTICS_PAGE_LIMIT),
    }
    if params.granularity:
        query["granularity"] = params.granularity.value
    if params.metric_types:
        query["metric_types"] = ",".join(m.value for m in params.metric_types)

    data = await client.app_request(
        "GET",
        f"/partner/app/{{appId}}/template/analytics?{urlencode(query)}",
        params.app_id,
    )
    return ToolResult.from_json(data.get("template_analytics") or [])


async def compare_templates(client: GupshupClient, params: CompareTemplatesParams) -> ToolResult:
    query = urlencode(
        {
            "templateList": ",".join(params.template_list),
            "start": str(params.start),
            "end": str(params.end),
        }
    )
    data = await client.app_request(
        "GET",
        f"/partner/app/{{appId}}/template/analytics/{params.template_id}/compare?{query}",
        params.app_id,
    )
    return ToolResult.from_json(data)


async def get_app_health(client: GupshupClient, app_id: str | None = None) -> ToolResult:
    """Health, quality rating and wallet balance in one result."""
    health, ratings, wallet = await asyncio.gather(
        client.app_request("GET", "/partner/app/{appId}/health", app_id),
        client.app_request("GET", "/partner/app/{appId}/ratings", app_id),
        client.app_request("GET", "/partner/app/{appId}/wallet/balance", app_id),
    )
    return ToolResult.from_json({"health": health, "ratings": ratings, "wallet": wallet})
