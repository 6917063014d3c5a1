# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Enterprise gateway tools: credential check and raw requests."""

from typing import Any

from ..clients import GupshupEnterpriseClient
from ..models import GatewayRawRequestParams, GatewayResponse, ToolResult


def gateway_result(data: Any) -> ToolResult:
    """Render a gateway result (JSON passthrough or parsed pipe response)."""
    if isinstance(data, GatewayResponse):
        data = data.model_dump()
    return ToolResult.from_json(data)


async def check_gateway_credentials(client: GupshupEnterpriseClient) -> ToolResult:
    return ToolResult.from_json(client.check_credentials().model_dump())


async def gateway_raw_request(
    client: GupshupEnterpriseClient, params: GatewayRawRequestParams
) -> ToolResult:
    data = await client.gateway_request(
        params.endpoint,
        params.http_method,
        params.request_params,
    )
    return gateway_result(data)
