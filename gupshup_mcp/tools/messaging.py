# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Partner API template message tool."""

from ..clients import GupshupClient
from ..models import SendTemplateParams, ToolResult


async def send_template_message(client: GupshupClient, params: SendTemplateParams) -> ToolResult:
    data = await client.app_request(
        "POST",
        "/partner/app/{appId}/template/msg",
        params.app_id,
        {
            "source": params.source,
            "destination": params.destination,
            "src.name": params.src_name,
            "template": params.template.model_dump(),
            "message": params.message.model_dump(exclude_none=True),
        },
    )
    return ToolResult.from_text(
        f"Message sent to {params.destination}.\n"
        f"Status: {data.get('status')}\n"
        f"Message ID: {data.get('messageId')}"
    )
