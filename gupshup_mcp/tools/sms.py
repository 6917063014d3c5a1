# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""SMS tool over the Enterprise gateway."""

from ..clients import GupshupEnterpriseClient
from ..models import SmsSendTextParams, ToolResult
from .gateway import gateway_result


async def sms_send_text(client: GupshupEnterpriseClient, params: SmsSendTextParams) -> ToolResult:
    data = await client.sms_send_text(
        send_to=params.send_to,
        message=params.message,
        principal_entity_id=params.principal_entity_id,
        dlt_template_id=params.dlt_template_id,
        msg_type=params.msg_type,
        format=params.format,
    )
    return gateway_result(data)
