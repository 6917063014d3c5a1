# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""WhatsApp tools over the Enterprise gateway."""

from ..clients import GupshupEnterpriseClient
from ..models import (
    ToolResult,
    WhatsappOptInParams,
    WhatsappSendTemplateParams,
    WhatsappSendTextParams,
)
from .gateway import gateway_result


async def whatsapp_opt_in(client: GupshupEnterpriseClient, params: WhatsappOptInParams) -> ToolResult:
    return gateway_result(await client.whatsapp_opt_in(params.phone_number))


async def whatsapp_send_template(
    client: GupshupEnterpriseClient, params: WhatsappSendTemplateParams
) -> ToolResult:
    data = await client.whatsapp_send_template(
        send_to=params.send_to,
        template_id=params.template_id,
        variables=params.variables,
        msg_type=params.msg_type,
        format=params.format,
        data_encoding=params.data_encoding,
    )
    return gateway_result(data)


async def whatsapp_send_text(
    client: GupshupEnterpriseClient, params: WhatsappSendTextParams
) -> ToolResult:
    data = await client.whatsapp_send_text(
        send_to=params.send_to,
        message=params.message,
        msg_type=params.msg_type,
        format=params.format,
    )
    return gateway_result(data)
