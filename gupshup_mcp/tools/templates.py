# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Template management tools.

Template approval is done by Meta; these tools only relay the request and
show what the Partner API answered.
"""

import json
from typing import Any

from ..clients import GupshupClient
from ..models import (
    CreateTemplateParams,
    DeleteTemplateParams,
    EditTemplateParams,
    TemplateButton,
    ToolResult,
    UploadMediaParams,
)


def _buttons(buttons: list[TemplateButton] | None) -> list[dict[str, Any]] | None:
    if not buttons:
        return None
    return [b.model_dump(by_alias=True, exclude_none=True) for b in buttons]


async def list_templates(client: GupshupClient, app_id: str | None = None) -> ToolResult:
    """List templates with the fields useful for choosing one."""
    data = await client.app_request("GET", "/partner/app/{appId}/templates", app_id)

    summary = [
        {
            "id": t.get("id"),
            "name": t.get("elementName"),
            "type": t.get("templateType"),
            "category": t.get("category"),
            "status": t.get("status"),
            "language": t.get("languageCode"),
            "quality": t.get("quality"),
            "reason": t.get("reason"),
        }
        for t in data.get("templates") or []
    ]
    return ToolResult.from_json(summary)


async def create_template(client: GupshupClient, params: CreateTemplateParams) -> ToolResult:
    body: dict[str, Any] = {
        "elementName": params.element_name,
        "languageCode": params.language_code,
        "category": params.category.value,
        "templateType": params.template_type.value,
        "content": params.content,
        "enableSample": True,
        "header": params.header,
        "footer": params.footer,
        "buttons": _buttons(params.buttons),
        "example": params.example,
        "exampleMedia": params.example_media,
        "vertical": params.vertical,
        "allowTemplateCategoryChange": params.allow_template_category_change,
    }
    data = await client.app_request("POST", "/partner/app/{appId}/templates", params.app_id, body)
    return ToolResult.from_text(
        f'Template "{params.element_name}" submitted for approval.\n{json.dumps(data, indent=2)}'
    )


async def edit_template(client: GupshupClient, params: EditTemplateParams) -> ToolResult:
    body: dict[str, Any] = {
        "enableSample": True,
        "content": params.content,
        "header": params.header,
        "footer": params.footer,
        "buttons": _buttons(params.buttons),
        "category": params.category.value if params.category else None,
        "templateType": params.template_type.value if params.template_type else None,
        "example": params.example,
        "exampleMedia": params.example_media,
    }
    data = await client.app_request(
        "PUT",
        f"/partner/app/{{appId}}/templates/{params.template_id}",
        params.app_id,
        body,
    )
    return ToolResult.from_text(
        f'Template "{params.template_id}" updated and resubmitted for approval.\n'
        f"{json.dumps(data, indent=2)}"
    )


async def delete_template(client: GupshupClient, params: DeleteTemplateParams) -> ToolResult:
    path = f"/partner/app/{{appId}}/template/{params.element_name}"
    if params.template_id:
        path = f"{path}/{params.template_id}"

    data = await client.app_request("DELETE", path, params.app_id)
    return ToolResult.from_text(
        f'Template "{params.element_name}" permanently deleted.\n{json.dumps(data, indent=2)}'
    )


async def upload_media(client: GupshupClient, params: UploadMediaParams) -> ToolResult:
    data = await client.app_request(
        "POST",
        "/partner/app/{appId}/upload/media",
        params.app_id,
        {"file": params.file, "fileType": params.file_type},
    )
    return ToolResult.from_text(
        f"Media uploaded.\n{json.dumps(data, indent=2)}\n"
        "Use the handleId in create_template's example_media parameter."
    )
