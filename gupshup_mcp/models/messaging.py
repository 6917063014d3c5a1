# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Partner messaging and Enterprise gateway tool parameters."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .gateway import Channel


# =============================================================================
# Partner API: template messages
# =============================================================================


class TemplateRef(BaseModel):
    id: str = Field(..., description="Approved template UUID")
    params: list[str] = Field(default_factory=list, description="Template variable values, in order")


class MediaLink(BaseModel):
    link: str


class DocumentLink(BaseModel):
    link: str
    filename: str | None = None


class TextMessage(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageMessage(BaseModel):
    type: Literal["image"] = "image"
    image: MediaLink


class VideoMessage(BaseModel):
    type: Literal["video"] = "video"
    video: MediaLink


class DocumentMessage(BaseModel):
    type: Literal["document"] = "document"
    document: DocumentLink


TemplateMessage = Annotated[
    Union[TextMessage, ImageMessage, VideoMessage, DocumentMessage],
    Field(discriminator="type"),
]


class SendTemplateParams(BaseModel):
    app_id: str | None = Field(None, description="App id (defaults to GUPSHUP_DEFAULT_APP_ID)")
    source: str = Field(..., description="Sender WhatsApp number with country code")
    destination: str = Field(..., description="Recipient number with country code")
    src_name: str = Field(..., description="App name registered with Gupshup")
    template: TemplateRef
    message: TemplateMessage


# =============================================================================
# Enterprise gateway
# =============================================================================


class WhatsappOptInParams(BaseModel):
    phone_number: str = Field(
        ..., description="Phone number with country code, digits only, e.g. 919999999999"
    )


class WhatsappSendTemplateParams(BaseModel):
    send_to: str = Field(
        ..., description="Recipient phone with country code, digits only, e.g. 919999999999"
    )
    template_id: str = Field(..., description="Approved Gupshup template ID")
    variables: dict[str, str] | None = Field(None, description="Template variables, e.g. {'var1': 'Rahul'}")
    msg_type: str = Field("TEXT", description="Default TEXT")
    format: str = Field("Text", description="Default Text")
    data_encoding: str = Field("TEXT", description="Default TEXT")


class WhatsappSendTextParams(BaseModel):
    send_to: str = Field(
        ..., description="Recipient phone with country code, digits only, e.g. 919999999999"
    )
    message: str = Field(..., description="Message text")
    msg_type: str = Field("TEXT", description="Default TEXT")
    format: str = Field("text", description="Default text")


class SmsSendTextParams(BaseModel):
    send_to: str = Field(..., description="Comma-separated phone numbers with country code if needed")
    message: str = Field(..., description="SMS message body")
    principal_entity_id: str | None = Field(None, description="DLT principal entity id")
    dlt_template_id: str | None = Field(None, description="DLT template id")
    msg_type: str = Field("TEXT", description="Default TEXT")
    format: str = Field("JSON", description="Default JSON")


class GatewayRawRequestParams(BaseModel):
    endpoint: Channel
    http_method: Literal["GET", "POST"] = "POST"
    request_params: dict[str, str | int | float | bool] = Field(default_factory=dict)
