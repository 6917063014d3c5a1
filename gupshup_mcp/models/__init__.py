# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Data models."""

from .analytics import (
    CompareTemplatesParams,
    EnableAnalyticsParams,
    GetAnalyticsParams,
    Granularity,
    MetricType,
    UsageSummaryParams,
)
from .gateway import Channel, CredentialPair, CredentialStatus, GatewayResponse
from .mcp import TextContent, ToolResult
from .messaging import (
    DocumentMessage,
    GatewayRawRequestParams,
    ImageMessage,
    SendTemplateParams,
    SmsSendTextParams,
    TemplateMessage,
    TemplateRef,
    TextMessage,
    VideoMessage,
    WhatsappOptInParams,
    WhatsappSendTemplateParams,
    WhatsappSendTextParams,
)
from .templates import (
    CreateTemplateParams,
    DeleteTemplateParams,
    EditTemplateParams,
    TemplateButton,
    TemplateCategory,
    TemplateType,
    UploadMediaParams,
)

__all__ = [
    "Channel",
    "CompareTemplatesParams",
    "CreateTemplateParams",
    "CredentialPair",
    "CredentialStatus",
    "DeleteTemplateParams",
    "DocumentMessage",
    "EditTemplateParams",
    "EnableAnalyticsParams",
    "GatewayRawRequestParams",
    "GatewayResponse",
    "GetAnalyticsParams",
    "Granularity",
    "ImageMessage",
    "MetricType",
    "SendTemplateParams",
    "SmsSendTextParams",
    "TemplateButton",
    "TemplateCategory",
    "TemplateMessage",
    "TemplateRef",
    "TemplateType",
    "TextContent",
    "TextMessage",
    "ToolResult",
    "UploadMediaParams",
    "UsageSummaryParams",
    "VideoMessage",
    "WhatsappOptInParams",
    "WhatsappSendTemplateParams",
    "WhatsappSendTextParams",
]
