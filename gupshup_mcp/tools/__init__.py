# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tool handlers.

Each handler takes a client and validated parameters and returns a
ToolResult. Errors propagate to the server layer.
"""

from .analytics import compare_templates, enable_template_analytics, get_app_health, get_template_analytics
from .gateway import check_gateway_credentials, gateway_raw_request, gateway_result
from .messaging import send_template_message
from .sms import sms_send_text
from .templates import create_template, delete_template, edit_template, list_templates, upload_media
from .utility import get_app_token, get_usage_summary, list_apps, mask_token
from .whatsapp import whatsapp_opt_in, whatsapp_send_template, whatsapp_send_text

ENTERPRISE_TOOL_NAMES = [
    "check_gateway_credentials",
    "whatsapp_opt_in",
    "whatsapp_send_template",
    "whatsapp_send_text",
    "sms_send_text",
    "gateway_raw_request",
]

PARTNER_TOOL_NAMES = [
    "send_template_message",
    "list_templates",
    "create_template",
    "edit_template",
    "delete_template",
    "upload_media",
    "enable_template_analytics",
    "get_template_analytics",
    "compare_templates",
    "get_app_health",
    "list_apps",
    "get_usage_summary",
    "get_app_token",
]

__all__ = [
    "ENTERPRISE_TOOL_NAMES",
    "PARTNER_TOOL_NAMES",
    "check_gateway_credentials",
    "compare_templates",
    "create_template",
    "delete_template",
    "edit_template",
    "enable_template_analytics",
    "gateway_raw_request",
    "gateway_result",
    "get_app_health",
    "get_app_token",
    "get_template_analytics",
    "get_usage_summary",
    "list_apps",
    "list_templates",
    "mask_token",
    "send_template_message",
    "sms_send_text",
    "upload_media",
    "whatsapp_opt_in",
    "whatsapp_send_template",
    "whatsapp_send_text",
]
