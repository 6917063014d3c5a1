# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""
FastMCP server exposing the Gupshup gateway as MCP tools.

Enterprise gateway tools are always registered; they report missing
credentials per channel when called. Partner API tools are registered only
when a partner token is configured.
"""

from contextlib import asynccontextmanager
from typing import Annotated, Any, Awaitable, Literal

import httpx
import structlog
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field, ValidationError

from . import tools
from .clients import GupshupClient, GupshupEnterpriseClient, RetryPolicy
from .config import Settings, get_settings
from .errors import GupshupError, InvalidParamsError
from .models import (
    Channel,
    CompareTemplatesParams,
    CreateTemplateParams,
    DeleteTemplateParams,
    EditTemplateParams,
    EnableAnalyticsParams,
    GatewayRawRequestParams,
    GetAnalyticsParams,
    Granularity,
    MetricType,
    SendTemplateParams,
    SmsSendTextParams,
    TemplateButton,
    TemplateCategory,
    TemplateMessage,
    TemplateRef,
    TemplateType,
    ToolResult,
    UploadMediaParams,
    UsageSummaryParams,
    WhatsappOptInParams,
    WhatsappSendTemplateParams,
    WhatsappSendTextParams,
)
from .services import RateLimiter, TokenManager

logger = structlog.get_logger(__name__)

AppId = Annotated[str | None, Field(description="App id (defaults to GUPSHUP_DEFAULT_APP_ID)")]
Phone = Annotated[str, Field(description="Phone number with country code, digits only, e.g. 919999999999")]


async def run_tool(name: str, call: Awaitable[ToolResult]) -> str:
    """Await a handler and turn gateway failures into MCP tool errors."""
    try:
        result = await call
    except GupshupError as e:
        logger.warning("Tool failed", tool=name, error_code=e.code.value, error=e.message)
        raise ToolError(e.message) from e
    except (httpx.HTTPError, OSError) as e:
        logger.warning("Tool transport failure", tool=name, error=str(e))
        raise ToolError(f"Request failed: {e}") from e
    return result.text


def build_params(model: type, **kwargs: Any) -> Any:
    """Validate tool arguments, reporting the first invalid field."""
    try:
        return model(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        param = ".".join(str(part) for part in first["loc"]) or model.__name__
        error = InvalidParamsError(param, first["msg"])
        raise ToolError(error.message) from e


def create_server(settings: Settings | None = None) -> FastMCP:
    """Build the MCP server and its clients from settings."""
    settings = settings or get_settings()
    http_client = httpx.AsyncClient(timeout=settings.timeout_seconds)

    enterprise = GupshupEnterpriseClient.from_settings(settings, http_client=http_client)
    partner: GupshupClient | None = None
    if settings.has_partner_credentials:
        partner = GupshupClient(
            TokenManager(settings.partner_token, settings.base_url, http_client=http_client),
            settings.base_url,
            default_app_id=settings.default_app_id,
            http_client=http_client,
            rate_limiter=RateLimiter(),
            retry_policy=RetryPolicy.from_config(
                max_retries=settings.max_retries,
                retry_base_ms=settings.retry_base_ms,
                retry_max_ms=settings.retry_max_ms,
                retry_jitter_ms=settings.retry_jitter_ms,
            ),
        )

    @asynccontextmanager
    async def lifespan(server: FastMCP):
        try:
            yield
        finally:
            await http_client.aclose()

    mcp = FastMCP(settings.app_name, lifespan=lifespan)
    register_enterprise_tools(mcp, enterprise)
    if partner is not None:
        register_partner_tools(mcp, partner)

    logger.info(
        "MCP server created",
        version=settings.app_version,
        sms=settings.has_sms_credentials,
        whatsapp=settings.has_whatsapp_credentials,
        partner=partner is not None,
    )
    return mcp


# =============================================================================
# Enterprise gateway tools
# =============================================================================


def register_enterprise_tools(mcp: FastMCP, client: GupshupEnterpriseClient) -> None:
    @mcp.tool()
    async def check_gateway_credentials() -> str:
        """Report which Enterprise channels (SMS, WhatsApp) have credentials configured."""
        return await run_tool("check_gateway_credentials", tools.check_gateway_credentials(client))

    @mcp.tool()
    async def whatsapp_opt_in(phone_number: Phone) -> str:
        """Opt a phone number in to receive WhatsApp messages."""
        params = build_params(WhatsappOptInParams, phone_number=phone_number)
        return await run_tool("whatsapp_opt_in", tools.whatsapp_opt_in(client, params))

    @mcp.tool()
    async def whatsapp_send_template(
        send_to: Phone,
        template_id: Annotated[str, Field(description="Approved Gupshup template ID")],
        variables: Annotated[
            dict[str, str] | None, Field(description="Template variables, e.g. {'var1': 'Rahul'}")
        ] = None,
        msg_type: str = "TEXT",
        format: str = "Text",
        data_encoding: str = "TEXT",
    ) -> str:
        """Send an approved WhatsApp template (HSM) through the Enterprise gateway."""
        params = build_params(
            WhatsappSendTemplateParams,
            send_to=send_to,
            template_id=template_id,
            variables=variables,
            msg_type=msg_type,
            format=format,
            data_encoding=data_encoding,
        )
        return await run_tool("whatsapp_send_template", tools.whatsapp_send_template(client, params))

    @mcp.tool()
    async def whatsapp_send_text(
        send_to: Phone,
        message: Annotated[str, Field(description="Message text")],
        msg_type: str = "TEXT",
        format: str = "text",
    ) -> str:
        """Send a free-form WhatsApp text (only inside the 24h session window)."""
        params = build_params(
            WhatsappSendTextParams, send_to=send_to, message=message, msg_type=msg_type, format=format
        )
        return await run_tool("whatsapp_send_text", tools.whatsapp_send_text(client, params))

    @mcp.tool()
    async def sms_send_text(
        send_to: Annotated[str, Field(description="Comma-separated phone numbers with country code")],
        message: Annotated[str, Field(description="SMS message body")],
        principal_entity_id: Annotated[str | None, Field(description="DLT principal entity id")] = None,
        dlt_template_id: Annotated[str | None, Field(description="DLT template id")] = None,
        msg_type: str = "TEXT",
        format: str = "JSON",
    ) -> str:
        """Send an SMS through the Enterprise gateway."""
        params = build_params(
            SmsSendTextParams,
            send_to=send_to,
            message=message,
            principal_entity_id=principal_entity_id,
            dlt_template_id=dlt_template_id,
            msg_type=msg_type,
            format=format,
        )
        return await run_tool("sms_send_text", tools.sms_send_text(client, params))

    @mcp.tool()
    async def gateway_raw_request(
        endpoint: Annotated[Channel, Field(description="Channel endpoint: sms or whatsapp")],
        http_method: Literal["GET", "POST"] = "POST",
        request_params: Annotated[
            dict[str, str | int | float | bool] | None,
            Field(description="Gateway parameters; userid and password are injected"),
        ] = None,
    ) -> str:
        """Call the Enterprise gateway with arbitrary parameters."""
        params = build_params(
            GatewayRawRequestParams,
            endpoint=endpoint,
            http_method=http_method,
            request_params=request_params or {},
        )
        return await run_tool("gateway_raw_request", tools.gateway_raw_request(client, params))


# =============================================================================
# Partner API tools
# =============================================================================


def register_partner_tools(mcp: FastMCP, client: GupshupClient) -> None:
    @mcp.tool()
    async def send_template_message(
        source: Annotated[str, Field(description="Sender WhatsApp number with country code")],
        destination: Annotated[str, Field(description="Recipient number with country code")],
        src_name: Annotated[str, Field(description="App name registered with Gupshup")],
        template: TemplateRef,
        message: TemplateMessage,
        app_id: AppId = None,
    ) -> str:
        """Send an approved WhatsApp template message through the Partner API."""
        params = build_params(
            SendTemplateParams,
            app_id=app_id,
            source=source,
            destination=destination,
            src_name=src_name,
            template=template,
            message=message,
        )
        return await run_tool("send_template_message", tools.send_template_message(client, params))

    @mcp.tool()
    async def list_templates(app_id: AppId = None) -> str:
        """List the app's WhatsApp templates with their status and quality."""
        return await run_tool("list_templates", tools.list_templates(client, app_id))

    @mcp.tool()
    async def create_template(
        element_name: Annotated[str, Field(description="Template name (lowercase, underscores)")],
        language_code: Annotated[str, Field(description="e.g. en_US")],
        category: TemplateCategory,
        template_type: TemplateType,
        content: Annotated[str, Field(description="Template body with {{1}} style placeholders")],
        header: str | None = None,
        footer: str | None = None,
        buttons: list[TemplateButton] | None = None,
        example: Annotated[str | None, Field(description="Body with the placeholders filled in")] = None,
        example_media: Annotated[str | None, Field(description="handleId returned by upload_media")] = None,
        vertical: str | None = None,
        allow_template_category_change: bool | None = None,
        app_id: AppId = None,
    ) -> str:
        """Submit a new WhatsApp template for approval."""
        params = build_params(
            CreateTemplateParams,
            app_id=app_id,
            element_name=element_name,
            language_code=language_code,
            category=category,
            template_type=template_type,
            content=content,
            header=header,
            footer=footer,
            buttons=buttons,
            example=example,
            example_media=example_media,
            vertical=vertical,
            allow_template_category_change=allow_template_category_change,
        )
        return await run_tool("create_template", tools.create_template(client, params))

    @mcp.tool()
    async def edit_template(
        template_id: str,
        content: str | None = None,
        header: str | None = None,
        footer: str | None = None,
        buttons: list[TemplateButton] | None = None,
        category: TemplateCategory | None = None,
        template_type: TemplateType | None = None,
        example: str | None = None,
        example_media: str | None = None,
        app_id: AppId = None,
    ) -> str:
        """Edit an existing template; only the given fields change."""
        params = build_params(
            EditTemplateParams,
            app_id=app_id,
            template_id=template_id,
            content=content,
            header=header,
            footer=footer,
            buttons=buttons,
            category=category,
            template_type=template_type,
            example=example,
            example_media=example_media,
        )
        return await run_tool("edit_template", tools.edit_template(client, params))

    @mcp.tool()
    async def delete_template(
        element_name: str,
        template_id: Annotated[str | None, Field(description="Delete a single language variant only")] = None,
        app_id: AppId = None,
    ) -> str:
        """Delete a template by name, or a single language variant by id."""
        params = build_params(
            DeleteTemplateParams, app_id=app_id, element_name=element_name, template_id=template_id
        )
        return await run_tool("delete_template", tools.delete_template(client, params))

    @mcp.tool()
    async def upload_media(
        file: Annotated[str, Field(description="Public URL of the media file")],
        file_type: Annotated[str, Field(description="MIME type, e.g. image/jpeg")],
        app_id: AppId = None,
    ) -> str:
        """Upload a media sample and get the handleId used by create_template."""
        params = build_params(UploadMediaParams, app_id=app_id, file=file, file_type=file_type)
        return await run_tool("upload_media", tools.upload_media(client, params))

    @mcp.tool()
    async def enable_template_analytics(enable: bool = True, app_id: AppId = None) -> str:
        """Turn template analytics on (or off) for the app."""
        params = build_params(EnableAnalyticsParams, app_id=app_id, enable=enable)
        return await run_tool("enable_template_analytics", tools.enable_template_analytics(client, params))

    @mcp.tool()
    async def get_template_analytics(
        start: Annotated[int, Field(description="Start of the range, epoch seconds")],
        end: Annotated[int, Field(description="End of the range, epoch seconds")],
        template_ids: list[str],
        granularity: Granularity | None = None,
        metric_types: list[MetricType] | None = None,
        app_id: AppId = None,
    ) -> str:
        """Sent, delivered, read and clicked counts for templates."""
        params = build_params(
            GetAnalyticsParams,
            app_id=app_id,
            start=start,
            end=end,
            template_ids=template_ids,
            granularity=granularity,
            metric_types=metric_types,
        )
        return await run_tool("get_template_analytics", tools.get_template_analytics(client, params))

    @mcp.tool()
    async def compare_templates(
        template_id: str,
        template_list: list[str],
        start: int,
        end: int,
        app_id: AppId = None,
    ) -> str:
        """Compare one template's performance against others."""
        params = build_params(
            CompareTemplatesParams,
            app_id=app_id,
            template_id=template_id,
            template_list=template_list,
            start=start,
            end=end,
        )
        return await run_tool("compare_templates", tools.compare_templates(client, params))

    @mcp.tool()
    async def get_app_health(app_id: AppId = None) -> str:
        """App health, quality rating and wallet balance in one call."""
        return await run_tool("get_app_health", tools.get_app_health(client, app_id))

    @mcp.tool()
    async def list_apps() -> str:
        """List the apps linked to the partner account."""
        return await run_tool("list_apps", tools.list_apps(client))

    @mcp.tool()
    async def get_usage_summary(
        from_date: Annotated[str, Field(description="YYYY-MM-DD")],
        to_date: Annotated[str, Field(description="YYYY-MM-DD")],
        app_id: AppId = None,
    ) -> str:
        """Message usage and cost for a date range."""
        params = build_params(UsageSummaryParams, app_id=app_id, from_date=from_date, to_date=to_date)
        return await run_tool("get_usage_summary", tools.get_usage_summary(client, params))

    @mcp.tool()
    async def get_app_token(app_id: AppId = None) -> str:
        """Check that an app token can be obtained; the token is shown masked."""
        return await run_tool("get_app_token", tools.get_app_token(client, app_id))
