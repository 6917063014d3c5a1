# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""
HTTP client for the Gupshup Enterprise gateway (SMS and WhatsApp).

Each channel has its own endpoint and userid/password pair. Credentials are
injected into every request and can never be supplied by the caller.
Responses are either JSON or the legacy `status | code | message` text.
"""

import json
import time
from typing import Any, Awaitable, Callable, Literal, TextIO
from urllib.parse import urlencode

import httpx

from ..config import DEFAULT_SMS_ENDPOINT, DEFAULT_WHATSAPP_ENDPOINT, Settings
from ..errors import GatewayHTTPError, MissingCredentialsError, ReservedParamError
from ..models import Channel, CredentialPair, CredentialStatus, GatewayResponse
from ..observability import GatewayLogLevel, build_gateway_logger
from .transport import RetryingTransport, RetryPolicy

RESERVED_PARAMS = ("userid", "password")

_CREDENTIAL_SETTINGS: dict[Channel, list[str]] = {
    Channel.SMS: ["GUPSHUP_USER_ID", "GUPSHUP_PASSWORD"],
    Channel.WHATSAPP: ["GUPSHUP_WHATSAPP_USER_ID", "GUPSHUP_WHATSAPP_PASSWORD"],
}

ParamValue = str | int | float | bool
GatewayResult = dict[str, Any] | list[Any] | GatewayResponse


def _stringify(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_gateway_body(raw: str) -> GatewayResult:
    """Return JSON objects/arrays as-is, otherwise parse the pipe format."""
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, (dict, list)):
        return parsed
    return GatewayResponse.parse(raw)


class GupshupEnterpriseClient:
    """Dual-channel Enterprise gateway client."""

    def __init__(
        self,
        sms_endpoint: str = DEFAULT_SMS_ENDPOINT,
        whatsapp_endpoint: str = DEFAULT_WHATSAPP_ENDPOINT,
        sms_user_id: str | None = None,
        sms_password: str | None = None,
        whatsapp_user_id: str | None = None,
        whatsapp_password: str | None = None,
        log_level: GatewayLogLevel = "off",
        redact_logs: bool = True,
        max_retries: Any = None,
        retry_base_ms: Any = None,
        retry_max_ms: Any = None,
        retry_jitter_ms: Any = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        random_fn: Callable[[], float] | None = None,
        log_stream: TextIO | None = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            sms_endpoint / whatsapp_endpoint: Gateway REST endpoints
            sms_user_id ... whatsapp_password: Optional per-channel credentials
            log_level: off | info | debug for the gateway request log
            redact_logs: Mask credentials, phones and message bodies in logs
            max_retries ... retry_jitter_ms: Retry tuning, clamped into range
            http_client: Shared httpx client (one is created when omitted)
            sleep: Backoff sleep coroutine taking seconds
            random_fn: Jitter source in [0, 1)
            log_stream: Destination of gateway log lines (stderr by default)
            timeout: Timeout in seconds for a created http_client
        """
        self.endpoints = {Channel.SMS: sms_endpoint, Channel.WHATSAPP: whatsapp_endpoint}
        self._credentials = {
            Channel.SMS: CredentialPair(sms_user_id, sms_password),
            Channel.WHATSAPP: CredentialPair(whatsapp_user_id, whatsapp_password),
        }
        self.retry_policy = RetryPolicy.from_config(
            max_retries=max_retries,
            retry_base_ms=retry_base_ms,
            retry_max_ms=retry_max_ms,
            retry_jitter_ms=retry_jitter_ms,
        )
        self.log = build_gateway_logger(level=log_level, redact=redact_logs, stream=log_stream)
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._transport = RetryingTransport(
            self._http_client,
            self.retry_policy,
            sleep=sleep,
            random_fn=random_fn,
            logger=self.log,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "GupshupEnterpriseClient":
        return cls(
            sms_endpoint=settings.api_endpoint,
            whatsapp_endpoint=settings.whatsapp_api_endpoint,
            sms_user_id=settings.user_id,
            sms_password=settings.password,
            whatsapp_user_id=settings.whatsapp_user_id,
            whatsapp_password=settings.whatsapp_password,
            log_level=settings.log_level,
            redact_logs=settings.redact_logs,
            max_retries=settings.max_retries,
            retry_base_ms=settings.retry_base_ms,
            retry_max_ms=settings.retry_max_ms,
            retry_jitter_ms=settings.retry_jitter_ms,
            http_client=http_client,
            timeout=settings.timeout_seconds,
        )

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    def has_sms_credentials(self) -> bool:
        return self._credentials[Channel.SMS].complete

    def has_whatsapp_credentials(self) -> bool:
        return self._credentials[Channel.WHATSAPP].complete

    def check_credentials(self) -> CredentialStatus:
        """Report which channels are configured. No I/O."""
        return CredentialStatus(
            sms=self.has_sms_credentials(),
            whatsapp=self.has_whatsapp_credentials(),
        )

    # =========================================================================
    # WHATSAPP
    # =========================================================================

    async def whatsapp_opt_in(self, phone_number: str) -> GatewayResult:
        """Opt a phone number in for WhatsApp messages."""
        return await self.gateway_request(
            Channel.WHATSAPP,
            "GET",
            {
                "method": "OPT_IN",
                "format": "json",
                "v": "1.1",
                "auth_scheme": "plain",
                "phone_number": phone_number,
                "channel": "WHATSAPP",
            },
        )

    async def whatsapp_send_template(
        self,
        send_to: str,
        template_id: str,
        variables: dict[str, str] | None = None,
        msg_type: str = "TEXT",
        format: str = "Text",
        data_encoding: str = "TEXT",
    ) -> GatewayResult:
        """Send an approved template (HSM); variables become top-level params."""
        params: dict[str, ParamValue] = {
            "method": "SENDMESSAGE",
            "format": format,
            "v": "1.1",
            "auth_scheme": "plain",
            "send_to": send_to,
            "msg_type": msg_type,
            "isTemplate": "true",
            "template_id": template_id,
            "data_encoding": data_encoding,
        }
        params.update(variables or {})
        return await self.gateway_request(Channel.WHATSAPP, "POST", params)

    async def whatsapp_send_text(
        self,
        send_to: str,
        message: str,
        msg_type: str = "TEXT",
        format: str = "text",
    ) -> GatewayResult:
        return await self.gateway_request(
            Channel.WHATSAPP,
            "POST",
            {
                "method": "SENDMESSAGE",
                "format": format,
                "v": "1.1",
                "auth_scheme": "plain",
                "send_to": send_to,
                "msg_type": msg_type,
                "msg": message,
            },
        )

    # =========================================================================
    # SMS
    # =========================================================================

    async def sms_send_text(
        self,
        send_to: str,
        message: str,
        principal_entity_id: str | None = None,
        dlt_template_id: str | None = None,
        msg_type: str = "TEXT",
        format: str = "JSON",
    ) -> GatewayResult:
        params: dict[str, ParamValue] = {
            "method": "sendMessage",
            "format": format,
            "v": "1.1",
            "auth_scheme": "plain",
            "send_to": send_to,
            "msg_type": msg_type,
            "msg": message,
        }
        if principal_entity_id:
            params["principalEntityId"] = principal_entity_id
        if dlt_template_id:
            params["dltTemplateId"] = dlt_template_id
        return await self.gateway_request(Channel.SMS, "POST", params)

    # =========================================================================
    # GENERIC REQUEST
    # =========================================================================

    async def gateway_request(
        self,
        endpoint: Channel | str,
        http_method: Literal["GET", "POST"] = "POST",
        params: dict[str, ParamValue] | None = None,
    ) -> GatewayResult:
        """Call a channel endpoint with credentials injected.

        Raises:
            ReservedParamError: params contains userid or password
            MissingCredentialsError: The channel has no complete credential pair
            GatewayHTTPError: Non-success status after retries
            httpx.RequestError, OSError: Network failure after retries
        """
        channel = Channel(endpoint)
        params = params or {}

        for reserved in RESERVED_PARAMS:
            if reserved in params:
                raise ReservedParamError(reserved)

        credentials = self._credentials[channel]
        if not credentials.complete:
            raise MissingCredentialsError(channel.label, _CREDENTIAL_SETTINGS[channel])

        merged: dict[str, ParamValue] = {
            "userid": credentials.user_id or "",
            "password": credentials.password or "",
            **params,
        }
        query = urlencode({key: _stringify(value) for key, value in merged.items()})

        base_url = self.endpoints[channel]
        method = http_method.upper()
        if method == "GET":
            url, headers, content = f"{base_url}?{query}", None, None
        else:
            url = base_url
            headers = {"content-type": "application/x-www-form-urlencoded"}
            content = query

        self.log.info(
            "gateway.request",
            endpoint=channel.value,
            http_method=method,
            url=base_url,
            params=merged,
        )
        started = time.monotonic()

        response = await self._transport.send(method, url, headers=headers, content=content)
        if not response.is_success:
            raise GatewayHTTPError(response.status_code, response.text)

        raw = response.text
        result = parse_gateway_body(raw)

        self.log.info(
            "gateway.response",
            endpoint=channel.value,
            http_method=method,
            http_status=response.status_code,
            duration_ms=int((time.monotonic() - started) * 1000),
            response_bytes=len(raw),
        )
        # The code segment of a pipe response is the recipient number
        self.log.debug(
            "gateway.response.body",
            endpoint=channel.value,
            response=(
                {"status": result.status, "message": result.message}
                if isinstance(result, GatewayResponse)
                else result
            ),
        )
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
