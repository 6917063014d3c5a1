# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""
HTTP client for the Gupshup Partner API.

App-scope calls authenticate with a per-app token obtained through the
TokenManager; partner-scope calls use the static partner token. Every call
goes through the RateLimiter, keyed by the path as given by the caller.
"""

import json
from typing import Any, Literal
from urllib.parse import quote

import httpx
import structlog

from ..errors import ConfigurationError, GupshupAPIError
from ..services import RateLimiter, TokenManager
from .transport import RetryingTransport, RetryPolicy

logger = structlog.get_logger(__name__)

AuthStyle = Literal["token", "authorization"]

# Left unescaped in form keys and values
_FORM_SAFE = "-_.!~*'()"


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


class GupshupClient:
    """Client for partner and app-scope Partner API calls."""

    def __init__(
        self,
        token_manager: TokenManager,
        base_url: str,
        default_app_id: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            token_manager: Source of partner and app tokens
            base_url: Partner API base URL (ex: https://partner.gupshup.io)
            default_app_id: App used when a call does not name one
            http_client: Shared httpx client (one is created when omitted)
            rate_limiter: Bucket state (a fresh limiter when omitted)
            retry_policy: Retry tuning; no retries when omitted
            timeout: Timeout in seconds for a created http_client
        """
        self.token_manager = token_manager
        self.base_url = base_url.rstrip("/")
        self.default_app_id = default_app_id
        self.rate_limiter = rate_limiter or RateLimiter()
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._transport = RetryingTransport(
            self._http_client, retry_policy or RetryPolicy.disabled(), logger=logger
        )

    def resolve_app_id(self, app_id: str | None) -> str:
        resolved = app_id or self.default_app_id
        if not resolved:
            raise ConfigurationError(
                "GUPSHUP_DEFAULT_APP_ID",
                "app_id is required. Either set GUPSHUP_DEFAULT_APP_ID or pass app_id in the tool call.",
            )
        return resolved

    @staticmethod
    def to_form_body(data: dict[str, Any]) -> str:
        """Encode data as application/x-www-form-urlencoded.

        None values are skipped and objects are sent as inline JSON.
        """
        parts = []
        for key, value in data.items():
            if value is None:
                continue
            parts.append(f"{quote(str(key), safe=_FORM_SAFE)}={quote(_form_value(value), safe=_FORM_SAFE)}")
        return "&".join(parts)

    async def app_request(
        self,
        method: str,
        path: str,
        app_id: str | None = None,
        body: dict[str, Any] | None = None,
        auth_style: AuthStyle = "token",
    ) -> Any:
        """Make an app-scope request.

        Args:
            method: HTTP method
            path: Path template, {appId} is substituted
            app_id: Target app (defaults to default_app_id)
            body: Form fields, sent for POST and PUT only
            auth_style: Send the app token as a `token` header or as `Authorization`

        Raises:
            ConfigurationError: No app id available
            GupshupAPIError: Non-success response, or a body that is not JSON
        """
        resolved_app_id = self.resolve_app_id(app_id)
        token = await self.token_manager.get_app_token(resolved_app_id)
        url = f"{self.base_url}{path.replace('{appId}', resolved_app_id)}"

        await self.rate_limiter.acquire(path)

        headers = {"accept": "application/json"}
        if auth_style == "authorization":
            headers["Authorization"] = token
        else:
            headers["token"] = token

        content = None
        if body and method.upper() in ("POST", "PUT"):
            headers["content-type"] = "application/x-www-form-urlencoded"
            content = self.to_form_body(body)

        response = await self._transport.send(method, url, headers=headers, content=content)
        return self._parse(response, method=method, path=path, app_id=resolved_app_id)

    async def partner_request(self, method: str, path: str) -> Any:
        """Make a partner-scope request with the static partner token."""
        url = f"{self.base_url}{path}"

        await self.rate_limiter.acquire(path)

        response = await self._transport.send(
            method,
            url,
            headers={
                "Authorization": self.token_manager.get_partner_token(),
                "accept": "application/json",
            },
        )
        return self._parse(response, method=method, path=path)

    def _parse(self, response: httpx.Response, **context: Any) -> Any:
        if not response.is_success:
            logger.error("Partner API error", status_code=response.status_code, **context)
            raise GupshupAPIError(response.status_code, response.text)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error("Partner API returned non-JSON body", status_code=response.status_code, **context)
            raise GupshupAPIError(response.status_code, response.text) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
