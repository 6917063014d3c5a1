# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Partner and app token management.

The partner token is static configuration. App tokens are fetched from the
partner API on first use and cached for the life of the process; the
expiresOn field of the lookup response is not consulted.
"""

import json

import httpx
import structlog

from ..errors import ConfigurationError, TokenLookupError, UnexpectedTokenResponseError

logger = structlog.get_logger(__name__)


class TokenManager:
    """Owns the partner token and the per-app token cache."""

    def __init__(
        self,
        partner_token: str,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        if not partner_token:
            raise ConfigurationError("GUPSHUP_PARTNER_TOKEN")

        self._partner_token = partner_token
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._app_tokens: dict[str, str] = {}

    def get_partner_token(self) -> str:
        return self._partner_token

    async def get_app_token(self, app_id: str) -> str:
        """Return the cached token for app_id, fetching it on a miss.

        Raises:
            TokenLookupError: The lookup returned a non-success status
            UnexpectedTokenResponseError: The payload has no token.token string
        """
        cached = self._app_tokens.get(app_id)
        if cached:
            return cached

        response = await self._http_client.get(
            f"{self.base_url}/partner/app/{app_id}/token",
            headers={"Authorization": self._partner_token},
        )
        if not response.is_success:
            logger.error("App token lookup failed", app_id=app_id, status_code=response.status_code)
            raise TokenLookupError(app_id, response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            raise UnexpectedTokenResponseError(app_id, response.text)

        token = data.get("token") if isinstance(data, dict) else None
        token = token.get("token") if isinstance(token, dict) else None
        if not isinstance(token, str) or not token:
            raise UnexpectedTokenResponseError(app_id, json.dumps(data))

        self._app_tokens[app_id] = token
        logger.info("App token cached", app_id=app_id)
        return token

    def clear_cache(self, app_id: str | None = None) -> None:
        """Forget one app token, or all of them."""
        if app_id:
            self._app_tokens.pop(app_id, None)
        else:
            self._app_tokens.clear()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
