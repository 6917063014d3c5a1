# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for partner token handling and the app token cache."""

import httpx
import pytest

from gupshup_mcp.errors import (
    ConfigurationError,
    GupshupErrorCode,
    TokenLookupError,
    UnexpectedTokenResponseError,
)
from gupshup_mcp.services import TokenManager

BASE_URL = "https://partner.example.test"


def token_payload(token: str = "app-token-123") -> dict:
    return {"status": "success", "token": {"token": token, "expiresOn": 0}}


@pytest.fixture
def manager(http_client) -> TokenManager:
    return TokenManager("partner-secret", BASE_URL, http_client=http_client)


class TestConstruction:
    """Partner token validation."""

    def test_empty_partner_token_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TokenManager("", BASE_URL)
        assert exc_info.value.message == "GUPSHUP_PARTNER_TOKEN is required. Set it as an environment variable."

    def test_partner_token_returned_verbatim(self, manager):
        assert manager.get_partner_token() == "partner-secret"


class TestGetAppToken:
    """App token lookup and caching."""

    @pytest.mark.asyncio
    async def test_fetches_with_partner_authorization(self, manager, http_handler):
        http_handler.queue(httpx.Response(200, json=token_payload()))

        token = await manager.get_app_token("app-1")

        assert token == "app-token-123"
        request = http_handler.requests[0]
        assert request.method == "GET"
        assert str(request.url) == f"{BASE_URL}/partner/app/app-1/token"
        assert request.headers["Authorization"] == "partner-secret"

    @pytest.mark.asyncio
    async def test_one_network_call_per_app(self, manager, http_handler):
        http_handler.queue(
            httpx.Response(200, json=token_payload("t1")),
            httpx.Response(200, json=token_payload("t2")),
        )

        assert await manager.get_app_token("app-1") == "t1"
        assert await manager.get_app_token("app-1") == "t1"
        assert await manager.get_app_token("app-2") == "t2"

        assert len(http_handler.requests) == 2

    @pytest.mark.asyncio
    async def test_error_status(self, manager, http_handler):
        http_handler.queue(httpx.Response(403, text="forbidden"))

        with pytest.raises(TokenLookupError) as exc_info:
            await manager.get_app_token("app-1")

        assert exc_info.value.message == "Failed to get app token for app-1: 403 forbidden"
        assert exc_info.value.code == GupshupErrorCode.TOKEN_LOOKUP_FAILED

    @pytest.mark.asyncio
    async def test_missing_inner_token(self, manager, http_handler):
        http_handler.queue(httpx.Response(200, json={"status": "success", "token": {}}))

        with pytest.raises(UnexpectedTokenResponseError) as exc_info:
            await manager.get_app_token("app-1")

        assert exc_info.value.message.startswith("Unexpected token response for app app-1: ")
        assert '"status": "success"' in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_string_token(self, manager, http_handler):
        http_handler.queue(httpx.Response(200, json={"token": {"token": 42}}))

        with pytest.raises(UnexpectedTokenResponseError):
            await manager.get_app_token("app-1")

    @pytest.mark.asyncio
    async def test_non_json_body(self, manager, http_handler):
        http_handler.queue(httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(UnexpectedTokenResponseError) as exc_info:
            await manager.get_app_token("app-1")

        assert "<html>oops</html>" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, manager, http_handler):
        http_handler.queue(
            httpx.Response(500, text="boom"),
            httpx.Response(200, json=token_payload()),
        )

        with pytest.raises(TokenLookupError):
            await manager.get_app_token("app-1")
        assert await manager.get_app_token("app-1") == "app-token-123"


class TestClearCache:
    """Cache eviction."""

    @pytest.mark.asyncio
    async def test_clear_one_app(self, manager, http_handler):
        http_handler.queue(
            httpx.Response(200, json=token_payload("t1")),
            httpx.Response(200, json=token_payload("t2")),
            httpx.Response(200, json=token_payload("t1-new")),
        )
        await manager.get_app_token("app-1")
        await manager.get_app_token("app-2")

        manager.clear_cache("app-1")

        assert await manager.get_app_token("app-1") == "t1-new"
        assert await manager.get_app_token("app-2") == "t2"
        assert len(http_handler.requests) == 3

    @pytest.mark.asyncio
    async def test_clear_all(self, manager, http_handler):
        http_handler.queue(
            httpx.Response(200, json=token_payload("t1")),
            httpx.Response(200, json=token_payload("t1-new")),
        )
        await manager.get_app_token("app-1")

        manager.clear_cache()

        assert await manager.get_app_token("app-1") == "t1-new"
