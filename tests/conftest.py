# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pytest configuration and shared fixtures."""

import io
import json
from typing import Callable

import httpx
import pytest

from gupshup_mcp.config import clear_settings_cache

GUPSHUP_ENV_VARS = [
    "GUPSHUP_PARTNER_TOKEN",
    "GUPSHUP_BASE_URL",
    "GUPSHUP_DEFAULT_APP_ID",
    "GUPSHUP_USER_ID",
    "GUPSHUP_PASSWORD",
    "GUPSHUP_WHATSAPP_USER_ID",
    "GUPSHUP_WHATSAPP_PASSWORD",
    "GUPSHUP_API_ENDPOINT",
    "GUPSHUP_WHATSAPP_API_ENDPOINT",
    "GUPSHUP_LOG_LEVEL",
    "GUPSHUP_REDACT_LOGS",
    "GUPSHUP_MAX_RETRIES",
    "GUPSHUP_RETRY_BASE_MS",
    "GUPSHUP_RETRY_MAX_MS",
    "GUPSHUP_RETRY_JITTER_MS",
    "GUPSHUP_TIMEOUT_SECONDS",
    "GUPSHUP_SERVER_LOG_LEVEL",
    "GUPSHUP_SERVER_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch, tmp_path):
    """Reset settings cache and isolate tests from the real environment."""
    for name in GUPSHUP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


class FakeClock:
    """Millisecond clock advanced by FakeSleep."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeSleep:
    """Records requested sleeps (seconds) and advances an optional clock."""

    def __init__(self, clock: FakeClock | None = None):
        self.calls: list[float] = []
        self.clock = clock

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds * 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_sleep(clock) -> FakeSleep:
    return FakeSleep(clock)


class CapturedLog(io.StringIO):
    """Stream for a gateway logger that parses the JSON lines back."""

    def lines(self) -> list[dict]:
        return [json.loads(line) for line in self.getvalue().splitlines() if line.strip()]


@pytest.fixture
def log_stream() -> CapturedLog:
    return CapturedLog()


class RecordingHandler:
    """MockTransport handler returning queued responses and recording requests."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response] | None = None):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []
        self.responder = responder

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self.responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(200, json={})


@pytest.fixture
def http_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def http_client(http_handler) -> httpx.AsyncClient:
    """AsyncClient backed by MockTransport and http_handler."""
    return httpx.AsyncClient(transport=httpx.MockTransport(http_handler))