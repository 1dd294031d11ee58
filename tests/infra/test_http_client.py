"""Testes do cliente HTTP do provedor SMS (retry, backoff, sanitização)."""

from __future__ import annotations

import httpx
import pytest

from internpath_assistant.config.settings import Settings
from internpath_assistant.infra.http import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    _calculate_backoff,
    _is_retryable_status,
    _sanitize_url,
    create_http_client,
)


def _client(handler, max_retries: int = 2) -> HttpClient:
    config = HttpClientConfig(max_retries=max_retries, backoff_base_seconds=0.0)
    return HttpClient(config, transport=httpx.MockTransport(handler))


class TestHelpers:
    def test_sanitize_url(self) -> None:
        url = "https://sms.example.com/messages?api_key=secret&x=1"
        sanitized = _sanitize_url(url)
        assert "secret" not in sanitized
        assert "api_key=***" in sanitized
        assert "x=1" in sanitized

    def test_retryable_statuses(self) -> None:
        assert _is_retryable_status(429) is True
        assert _is_retryable_status(503) is True
        assert _is_retryable_status(400) is False
        assert _is_retryable_status(404) is False

    def test_backoff(self) -> None:
        assert _calculate_backoff(0, 1.0, 30.0) == 1.0
        assert _calculate_backoff(2, 1.0, 30.0) == 4.0
        assert _calculate_backoff(10, 1.0, 30.0) == 30.0


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        async with _client(lambda request: httpx.Response(202, json={"id": "m1"})) as client:
            response = await client.post("https://sms.example.com/messages", json={"to": "x"})

        assert response.status_code == 202
        assert response.json() == {"id": "m1"}

    @pytest.mark.asyncio
    async def test_retries_server_error(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200)

        async with _client(handler) as client:
            response = await client.request("GET", "https://sms.example.com/status")

        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_retries_exhausted(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(500)

        async with _client(handler, max_retries=1) as client:
            with pytest.raises(HttpError) as exc_info:
                await client.post("https://sms.example.com/messages")

        assert exc_info.value.status_code == 500
        assert exc_info.value.is_retryable is True
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(400)

        async with _client(handler) as client:
            with pytest.raises(HttpError) as exc_info:
                await client.post("https://sms.example.com/messages")

        assert exc_info.value.status_code == 400
        assert exc_info.value.is_retryable is False
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_connection_error_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200)

        async with _client(handler) as client:
            response = await client.post("https://sms.example.com/messages")

        assert response.status_code == 200
        assert len(calls) == 2


class TestCreateHttpClient:
    @pytest.mark.asyncio
    async def test_headers_from_settings(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        settings = Settings(sms_api_token="tok-123", sms_max_retries=0)
        client = create_http_client(settings, transport=httpx.MockTransport(handler))
        try:
            await client.post("https://sms.example.com/messages", json={})
        finally:
            await client.close()

        assert seen[0].headers["Authorization"] == "Bearer tok-123"
        assert seen[0].headers["User-Agent"].startswith(settings.service_name)
