"""Tests for the httpx-backed transport."""

from __future__ import annotations

import httpx
import pytest

from restspine.http.transport import HttpxTransport
from restspine.models.http import HTTPMethod, Request, Response

pytestmark = pytest.mark.asyncio


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Request translation and response mapping."""

    async def test_sends_method_url_headers_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, headers={"X-Id": "7"}, content=b'{"id": 7}')

        async with make_transport(handler) as transport:
            body, response = await transport.send(
                Request(
                    HTTPMethod.POST,
                    "https://api.example.com/users?page=1",
                    headers={"Content-Type": "application/json", "Accept": "application/json"},
                    content=b'{"name":"Ada"}',
                )
            )

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.example.com/users?page=1"
        assert request.headers["content-type"] == "application/json"
        assert request.content == b'{"name":"Ada"}'

        assert body == b'{"id": 7}'
        assert isinstance(response, Response)
        assert response.status_code == 201
        assert response.headers["x-id"] == "7"
        assert response.url == "https://api.example.com/users?page=1"

    async def test_error_statuses_are_returned(self) -> None:
        """HTTP error statuses are not raised by the transport."""
        async with make_transport(lambda request: httpx.Response(503, content=b"down")) as transport:
            body, response = await transport.send(Request(HTTPMethod.GET, "https://api.example.com/"))

        assert response.status_code == 503
        assert body == b"down"

    async def test_io_errors_propagate(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_transport(handler) as transport:
            with pytest.raises(httpx.ConnectError):
                await transport.send(Request(HTTPMethod.GET, "https://api.example.com/"))

    async def test_aclose_closes_client(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.aclose()
        assert client.is_closed

    async def test_lazy_client_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESTSPINE_REQUEST_TIMEOUT", "12.5")
        transport = HttpxTransport()
        assert transport.timeout == 12.5
        await transport.aclose()
