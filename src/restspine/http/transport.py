"""Default transport backed by ``httpx.AsyncClient``.

Example:
    >>> import asyncio
    >>> import httpx
    >>> from restspine.http.transport import HttpxTransport
    >>> from restspine.models.http import HTTPMethod, Request
    >>>
    >>> mock = httpx.MockTransport(lambda request: httpx.Response(204))
    >>> async def example():
    ...     async with HttpxTransport(client=httpx.AsyncClient(transport=mock)) as transport:
    ...         body, response = await transport.send(Request(HTTPMethod.DELETE, "https://x.test/a"))
    ...     return response.status_code, body
    >>> asyncio.run(example())
    (204, b'')
"""

from __future__ import annotations

import httpx

from restspine.core.config import get_settings
from restspine.models.http import Request, Response


class HttpxTransport:
    """Async HTTP transport using httpx.

    The underlying ``httpx.AsyncClient`` is created lazily unless one is
    passed in. A passed-in client is still closed by :meth:`aclose`.

    Attributes:
        timeout: Request timeout in seconds for a lazily created client
        user_agent: User-Agent header for a lazily created client
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        follow_redirects: bool = True,
    ):
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.user_agent = user_agent or settings.user_agent
        self.follow_redirects = follow_redirects
        self._client = client

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.user_agent},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=self.follow_redirects,
            )
        return self._client

    async def send(self, request: Request) -> tuple[bytes, Response]:
        """Send a request; ``httpx.HTTPError`` propagates on I/O failure."""
        client = self._ensure_client()
        httpx_request = client.build_request(
            request.method.value,
            request.url,
            headers=request.headers,
            content=request.content,
        )
        httpx_response = await client.send(httpx_request)
        try:
            body = await httpx_response.aread()
        finally:
            await httpx_response.aclose()

        return body, Response(
            status_code=httpx_response.status_code,
            headers=httpx_response.headers,
            url=str(httpx_response.url),
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpxTransport:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


__all__ = [
    "HttpxTransport",
]
