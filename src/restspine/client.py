"""REST API client.

A :class:`RESTClient` combines an immutable :class:`ClientConfig` with an
HTTP transport. Every call assembles a fresh request from the base
configuration plus call arguments, runs the request plugins and hands the
request to the :class:`~restspine.http.controller.TransportController`.

Example:
    >>> import asyncio
    >>> from pydantic import BaseModel
    >>> from restspine import ClientConfig, HTTPMethod, RESTClient
    >>> from restspine.testing import MockTransport
    >>>
    >>> class User(BaseModel):
    ...     id: int
    ...     name: str
    >>>
    >>> transport = MockTransport().add(200, b'{"id": 1, "name": "Ada"}')
    >>> client = RESTClient(ClientConfig(base_url="https://api.example.com/v1"), transport=transport)
    >>> asyncio.run(client.fetch_and_decode(User, HTTPMethod.GET, "users/1"))
    User(id=1, name='Ada')
    >>> transport.requests[0].url
    'https://api.example.com/v1/users/1'
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote, urlsplit

import httpx

from restspine.core.context import chain_context
from restspine.core.exceptions import ConfigurationError, FailedToDecodeSuccessBody, FailedToEncodeBody
from restspine.encoding.body import encode_body
from restspine.encoding.json import JSONCodec
from restspine.http.controller import TransportController
from restspine.http.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from restspine.http.transport import HttpxTransport
from restspine.models.http import HTTPMethod, Request

if TYPE_CHECKING:
    from restspine.models.body import Body
    from restspine.protocols.plugin import RequestPlugin, ResponsePlugin
    from restspine.protocols.transport import Transport

logger = logging.getLogger("restspine.client")

T = TypeVar("T")

QueryItems = Sequence[tuple[str, str | None]]

ERROR_MESSAGE_KEYS = ("message", "error", "detail", "error_description")


def default_error_body_to_message(body: bytes) -> str:
    """Extract a message from a JSON error body, falling back to the raw text.

    Example:
        >>> default_error_body_to_message(b'{"error": {"message": "Invalid key"}}')
        'Invalid key'
        >>> default_error_body_to_message(b"Bad Request")
        'Bad Request'
    """
    text = body.decode("utf-8")
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError:
        return text.strip()

    while isinstance(payload, dict):
        for key in ERROR_MESSAGE_KEYS:
            if key in payload:
                payload = payload[key]
                break
        else:
            break
    if isinstance(payload, str):
        return payload
    return text.strip()


def encode_query(items: QueryItems) -> str:
    """Percent-encode ordered query items; a None value emits the bare key.

    Example:
        >>> encode_query([("q", "a b"), ("flag", None), ("q", "c")])
        'q=a%20b&flag&q=c'
    """
    parts = []
    for key, value in items:
        if value is None:
            parts.append(quote(key, safe=""))
        else:
            parts.append(f"{quote(key, safe='')}={quote(str(value), safe='')}")
    return "&".join(parts)


def build_url(base_url: str, path: str, query_items: QueryItems = ()) -> str:
    """Append a path and query items to a base URL.

    Example:
        >>> build_url("https://api.example.com/v1/", "/users", [("page", "2")])
        'https://api.example.com/v1/users?page=2'
    """
    url = base_url
    if path:
        url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    query = encode_query(query_items)
    if query:
        url += ("&" if "?" in url else "?") + query
    return url


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration.

    Nothing is written after construction, so one config (and the client
    built from it) can serve any number of concurrent calls.

    Args:
        base_url: URL every path is appended to.
        base_headers: Headers sent with every call.
        base_query_items: Query items sent with every call, before call items.
        json_codec: Encoder/decoder for JSON bodies and responses.
        request_plugins: Applied in order to every assembled request.
        response_plugins: Applied in order to every received response.
        base_error_context: Breadcrumb prefix of every error.
        error_body_to_message: Turns a non-empty 4xx body into a message.
        retry_policy: Attempt limit and delay bounds for 429 responses.

    Raises:
        ConfigurationError: If base_url is not an absolute http(s) URL.

    Example:
        >>> config = ClientConfig(base_url="https://api.example.com", base_error_context="Users")
        >>> config.with_error_context("Admin").base_error_context
        'Admin'
        >>> config.base_error_context
        'Users'
    """

    base_url: str
    base_headers: Mapping[str, str] = field(default_factory=dict)
    base_query_items: QueryItems = ()
    json_codec: JSONCodec = field(default_factory=JSONCodec)
    request_plugins: Sequence[RequestPlugin] = ()
    response_plugins: Sequence[ResponsePlugin] = ()
    base_error_context: str | None = None
    error_body_to_message: Callable[[bytes], str] = default_error_body_to_message
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY

    def __post_init__(self) -> None:
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        object.__setattr__(self, "base_headers", MappingProxyType(dict(self.base_headers)))
        object.__setattr__(self, "base_query_items", tuple(self.base_query_items))
        object.__setattr__(self, "request_plugins", tuple(self.request_plugins))
        object.__setattr__(self, "response_plugins", tuple(self.response_plugins))

    def with_request_plugin(self, plugin: RequestPlugin) -> ClientConfig:
        """Return new config with an additional request plugin."""
        return dataclasses.replace(self, request_plugins=(*self.request_plugins, plugin))

    def with_response_plugin(self, plugin: ResponsePlugin) -> ClientConfig:
        """Return new config with an additional response plugin."""
        return dataclasses.replace(self, response_plugins=(*self.response_plugins, plugin))

    def with_headers(self, headers: Mapping[str, str]) -> ClientConfig:
        """Return new config with headers merged into the base headers."""
        return dataclasses.replace(self, base_headers={**self.base_headers, **headers})

    def with_error_context(self, context: str | None) -> ClientConfig:
        """Return new config with a different base error context."""
        return dataclasses.replace(self, base_error_context=context)

    def with_retry_policy(self, policy: RetryPolicy) -> ClientConfig:
        """Return new config with a different 429 retry policy."""
        return dataclasses.replace(self, retry_policy=policy)


class RESTClient:
    """Async client for a JSON REST API.

    Args:
        config: Immutable client configuration
        transport: HTTP transport (default: :class:`~restspine.http.transport.HttpxTransport`)
    """

    def __init__(self, config: ClientConfig, transport: Transport | None = None):
        self._config = config
        self._transport = transport if transport is not None else HttpxTransport()
        self._controller = TransportController(
            self._transport,
            error_body_to_message=config.error_body_to_message,
            response_plugins=config.response_plugins,
            retry_policy=config.retry_policy,
        )

    @property
    def config(self) -> ClientConfig:
        """Configuration the client was built with; derive a new client to change it."""
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @classmethod
    def create(cls, base_url: str, *, transport: Transport | None = None, **config: Any) -> RESTClient:
        """Build a client from keyword configuration.

        Example:
            >>> client = RESTClient.create("https://api.example.com", base_error_context="Users")
            >>> client.config.base_error_context
            'Users'
        """
        return cls(ClientConfig(base_url=base_url, **config), transport=transport)

    async def __aenter__(self) -> RESTClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if it holds resources."""
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    def error_context(self, request_context: str | None) -> str | None:
        return chain_context(self.config.base_error_context, request_context)

    def build_request(
        self,
        method: HTTPMethod | str,
        path: str,
        body: Body | None = None,
        *,
        extra_headers: Mapping[str, str] | None = None,
        extra_query_items: QueryItems | None = None,
        error_context: str | None = None,
    ) -> Request:
        """Assemble the request for a call and run the request plugins.

        Raises:
            FailedToEncodeBody: If the body cannot be encoded
        """
        config = self.config
        url = build_url(config.base_url, path, (*config.base_query_items, *(extra_query_items or ())))

        headers = httpx.Headers(config.base_headers)
        for name, value in (extra_headers or {}).items():
            headers[name] = value

        content = None
        if body is not None:
            try:
                encoded = encode_body(body, config.json_codec)
            except Exception as e:
                raise FailedToEncodeBody(e, self.error_context(error_context)) from e
            content = encoded.content
            headers["Content-Type"] = encoded.content_type

        headers["Accept"] = "application/json"

        request = Request(method=HTTPMethod(method.upper()), url=url, headers=headers, content=content)
        logger.debug("Assembled %s %s", request.method.value, request.url)
        for plugin in config.request_plugins:
            request = plugin.apply(request)
        return request

    async def fetch_data(
        self,
        method: HTTPMethod | str,
        path: str,
        body: Body | None = None,
        *,
        extra_headers: Mapping[str, str] | None = None,
        extra_query_items: QueryItems | None = None,
        error_context: str | None = None,
    ) -> bytes:
        """Perform a call and return the raw body of the 2xx response.

        Args:
            method: HTTP method
            path: Path appended to the base URL
            body: Optional request body
            extra_headers: Headers overriding base headers of the same name
            extra_query_items: Query items appended after the base items
            error_context: Call-specific error breadcrumb

        Returns:
            Response body bytes

        Raises:
            APIError: Any failure of the call
        """
        request = self.build_request(
            method,
            path,
            body,
            extra_headers=extra_headers,
            extra_query_items=extra_query_items,
            error_context=error_context,
        )
        return await self._controller.execute(request, self.error_context(error_context))

    async def send(
        self,
        method: HTTPMethod | str,
        path: str,
        body: Body | None = None,
        *,
        extra_headers: Mapping[str, str] | None = None,
        extra_query_items: QueryItems | None = None,
        error_context: str | None = None,
    ) -> None:
        """Perform a call, discarding the response body."""
        await self.fetch_data(
            method,
            path,
            body,
            extra_headers=extra_headers,
            extra_query_items=extra_query_items,
            error_context=error_context,
        )

    async def fetch_and_decode(
        self,
        response_type: type[T],
        method: HTTPMethod | str,
        path: str,
        body: Body | None = None,
        *,
        extra_headers: Mapping[str, str] | None = None,
        extra_query_items: QueryItems | None = None,
        error_context: str | None = None,
    ) -> T:
        """Perform a call and decode the 2xx body as ``response_type``.

        Raises:
            FailedToDecodeSuccessBody: If the call succeeded but the payload
                does not decode
            APIError: Any other failure of the call
        """
        data = await self.fetch_data(
            method,
            path,
            body,
            extra_headers=extra_headers,
            extra_query_items=extra_query_items,
            error_context=error_context,
        )
        try:
            return self.config.json_codec.decode(data, response_type)
        except Exception as e:
            raise FailedToDecodeSuccessBody(e, self.error_context(error_context)) from e

    def __repr__(self) -> str:
        return f"RESTClient(base_url={self.config.base_url!r})"


__all__ = [
    "ClientConfig",
    "RESTClient",
    "build_url",
    "encode_query",
    "default_error_body_to_message",
]
