"""HTTP request/response values exchanged with transports and plugins.

A :class:`Request` is built fresh for every client call and handed to the
request plugins, which may mutate it. Every attempt produces a new
:class:`Response`.

Example:
    >>> from restspine.models.http import HTTPMethod, Request
    >>> request = Request(method=HTTPMethod.GET, url="https://api.example.com/users")
    >>> request.headers["accept"] = "application/json"
    >>> request.headers["Accept"]
    'application/json'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import httpx


class HTTPMethod(str, Enum):
    """HTTP methods the client can issue.

    Example:
        >>> HTTPMethod("PATCH")
        <HTTPMethod.PATCH: 'PATCH'>
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class Request:
    """Outgoing request.

    Attributes:
        method: HTTP method
        url: Absolute URL including the query string
        headers: Case-insensitive header map
        content: Encoded body bytes, or None when no body is sent
    """

    method: HTTPMethod
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)


@dataclass
class Response:
    """Received HTTP status line and headers (the body travels separately).

    Example:
        >>> response = Response(status_code=429, headers={"Retry-After": "2"})
        >>> response.headers.get("retry-after")
        '2'
        >>> response.is_success
        False
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


__all__ = [
    "HTTPMethod",
    "Request",
    "Response",
]
