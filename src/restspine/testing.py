"""Testing utilities for REST clients.

This module provides a scripted transport for testing clients without
network access.

Example:
    >>> import asyncio
    >>> from restspine.models.http import HTTPMethod, Request
    >>> from restspine.testing import MockTransport
    >>>
    >>> transport = MockTransport().add(429, headers={"retry-after": "1"}).add(200, b'{"ok": true}')
    >>> body, response = asyncio.run(transport.send(Request(HTTPMethod.GET, "https://x.test")))
    >>> response.status_code
    429
    >>> len(transport.requests)
    1
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from restspine.models.http import Request, Response


class NoResponseQueued(AssertionError):
    """Raised by :class:`MockTransport` when a request arrives with an empty queue.

    This is a test setup mistake, so it derives from ``AssertionError``. The
    controller still reports it as ``FailedToLoadData``; inspect ``cause``.
    """

    def __init__(self, request: Request):
        self.request = request
        super().__init__(
            f"MockTransport queue is empty: no response queued for {request.method.value} {request.url}. "
            "Queue one with add(), add_error(), add_raw() or respond_always()."
        )


@dataclass
class MockTransport:
    """Transport replaying queued outcomes in order.

    Each queued outcome is either a ``(body, Response)`` pair, an exception
    to raise, or any other object returned as the response (useful for
    non-HTTP response scenarios). When the queue is empty, ``default`` is
    replayed if set, otherwise :class:`NoResponseQueued` is raised.

    Attributes:
        requests: Snapshot of every request received, in order
        default: Outcome replayed forever once the queue is exhausted
    """

    requests: list[Request] = field(default_factory=list)
    default: Any = None
    _outcomes: deque[Any] = field(default_factory=deque, init=False, repr=False)

    def add(
        self,
        status_code: int,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
        url: str = "",
    ) -> MockTransport:
        """Queue an HTTP response."""
        self._outcomes.append((body, Response(status_code, dict(headers or {}), url)))
        return self

    def add_error(self, error: BaseException) -> MockTransport:
        """Queue an exception raised by ``send``."""
        self._outcomes.append(error)
        return self

    def add_raw(self, outcome: Any) -> MockTransport:
        """Queue an arbitrary ``(body, response)`` result."""
        self._outcomes.append(outcome)
        return self

    def respond_always(self, status_code: int, body: bytes = b"", headers: Mapping[str, str] | None = None) -> MockTransport:
        """Replay the same response once the queue is exhausted."""
        self.default = (body, Response(status_code, dict(headers or {})))
        return self

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def send(self, request: Request) -> tuple[bytes, Response]:
        self.requests.append(Request(request.method, request.url, request.headers.copy(), request.content))

        if self._outcomes:
            outcome = self._outcomes.popleft()
        elif self.default is not None:
            outcome = self.default
        else:
            raise NoResponseQueued(request)

        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, tuple) and len(outcome) == 2 and isinstance(outcome[1], Response):
            body, response = outcome
            return body, Response(response.status_code, response.headers.copy(), response.url or request.url)
        return outcome


__all__ = [
    "MockTransport",
    "NoResponseQueued",
]
