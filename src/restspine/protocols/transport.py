"""HTTP transport protocol.

The client never opens sockets itself. A transport sends one request and
returns the body bytes together with the response. Timeouts, TLS and
connection pooling are the transport's business.

Example:
    >>> from restspine.protocols.transport import Transport
    >>> hasattr(Transport, "send")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from restspine.models.http import Request, Response


@runtime_checkable
class Transport(Protocol):
    """Async HTTP transport.

    Implementations raise on I/O failures (no response at all); any HTTP
    status, including errors, is returned normally.
    """

    async def send(self, request: Request) -> tuple[bytes, Response]:
        """Send the request and return ``(body, response)``."""
        ...


__all__ = [
    "Transport",
]
