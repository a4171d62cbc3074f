"""Request and response plugin protocols.

Plugins are the interception points of a client. Request plugins see the
fully assembled request right before it is sent; response plugins see every
received response (including those that will be retried) before its status
code is classified.

Example:
    >>> from restspine.protocols.plugin import RequestPlugin, ResponsePlugin
    >>> hasattr(RequestPlugin, "apply")
    True
    >>> hasattr(ResponsePlugin, "apply")
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from restspine.models.http import Request, Response


@runtime_checkable
class RequestPlugin(Protocol):
    """Transforms an outgoing request.

    Implementations must not raise; typical uses are header injection and
    logging.
    """

    def apply(self, request: Request) -> Request:
        """Return the request to send (usually the same object, mutated)."""
        ...


@runtime_checkable
class ResponsePlugin(Protocol):
    """Inspects or rewrites a received response and its body.

    Raising aborts the call with
    :class:`~restspine.core.exceptions.ResponsePluginFailed`.
    """

    def apply(self, response: Response, body: bytes) -> tuple[Response, bytes]:
        """Return the response and body seen by later plugins and classification."""
        ...


__all__ = [
    "RequestPlugin",
    "ResponsePlugin",
]
