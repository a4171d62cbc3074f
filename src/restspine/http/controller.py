"""Transport controller: send, run response plugins, classify, retry 429.

Every attempt goes through the same cycle::

    Sending -> Received -> response plugins -> classification
                                               |- 2xx  -> body returned
                                               |- 429  -> sleep, next attempt
                                               |- 4xx  -> ClientError
                                               '- else -> UnexpectedStatusCode

Attempts of one call are strictly sequential. Cancellation during the
transport call or the retry sleep propagates as ``asyncio.CancelledError``.

Example:
    >>> import asyncio
    >>> from restspine.http.controller import TransportController
    >>> from restspine.models.http import HTTPMethod, Request
    >>> from restspine.testing import MockTransport
    >>>
    >>> transport = MockTransport().add(200, b"pong")
    >>> controller = TransportController(transport, error_body_to_message=bytes.decode)
    >>> asyncio.run(controller.execute(Request(HTTPMethod.GET, "https://x.test/ping")))
    b'pong'
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from restspine.core.exceptions import (
    ClientError,
    FailedToDecodeClientErrorBody,
    FailedToLoadData,
    ResponsePluginFailed,
    UnexpectedResponseType,
    UnexpectedStatusCode,
)
from restspine.http.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from restspine.models.http import Response

if TYPE_CHECKING:
    from restspine.models.http import Request
    from restspine.protocols.plugin import ResponsePlugin
    from restspine.protocols.transport import Transport

logger = logging.getLogger("restspine.http")


class TransportController:
    """Drives one request through the transport until it resolves.

    Args:
        transport: Injected HTTP transport
        error_body_to_message: Turns a non-empty 4xx body into a message
        response_plugins: Applied in order to every received response
        retry_policy: Attempt limit and delay bounds for 429 responses
        sleep: Coroutine used to wait between attempts
    """

    def __init__(
        self,
        transport: Transport,
        error_body_to_message: Callable[[bytes], str],
        response_plugins: Sequence[ResponsePlugin] = (),
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.transport = transport
        self.error_body_to_message = error_body_to_message
        self.response_plugins = tuple(response_plugins)
        self.retry_policy = retry_policy
        self._sleep = sleep

    async def execute(self, request: Request, context: str | None = None) -> bytes:
        """Send the request, retrying throttled attempts.

        Args:
            request: Fully assembled request (plugins already applied)
            context: Error breadcrumb attached to any failure

        Returns:
            Body bytes of the 2xx response

        Raises:
            APIError: One of the taxonomy errors describing the failure
        """
        attempt = 1
        while True:
            body, response = await self._perform(request, context)
            response, body = self._apply_plugins(response, body, context)

            status = response.status_code
            if 200 <= status < 300:
                return body

            if self.retry_policy.should_retry(status, attempt):
                delay = self.retry_policy.calculate_delay(attempt, response.headers)
                logger.warning(
                    "Received status 429 for %s %s (attempt %d/%d). Retrying in %.1fs...",
                    request.method.value,
                    request.url,
                    attempt,
                    self.retry_policy.max_attempts,
                    delay,
                )
                await self._sleep(delay)
                attempt += 1
                continue

            if 400 <= status < 500:
                raise self._client_error(status, body, context)

            raise UnexpectedStatusCode(status, context)

    async def _perform(self, request: Request, context: str | None) -> tuple[bytes, Response]:
        logger.debug("Sending %s request to '%s'", request.method.value, request.url)
        try:
            result = await self.transport.send(request)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise FailedToLoadData(e, context) from e

        try:
            body, response = result
        except (TypeError, ValueError):
            raise UnexpectedResponseType(result, context) from None

        if not isinstance(response, Response):
            raise UnexpectedResponseType(response, context)

        logger.debug(
            "Received %d from '%s' (%d bytes)", response.status_code, response.url or request.url, len(body)
        )
        return bytes(body), response

    def _apply_plugins(
        self, response: Response, body: bytes, context: str | None
    ) -> tuple[Response, bytes]:
        for plugin in self.response_plugins:
            try:
                response, body = plugin.apply(response, body)
            except Exception as e:
                raise ResponsePluginFailed(e, context) from e
        return response, body

    def _client_error(self, status: int, body: bytes, context: str | None) -> Exception:
        if not body:
            return ClientError(f"Unexpected status code {status} without a response body.", context)
        try:
            message = self.error_body_to_message(body)
        except Exception as e:
            return FailedToDecodeClientErrorBody(e, context)
        return ClientError(message, context)


__all__ = [
    "TransportController",
]
