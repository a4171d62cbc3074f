"""Debugging plugins that write requests and responses to ``logging``.

Each plugin logs one INFO line (method or status plus URL) and DEBUG lines
with the headers and body. By default they only log when
``RESTSPINE_DEBUG`` is enabled and they mask sensitive headers.

Example:
    >>> from restspine.plugins.log import LogRequestPlugin, LogResponsePlugin
    >>> plugin = LogRequestPlugin(debug_only=False)
    >>> plugin.enabled
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from restspine.core.config import get_settings
from restspine.plugins.redaction import body_text, redacted_headers

if TYPE_CHECKING:
    from restspine.models.http import Request, Response

logger = logging.getLogger("restspine.plugins")


def _debug_enabled() -> bool:
    return get_settings().debug


def _format_headers(headers, redact: bool) -> str:
    return ", ".join(f"{name}={value}" for name, value in redacted_headers(headers.items(), redact))


@dataclass(frozen=True)
class LogRequestPlugin:
    """Logs every outgoing request.

    Attributes:
        debug_only: Only log when settings have ``debug`` enabled
        redact_auth_headers: Replace sensitive header values by ``[redacted]``
        logger: Logger to write to
    """

    debug_only: bool = True
    redact_auth_headers: bool = True
    logger: logging.Logger = field(default=logger, compare=False)
    enabled: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", not self.debug_only or _debug_enabled())

    def apply(self, request: Request) -> Request:
        if self.enabled:
            self.logger.info("Sending %s request to '%s'", request.method.value, request.url)
            self.logger.debug("Headers: %s", _format_headers(request.headers, self.redact_auth_headers))
            self.logger.debug("Body: %s", body_text(request.content))
        return request


@dataclass(frozen=True)
class LogResponsePlugin:
    """Logs every received response, including retried ones."""

    debug_only: bool = True
    redact_auth_headers: bool = True
    logger: logging.Logger = field(default=logger, compare=False)
    enabled: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", not self.debug_only or _debug_enabled())

    def apply(self, response: Response, body: bytes) -> tuple[Response, bytes]:
        if self.enabled:
            self.logger.info("Response %d from '%s'", response.status_code, response.url or "Unknown URL")
            self.logger.debug("Headers: %s", _format_headers(response.headers, self.redact_auth_headers))
            self.logger.debug("Body: %s", body_text(body))
        return response, body


__all__ = [
    "LogRequestPlugin",
    "LogResponsePlugin",
]
