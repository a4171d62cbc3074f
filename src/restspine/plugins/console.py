"""Debugging plugins that print requests and responses with Rich.

Output example::

    [RESTClient] Sending POST request to 'https://api.example.com/v1/users'

    Headers:
      accept: application/json
      authorization: [redacted]

    Body:
    {"name":"Ada"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from restspine.core.config import get_settings
from restspine.plugins.redaction import body_text, redacted_headers

if TYPE_CHECKING:
    from restspine.models.http import Request, Response


def _header_block(headers, redact: bool) -> str:
    lines = [f"  {name}: {value}" for name, value in redacted_headers(headers.items(), redact)]
    return "\n" + "\n".join(lines) if lines else "  (none)"


@dataclass(frozen=True)
class PrintRequestPlugin:
    """Prints every outgoing request to the console.

    Attributes:
        debug_only: Only print when settings have ``debug`` enabled
        redact_auth_headers: Replace sensitive header values by ``[redacted]``
        console: Rich console to print to (default: stdout)
    """

    debug_only: bool = True
    redact_auth_headers: bool = True
    console: Console = field(default_factory=Console, compare=False)
    enabled: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", not self.debug_only or get_settings().debug)

    def apply(self, request: Request) -> Request:
        if self.enabled:
            self.console.print(
                f"[RESTClient] Sending {request.method.value} request to '{request.url}'\n\n"
                f"Headers:{_header_block(request.headers, self.redact_auth_headers)}\n\n"
                f"Body:\n{body_text(request.content)}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        return request


@dataclass(frozen=True)
class PrintResponsePlugin:
    """Prints every received response to the console."""

    debug_only: bool = True
    redact_auth_headers: bool = True
    console: Console = field(default_factory=Console, compare=False)
    enabled: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled", not self.debug_only or get_settings().debug)

    def apply(self, response: Response, body: bytes) -> tuple[Response, bytes]:
        if self.enabled:
            self.console.print(
                f"[RESTClient] Response {response.status_code} from '{response.url or 'Unknown URL'}'\n\n"
                f"Response headers:{_header_block(response.headers, self.redact_auth_headers)}\n\n"
                f"Response body:\n{body_text(body)}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        return response, body


__all__ = [
    "PrintRequestPlugin",
    "PrintResponsePlugin",
]
