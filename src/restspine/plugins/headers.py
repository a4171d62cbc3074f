"""Static header injection.

Example:
    >>> from restspine.models.http import HTTPMethod, Request
    >>> from restspine.plugins.headers import HeadersPlugin
    >>> plugin = HeadersPlugin({"Authorization": "Bearer abc"})
    >>> plugin.apply(Request(HTTPMethod.GET, "https://x.test")).headers["authorization"]
    'Bearer abc'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restspine.models.http import Request


@dataclass(frozen=True)
class HeadersPlugin:
    """Sets fixed headers on every request, replacing existing values.

    With ``overwrite=False`` headers already present on the request win.
    """

    headers: Mapping[str, str]
    overwrite: bool = True

    def apply(self, request: Request) -> Request:
        for name, value in self.headers.items():
            if self.overwrite or name not in request.headers:
                request.headers[name] = value
        return request


__all__ = [
    "HeadersPlugin",
]
