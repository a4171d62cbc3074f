"""Custom exceptions.

Every failure of a client call is raised as exactly one :class:`APIError`
subclass. The subclass tells *where* the call failed, ``cause`` holds the
underlying exception (if any) and ``context`` holds the breadcrumb built by
:func:`restspine.core.context.chain_context`.

Example:
    >>> from restspine.core.exceptions import APIError, UnexpectedStatusCode
    >>> error = UnexpectedStatusCode(503, context="Users->fetchProfile")
    >>> isinstance(error, APIError)
    True
    >>> str(error)
    '[Users->fetchProfile: Server Error] Unexpected status code: 503'
"""

from __future__ import annotations

from typing import Any


class RestSpineError(Exception):
    """Base exception for restspine.

    Example:
        >>> from restspine.core.exceptions import RestSpineError
        >>> str(RestSpineError("something went wrong"))
        'something went wrong'
    """


class APIError(RestSpineError):
    """A REST call failed.

    Attributes:
        cause: The underlying exception, or None.
        context: Breadcrumb of the failing call, or None when neither the
            client nor the call provided one.
    """

    label = "Client Error"

    def __init__(self, cause: BaseException | None = None, context: str | None = None):
        self.cause = cause
        self.context = context
        if cause is not None:
            self.__cause__ = cause
        super().__init__(self.description)

    @property
    def prefix(self) -> str:
        """Bracketed context and failure domain, e.g. ``[Users: Client Error]``."""
        if self.context:
            return f"[{self.context}: {self.label}]"
        return f"[{self.label}]"

    @property
    def detail(self) -> str:
        return str(self.cause) if self.cause is not None else "Unknown error"

    @property
    def description(self) -> str:
        """Human-readable message including the breadcrumb."""
        return f"{self.prefix} {self.detail}"

    @property
    def is_client_error(self) -> bool:
        return self.label == "Client Error"

    @property
    def is_server_error(self) -> bool:
        return self.label == "Server Error"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cause={self.cause!r}, context={self.context!r})"


class ResponsePluginFailed(APIError):
    """A response plugin raised while processing the response."""

    @property
    def detail(self) -> str:
        return f"Response plugin failed: {self.cause}"


class FailedToEncodeBody(APIError):
    """The request body could not be encoded."""

    @property
    def detail(self) -> str:
        return f"Failed to encode body: {self.cause}"


class FailedToLoadData(APIError):
    """The transport failed before any response arrived."""

    @property
    def detail(self) -> str:
        return f"Failed to load data: {self.cause}"


class FailedToDecodeSuccessBody(APIError):
    """A 2xx response body could not be decoded into the requested type."""

    @property
    def detail(self) -> str:
        return f"Failed to decode success body: {self.cause}"


class FailedToDecodeClientErrorBody(APIError):
    """The error-body parser raised on a 4xx response body."""

    @property
    def detail(self) -> str:
        return f"Failed to decode client error body: {self.cause}"


class ClientError(APIError):
    """The server answered with a 4xx status.

    Example:
        >>> from restspine.core.exceptions import ClientError
        >>> str(ClientError("Not found", context="Users"))
        '[Users: Client Error] Not found'
    """

    def __init__(self, message: str, context: str | None = None):
        self.message = message
        super().__init__(None, context)

    @property
    def detail(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ClientError(message={self.message!r}, context={self.context!r})"


class UnexpectedResponseType(APIError):
    """The transport returned something that is not an HTTP response."""

    label = "Server Error"

    def __init__(self, response: Any, context: str | None = None):
        self.response = response
        super().__init__(None, context)

    @property
    def detail(self) -> str:
        return f"Unexpected response type (non-HTTP): {type(self.response).__name__}"

    def __repr__(self) -> str:
        return f"UnexpectedResponseType(response={self.response!r}, context={self.context!r})"


class UnexpectedStatusCode(APIError):
    """The server answered with a status outside 2xx and 4xx."""

    label = "Server Error"

    def __init__(self, status_code: int, context: str | None = None):
        self.status_code = status_code
        super().__init__(None, context)

    @property
    def detail(self) -> str:
        return f"Unexpected status code: {self.status_code}"

    def __repr__(self) -> str:
        return f"UnexpectedStatusCode(status_code={self.status_code!r}, context={self.context!r})"


class ConfigurationError(RestSpineError):
    """Client configuration is invalid.

    Example:
        >>> from restspine.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("missing base_url")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: missing base_url
    """


__all__ = [
    "RestSpineError",
    "APIError",
    "ResponsePluginFailed",
    "FailedToEncodeBody",
    "FailedToLoadData",
    "FailedToDecodeSuccessBody",
    "FailedToDecodeClientErrorBody",
    "ClientError",
    "UnexpectedResponseType",
    "UnexpectedStatusCode",
    "ConfigurationError",
]
