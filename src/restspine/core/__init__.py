"""Core configuration, errors and context chaining."""

from restspine.core.config import Settings, get_settings
from restspine.core.context import chain_context
from restspine.core.exceptions import (
    APIError,
    ClientError,
    ConfigurationError,
    FailedToDecodeClientErrorBody,
    FailedToDecodeSuccessBody,
    FailedToEncodeBody,
    FailedToLoadData,
    ResponsePluginFailed,
    RestSpineError,
    UnexpectedResponseType,
    UnexpectedStatusCode,
)

__all__ = [
    "Settings",
    "get_settings",
    "chain_context",
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
