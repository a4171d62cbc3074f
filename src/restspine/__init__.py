"""
restspine - Async REST API Client Framework.

restspine is a protocol-based client for JSON REST APIs with typed request
bodies, an ordered plugin pipeline and a structured error taxonomy.

Key Features:
- Typed bodies (binary, JSON, text, form, multipart/form-data)
- Request and response plugins (logging, header injection, redaction)
- Errors that tell where a call failed and carry a context breadcrumb
- Bounded automatic retry of rate-limited (HTTP 429) responses
- Pluggable transport (httpx by default)

Quick Start:
    >>> from restspine import ClientConfig, HTTPMethod, JSONBody, RESTClient
    >>> config = ClientConfig(base_url="https://api.example.com/v1", base_error_context="Users")
    >>> async with RESTClient(config) as client:
    ...     await client.send(HTTPMethod.POST, "users", JSONBody({"name": "Ada"}))

Architecture:
    Client: RESTClient, ClientConfig
    Bodies: BinaryBody, JSONBody, StringBody, FormBody, MultipartBody
    Plugins: HeadersPlugin, LogRequestPlugin, LogResponsePlugin,
        PrintRequestPlugin, PrintResponsePlugin
    Transport: HttpxTransport, restspine.testing.MockTransport
"""

# Client
from restspine.client import ClientConfig, RESTClient, default_error_body_to_message

# Configuration
from restspine.core.config import Settings, get_settings
from restspine.core.context import chain_context

# Errors
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

# Encoding
from restspine.encoding.body import EncodedBody, encode_body
from restspine.encoding.json import JSONCodec, KeyStrategy
from restspine.encoding.multipart import MultipartWriter

# HTTP layer
from restspine.http.controller import TransportController
from restspine.http.retry import RetryPolicy
from restspine.http.transport import HttpxTransport

# Models
from restspine.models.body import (
    BinaryBody,
    Body,
    DataValue,
    FormBody,
    JSONBody,
    JSONValue,
    MultipartBody,
    MultipartItem,
    StringBody,
    TextValue,
)
from restspine.models.http import HTTPMethod, Request, Response

# Plugins
from restspine.plugins import (
    HeadersPlugin,
    LogRequestPlugin,
    LogResponsePlugin,
    PrintRequestPlugin,
    PrintResponsePlugin,
)
from restspine.protocols import RequestPlugin, ResponsePlugin, Transport

__version__ = "0.1.0"

__all__ = [
    # Client
    "RESTClient",
    "ClientConfig",
    "default_error_body_to_message",
    # Configuration
    "Settings",
    "get_settings",
    "chain_context",
    # Errors
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
    # Encoding
    "EncodedBody",
    "encode_body",
    "JSONCodec",
    "KeyStrategy",
    "MultipartWriter",
    # HTTP
    "TransportController",
    "RetryPolicy",
    "HttpxTransport",
    # Models
    "Body",
    "BinaryBody",
    "JSONBody",
    "StringBody",
    "FormBody",
    "MultipartBody",
    "MultipartItem",
    "TextValue",
    "DataValue",
    "JSONValue",
    "HTTPMethod",
    "Request",
    "Response",
    # Plugins
    "RequestPlugin",
    "ResponsePlugin",
    "HeadersPlugin",
    "LogRequestPlugin",
    "LogResponsePlugin",
    "PrintRequestPlugin",
    "PrintResponsePlugin",
    # Transport
    "Transport",
    # Version
    "__version__",
]
