"""Request body variants and HTTP request/response values."""

from restspine.models.body import (
    BinaryBody,
    Body,
    DataValue,
    FormBody,
    JSONBody,
    JSONValue,
    MultipartBody,
    MultipartItem,
    MultipartValue,
    StringBody,
    TextValue,
)
from restspine.models.http import HTTPMethod, Request, Response

__all__ = [
    "Body",
    "BinaryBody",
    "JSONBody",
    "StringBody",
    "FormBody",
    "MultipartBody",
    "MultipartItem",
    "MultipartValue",
    "TextValue",
    "DataValue",
    "JSONValue",
    "HTTPMethod",
    "Request",
    "Response",
]
