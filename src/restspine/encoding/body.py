"""Request body encoding.

Example:
    >>> from restspine.encoding.body import encode_body
    >>> from restspine.encoding.json import JSONCodec
    >>> from restspine.models.body import FormBody, StringBody
    >>> encode_body(StringBody("héllo"), JSONCodec())
    EncodedBody(content=b'h\\xc3\\xa9llo', content_type='text/plain')
    >>> encode_body(FormBody([("q", "a b"), ("lang", "en&de")]), JSONCodec()).content
    b'q=a+b&lang=en%26de'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple
from urllib.parse import urlencode

from restspine.encoding.multipart import MultipartWriter
from restspine.models.body import (
    BinaryBody,
    Body,
    FormBody,
    JSONBody,
    MultipartBody,
    StringBody,
)

if TYPE_CHECKING:
    from restspine.encoding.json import JSONCodec


class EncodedBody(NamedTuple):
    """Body bytes plus the matching Content-Type header value."""

    content: bytes
    content_type: str


def encode_body(body: Body, codec: JSONCodec) -> EncodedBody:
    """Encode a body with the client's JSON codec.

    Args:
        body: Body to encode
        codec: Codec used for JSON bodies and JSON multipart parts

    Returns:
        Encoded bytes and content type

    Raises:
        Exception: Whatever the codec raises for unencodable JSON values
    """
    if isinstance(body, BinaryBody):
        return EncodedBody(body.data, body.content_type)

    if isinstance(body, JSONBody):
        return EncodedBody(codec.encode(body.value), body.content_type)

    if isinstance(body, StringBody):
        return EncodedBody(body.text.encode("utf-8"), body.content_type)

    if isinstance(body, FormBody):
        return EncodedBody(urlencode(list(body.items)).encode("ascii"), body.content_type)

    if isinstance(body, MultipartBody):
        content = MultipartWriter(body.boundary, codec).write(body.items)
        return EncodedBody(content, body.content_type)

    raise TypeError(f"Unsupported body type: {type(body).__name__}")


__all__ = [
    "EncodedBody",
    "encode_body",
]
