"""multipart/form-data serialization (RFC 2046 framing).

Example:
    >>> from restspine.encoding.json import JSONCodec
    >>> from restspine.encoding.multipart import MultipartWriter
    >>> from restspine.models.body import MultipartItem, TextValue
    >>> writer = MultipartWriter("B", JSONCodec())
    >>> writer.write([MultipartItem("model", TextValue("gpt-image-1"))])
    b'--B\\r\\nContent-Disposition: form-data; name="model"\\r\\n\\r\\ngpt-image-1\\r\\n--B--\\r\\n'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from restspine.models.body import DataValue, JSONValue, MultipartItem, TextValue

if TYPE_CHECKING:
    from restspine.encoding.json import JSONCodec

CRLF = b"\r\n"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_HEADER_ESCAPES = str.maketrans({'"': "%22", "\r": "%0D", "\n": "%0A"})


def normalize_newlines(text: str) -> str:
    """Turn every line break of a text value into CRLF.

    Example:
        >>> normalize_newlines("a\\nb\\rc\\r\\nd")
        'a\\r\\nb\\r\\nc\\r\\nd'
    """
    return _LINE_BREAK.sub("\r\n", text)


def escape_header_value(value: str) -> str:
    """Percent-escape quote, CR and LF in a Content-Disposition parameter.

    Example:
        >>> escape_header_value('my "file".png')
        'my %22file%22.png'
    """
    return value.translate(_HEADER_ESCAPES)


class MultipartWriter:
    """Writes ordered multipart items delimited by a fixed boundary.

    JSON parts are encoded with the given codec; its exceptions propagate
    unchanged so the caller can report them as body encoding failures.
    """

    def __init__(self, boundary: str, codec: JSONCodec):
        self.boundary = boundary
        self.codec = codec

    def write(self, items: Iterable[MultipartItem]) -> bytes:
        buffer = bytearray()
        delimiter = f"--{self.boundary}".encode()

        for item in items:
            payload, headers = self._part(item)
            buffer += delimiter + CRLF
            for header in headers:
                buffer += header.encode() + CRLF
            buffer += CRLF
            buffer += payload + CRLF

        buffer += delimiter + b"--" + CRLF
        return bytes(buffer)

    def _part(self, item: MultipartItem) -> tuple[bytes, list[str]]:
        disposition = f'Content-Disposition: form-data; name="{escape_header_value(item.name)}"'
        value = item.value

        if isinstance(value, TextValue):
            return normalize_newlines(value.text).encode(), [disposition]

        if isinstance(value, DataValue):
            if value.file_name is not None:
                disposition += f'; filename="{escape_header_value(value.file_name)}"'
            headers = [disposition]
            if value.mime_type is not None:
                headers.append(f"Content-Type: {value.mime_type}")
            return value.data, headers

        if isinstance(value, JSONValue):
            return self.codec.encode(value.value), [disposition, "Content-Type: application/json"]

        raise TypeError(f"Unsupported multipart value: {type(value).__name__}")


__all__ = [
    "MultipartWriter",
    "escape_header_value",
    "normalize_newlines",
]
