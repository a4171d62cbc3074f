"""Request body variants.

A body is one of five closed cases, each a frozen dataclass deriving from
:class:`Body`. :mod:`restspine.encoding.body` turns them into bytes.

Example:
    >>> from restspine.models.body import FormBody, MultipartBody, MultipartItem, TextValue
    >>> FormBody([("q", "swift"), ("page", "2")]).content_type
    'application/x-www-form-urlencoded'
    >>> body = MultipartBody([MultipartItem("model", TextValue("gpt-image-1"))])
    >>> body.content_type == f"multipart/form-data; boundary={body.boundary}"
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union
from uuid import UUID, uuid4

BOUNDARY_PREFIX = "restspine-boundary-"


class Body:
    """Base class of all request bodies."""

    content_type: ClassVar[str]


@dataclass(frozen=True)
class BinaryBody(Body):
    """Raw bytes sent as ``application/octet-stream``."""

    data: bytes

    content_type: ClassVar[str] = "application/octet-stream"


@dataclass(frozen=True)
class JSONBody(Body):
    """Any value the client's JSON codec can encode."""

    value: Any

    content_type: ClassVar[str] = "application/json"


@dataclass(frozen=True)
class StringBody(Body):
    """Plain text, encoded as UTF-8."""

    text: str

    content_type: ClassVar[str] = "text/plain"


@dataclass(frozen=True)
class FormBody(Body):
    """Ordered key/value pairs, percent-encoded."""

    items: Sequence[tuple[str, str]]

    content_type: ClassVar[str] = "application/x-www-form-urlencoded"

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


# Multipart parts


@dataclass(frozen=True)
class TextValue:
    """A plain text form field."""

    text: str


@dataclass(frozen=True)
class DataValue:
    """A binary part, optionally described by a file name and MIME type."""

    data: bytes
    file_name: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class JSONValue:
    """A part encoded with the client's JSON codec."""

    value: Any


MultipartValue = Union[TextValue, DataValue, JSONValue]


@dataclass(frozen=True)
class MultipartItem:
    """A named part of a multipart body.

    Example:
        >>> item = MultipartItem("image", DataValue(b"...", file_name="a.png", mime_type="image/png"))
        >>> item.name
        'image'
    """

    name: str
    value: MultipartValue


@dataclass(frozen=True)
class MultipartBody(Body):
    """Ordered multipart/form-data parts.

    ``request_id`` is drawn once per instance and is the only input to the
    boundary, so an instance always encodes to the same bytes while two
    instances never share a boundary.

    Example:
        >>> items = [MultipartItem("a", TextValue("1"))]
        >>> MultipartBody(items).boundary != MultipartBody(items).boundary
        True
    """

    items: Sequence[MultipartItem]
    request_id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def boundary(self) -> str:
        return f"{BOUNDARY_PREFIX}{self.request_id.hex}"

    @property
    def content_type(self) -> str:  # type: ignore[override]
        return f"multipart/form-data; boundary={self.boundary}"


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
    "BOUNDARY_PREFIX",
]
