"""Body encoding: JSON codec, multipart writer and body encoder."""

from restspine.encoding.body import EncodedBody, encode_body
from restspine.encoding.json import JSONCodec, KeyStrategy
from restspine.encoding.multipart import MultipartWriter

__all__ = [
    "EncodedBody",
    "encode_body",
    "JSONCodec",
    "KeyStrategy",
    "MultipartWriter",
]
