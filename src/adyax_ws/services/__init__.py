"""Services used by the request pipeline."""

from .codec import CodecError, JsonCodec, StructuredDataCodec
from .validation import Err, Ok, RequestValidator, flatten_errors

__all__ = [
    "CodecError",
    "Err",
    "JsonCodec",
    "Ok",
    "RequestValidator",
    "StructuredDataCodec",
    "flatten_errors",
]
