"""Shared helpers: error hierarchy and byte formatting."""

from avaxapi.utils.exceptions import (
    AvaxApiError,
    DecodingError,
    EncodingError,
    ErrorCategory,
    FormattingError,
    RemoteError,
    RPCError,
    TimeoutError,
    TransportError,
)
from avaxapi.utils.formatting import decode_hex, encode_hex

__all__ = [
    "AvaxApiError",
    "DecodingError",
    "EncodingError",
    "ErrorCategory",
    "FormattingError",
    "RemoteError",
    "RPCError",
    "TimeoutError",
    "TransportError",
    "decode_hex",
    "encode_hex",
]
