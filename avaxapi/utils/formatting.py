"""Hex encoding used by the node APIs for raw byte payloads.

Bytes are sent as ``0x`` followed by the hex of ``data + checksum`` where the
checksum is the last 4 bytes of ``sha256(data)``.
"""

from __future__ import annotations

import binascii
import hashlib

from avaxapi.utils.exceptions import FormattingError

HEX_ENCODING = "hex"
HEX_PREFIX = "0x"
CHECKSUM_LEN = 4


def checksum(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()[-CHECKSUM_LEN:]


def encode_hex(data: bytes) -> str:
    """Encode bytes with checksum suffix."""
    return HEX_PREFIX + (bytes(data) + checksum(bytes(data))).hex()


def decode_hex(text: str) -> bytes:
    """Decode a checksummed hex string, validating prefix and checksum."""
    if not isinstance(text, str):
        raise FormattingError(f"expected hex string, got {type(text).__name__}")
    if not text.startswith(HEX_PREFIX):
        raise FormattingError(f"hex string missing {HEX_PREFIX!r} prefix")
    try:
        raw = bytes.fromhex(text[len(HEX_PREFIX):])
    except (ValueError, binascii.Error) as exc:
        raise FormattingError(f"invalid hex: {exc}") from exc
    if len(raw) < CHECKSUM_LEN:
        raise FormattingError("hex payload shorter than checksum")
    payload, check = raw[:-CHECKSUM_LEN], raw[-CHECKSUM_LEN:]
    if checksum(payload) != check:
        raise FormattingError("checksum mismatch")
    return payload
