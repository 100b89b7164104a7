# -*- coding: utf-8 -*-
"""
RU: Преобразования байты <-> текст и выходные кодировки (raw, hex, HEX, base64url).

EN: Byte buffer <-> text helpers and output encodings for digests and tags.

Supported encodings: "raw" (bytes unchanged), "hex" (lowercase), "HEX"
(uppercase) and "base64url" (URL-safe alphabet, no padding). Any other value
falls through to the raw bytes.
"""
from __future__ import annotations

import base64
import logging
from typing import Final, Optional, Union

from signkit.protocols import BytesLike

_LOGGER: Final = logging.getLogger(__name__)


def string_to_bytes(text: str) -> bytes:
    """UTF-8 encode a string."""
    return text.encode("utf-8")


def bytes_to_string(data: BytesLike) -> str:
    """UTF-8 decode a buffer."""
    return bytes(data).decode("utf-8")


def hex_encode(data: BytesLike) -> str:
    """Lowercase hex, two digits per byte."""
    return bytes(data).hex()


def base64url_encode(data: Union[str, BytesLike]) -> str:
    """
    Encode to base64url without padding.

    Strings are UTF-8 encoded first.
    """
    raw = string_to_bytes(data) if isinstance(data, str) else bytes(data)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def base64url_decode(text: str) -> bytes:
    """
    Decode base64url text; missing padding is tolerated.

    Raises:
        ValueError: on characters outside the base64url alphabet.
    """
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(
        padded.encode("ascii"), altchars=b"-_", validate=True
    )


def encode_bytes(
    buffer: BytesLike, encoding: Optional[str]
) -> Union[bytes, str]:
    """
    Render a buffer in the requested encoding.

    Args:
        buffer: bytes to render.
        encoding: "raw", "hex", "HEX" or "base64url".

    Returns:
        str for the textual encodings, otherwise the raw bytes.
    """
    data = bytes(buffer)
    if encoding == "hex":
        return hex_encode(data)
    if encoding == "HEX":
        return hex_encode(data).upper()
    if encoding == "base64url":
        return base64url_encode(data)
    if encoding != "raw":
        # TODO: raise on unknown encodings once callers stop relying on the raw fallback
        _LOGGER.debug("Unknown encoding %r, returning raw bytes", encoding)
    return data


__all__ = [
    "string_to_bytes",
    "bytes_to_string",
    "hex_encode",
    "base64url_encode",
    "base64url_decode",
    "encode_bytes",
]
