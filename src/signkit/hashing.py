# -*- coding: utf-8 -*-
"""
RU: Бесключевые дайджесты и потоковое хеширование файлов SHA-256.

EN: Unkeyed digests.

``compute_digest`` returns raw bytes unless asked otherwise, while ``sha256`` and
``sha256_file`` return lowercase hex.
"""
from __future__ import annotations

import logging
import os
from typing import Final, Optional, Union

from signkit.config import resolve_encoding
from signkit.encoding import encode_bytes, hex_encode, string_to_bytes
from signkit.primitives import digest_bytes, new_hash_context
from signkit.protocols import AlgorithmIdentifier, BytesLike

_LOGGER: Final = logging.getLogger(__name__)

_FILE_CHUNK: Final[int] = 64 * 1024


def compute_digest(
    algorithm: AlgorithmIdentifier,
    data: Union[str, BytesLike],
    encoding: Optional[str] = None,
) -> Union[bytes, str]:
    """
    Hash ``data`` with ``algorithm``.

    Args:
        algorithm: hash algorithm identifier.
        data: text (UTF-8 encoded) or bytes.
        encoding: output encoding, "raw" when None.
    """
    payload = string_to_bytes(data) if isinstance(data, str) else bytes(data)
    return encode_bytes(
        digest_bytes(algorithm, payload), resolve_encoding(encoding, "raw")
    )


def sha256(
    data: Union[str, BytesLike], encoding: Optional[str] = None
) -> Union[bytes, str]:
    """SHA-256 of ``data``, lowercase hex by default."""
    return compute_digest("SHA-256", data, resolve_encoding(encoding, "hex"))


def sha256_file(
    filepath: Union[str, "os.PathLike[str]"], chunk_size: int = _FILE_CHUNK
) -> str:
    """
    Hash a file with SHA-256 (streaming mode).

    Args:
        filepath: path to file.
        chunk_size: read chunk size (default 64 KiB).

    Returns:
        Lowercase hex digest.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    ctx = new_hash_context("SHA-256")
    total = 0
    with open(filepath, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            ctx.update(chunk)
            total += len(chunk)
    _LOGGER.debug("Hashed %d bytes from %s", total, os.fspath(filepath))
    return hex_encode(ctx.finalize())


__all__ = ["compute_digest", "sha256", "sha256_file"]
