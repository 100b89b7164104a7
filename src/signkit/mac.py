# -*- coding: utf-8 -*-
"""
RU: HMAC с неявным выводом ключа из текстового пароля.

EN: HMAC with implicit key stretching for text passwords.

A ``Password`` is never used as HMAC key material directly: it is first derived
through PBKDF2 with the fixed salt "hmac_hash" into a key as long as the chosen
hash's output, so the same password always yields the same HMAC key for a given
algorithm. A ``RawKey`` (or plain bytes) keys the HMAC unchanged.

Examples:
    >>> compute_hmac("SHA-256", "data", "password")          # lowercase hex
    '...'
    >>> compute_hmac("SHA-1", "data", b"raw key", "base64url")
    '...'
"""
from __future__ import annotations

import logging
from typing import Final, Optional, Union

from signkit.algorithms import key_length
from signkit.config import DEFAULT_HMAC, HmacDefaults, resolve_encoding
from signkit.encoding import encode_bytes, string_to_bytes
from signkit.kdf import pbkdf2
from signkit.keys import Password, Secret, SecretInput, as_secret
from signkit.primitives import hmac_sign
from signkit.protocols import AlgorithmIdentifier, BytesLike

_LOGGER: Final = logging.getLogger(__name__)


def hmac_key(
    algorithm: AlgorithmIdentifier,
    secret: Secret,
    defaults: HmacDefaults = DEFAULT_HMAC,
) -> bytes:
    """Key material an HMAC over ``algorithm`` uses for ``secret``."""
    if isinstance(secret, Password):
        return pbkdf2(
            secret.text, key_length(algorithm), {"salt": defaults.derivation_salt}
        )
    return secret.material


def compute_hmac(
    algorithm: AlgorithmIdentifier,
    data: Union[str, BytesLike],
    password: SecretInput,
    encoding: Optional[str] = None,
    *,
    defaults: HmacDefaults = DEFAULT_HMAC,
) -> Union[bytes, str]:
    """
    HMAC tag over ``data``.

    Args:
        algorithm: hash algorithm identifier.
        data: message; text is UTF-8 encoded.
        password: text password (stretched) or raw key bytes (used as-is).
        encoding: output encoding, "hex" when None.

    Returns:
        Encoded tag.
    """
    key = hmac_key(algorithm, as_secret(password), defaults)
    payload = string_to_bytes(data) if isinstance(data, str) else bytes(data)
    tag = hmac_sign(algorithm, key, payload)
    return encode_bytes(tag, resolve_encoding(encoding, defaults.encoding))


def sha256_hmac(
    data: Union[str, BytesLike],
    password: SecretInput,
    encoding: Optional[str] = None,
) -> Union[bytes, str]:
    """HMAC-SHA-256 of ``data``, lowercase hex by default."""
    return compute_hmac("SHA-256", data, password, encoding)


__all__ = ["hmac_key", "compute_hmac", "sha256_hmac"]
