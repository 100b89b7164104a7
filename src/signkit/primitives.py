# -*- coding: utf-8 -*-
"""
RU: Адаптер провайдера примитивов над cryptography: дайджест, HMAC, PBKDF2.

EN: Primitive provider adapter over ``cryptography``: unkeyed digests, HMAC signing
and PBKDF2 bit derivation.

Security & design:
- No global mutable state; every call builds its own context, so all functions
  are reentrant and thread-safe (the cryptography backend is thread-safe).
- Errors raised here (unsupported algorithm, invalid lengths, backend failures)
  reach the caller unchanged; higher layers do not wrap them.
- Nothing secret is logged.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Final, Mapping

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from signkit.algorithms import normalize_algorithm
from signkit.exceptions import UnsupportedAlgorithmError
from signkit.protocols import AlgorithmIdentifier, BytesLike

_LOGGER: Final = logging.getLogger(__name__)

_HASHES: Final[Mapping[str, Callable[[], hashes.HashAlgorithm]]] = MappingProxyType(
    {
        "SHA-1": hashes.SHA1,
        "SHA-256": hashes.SHA256,
        "SHA-384": hashes.SHA384,
        "SHA-512": hashes.SHA512,
    }
)

SUPPORTED_HASHES: Final = frozenset(_HASHES)


def hash_algorithm(identifier: AlgorithmIdentifier) -> hashes.HashAlgorithm:
    """
    Resolve an identifier to a ``cryptography`` hash instance.

    Raises:
        UnsupportedAlgorithmError: if the name is not a supported hash.
    """
    name = normalize_algorithm(identifier)
    factory = _HASHES.get(name)
    if factory is None:
        raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {name}")
    return factory()


def new_hash_context(identifier: AlgorithmIdentifier) -> hashes.Hash:
    """Fresh incremental hash context (for streaming input)."""
    return hashes.Hash(hash_algorithm(identifier))


def digest_bytes(identifier: AlgorithmIdentifier, data: BytesLike) -> bytes:
    ctx = new_hash_context(identifier)
    ctx.update(bytes(data))
    return ctx.finalize()


def hmac_sign(identifier: AlgorithmIdentifier, key: BytesLike, data: BytesLike) -> bytes:
    """HMAC tag of ``data`` under ``key``."""
    mac = crypto_hmac.HMAC(bytes(key), hash_algorithm(identifier))
    mac.update(bytes(data))
    return mac.finalize()


def pbkdf2_derive_bits(
    password: BytesLike,
    salt: BytesLike,
    identifier: AlgorithmIdentifier,
    iterations: int,
    bit_length: int,
) -> bytes:
    """
    PBKDF2-HMAC derivation of ``bit_length`` bits.

    Raises:
        ValueError: if ``bit_length`` is not a positive multiple of 8.
        UnsupportedAlgorithmError: if the PRF hash is not supported.
    """
    if bit_length <= 0 or bit_length % 8:
        raise ValueError("PBKDF2 output length must be a positive multiple of 8 bits")
    kdf = PBKDF2HMAC(
        algorithm=hash_algorithm(identifier),
        length=bit_length // 8,
        salt=bytes(salt),
        iterations=iterations,
    )
    out = kdf.derive(bytes(password))
    _LOGGER.debug(
        "PBKDF2 derivation completed (hash=%s, iters=%d, bytes=%d)",
        normalize_algorithm(identifier),
        iterations,
        len(out),
    )
    return out


__all__ = [
    "SUPPORTED_HASHES",
    "hash_algorithm",
    "new_hash_context",
    "digest_bytes",
    "hmac_sign",
    "pbkdf2_derive_bits",
]
