# -*- coding: utf-8 -*-
"""
RU: Параметры по умолчанию для KDF, HMAC и подписанных URL; единое разрешение значений None.

EN: Default parameters for key derivation, HMAC and signed URLs, plus the single
place where "None means unset" is resolved for every entry point.

The KDF defaults (SHA-1, one iteration, a single zero byte of salt) are weak by
modern standards. They are kept because previously derived keys and previously
issued signed URLs depend on them; callers wanting stronger parameters pass them
explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, TypeVar, Union

from signkit.algorithms import key_length, normalize_algorithm
from signkit.protocols import AlgorithmIdentifier, BytesLike, Encoding

_ENCODINGS: Final = ("raw", "hex", "HEX", "base64url")

T = TypeVar("T")


@dataclass(frozen=True)
class KdfDefaults:
    """
    PBKDF2 defaults.

    Attributes:
        key_length: output length in bytes when none is requested.
        salt: salt used when none is given.
        hash: PRF hash name.
        iterations: iteration count.

    Examples:
        >>> DEFAULT_KDF.key_length, DEFAULT_KDF.salt, DEFAULT_KDF.hash
        (16, b'\\x00', 'SHA-1')
    """

    key_length: int = 16
    salt: bytes = b"\x00"
    hash: str = "SHA-1"
    iterations: int = 1

    def __post_init__(self) -> None:
        if self.key_length < 1:
            raise ValueError("key_length must be >= 1")
        if self.iterations < 1:
            raise ValueError("iterations must be >= 1")
        object.__setattr__(self, "hash", normalize_algorithm(self.hash))


@dataclass(frozen=True)
class HmacDefaults:
    """Salt used to stretch text passwords into HMAC keys, and the tag encoding."""

    derivation_salt: str = "hmac_hash"
    encoding: Encoding = "hex"

    def __post_init__(self) -> None:
        if self.encoding not in _ENCODINGS:
            raise ValueError(f"encoding must be one of {', '.join(_ENCODINGS)}")


@dataclass(frozen=True)
class SignedUrlConfig:
    """
    Signed URL wire parameters.

    Attributes:
        algorithm: HMAC hash.
        signature_param: query parameter carrying the tag.
        expires_param: query parameter carrying the Unix expiry time.
        encoding: tag encoding inside the URL.
    """

    algorithm: str = "SHA-1"
    signature_param: str = "signature"
    expires_param: str = "expires"
    encoding: Encoding = "base64url"

    def __post_init__(self) -> None:
        if not self.signature_param or not self.expires_param:
            raise ValueError("query parameter names must be non-empty")
        if self.signature_param == self.expires_param:
            raise ValueError("signature and expires parameters must differ")
        if self.encoding not in ("hex", "HEX", "base64url"):
            raise ValueError("signed URLs need a textual encoding")
        object.__setattr__(self, "algorithm", normalize_algorithm(self.algorithm))


DEFAULT_KDF: Final[KdfDefaults] = KdfDefaults()
DEFAULT_HMAC: Final[HmacDefaults] = HmacDefaults()
DEFAULT_SIGNED_URL: Final[SignedUrlConfig] = SignedUrlConfig()


# --- default resolution (None is always "unset") ---


def resolve_encoding(encoding: Optional[str], default: Encoding) -> str:
    return default if encoding is None else encoding


def resolve_key_length(
    requested: Optional[Union[int, AlgorithmIdentifier]],
    defaults: KdfDefaults = DEFAULT_KDF,
) -> int:
    """
    Byte length for a derived key.

    None -> default length; int -> itself; anything else is an algorithm
    identifier sized through ``key_length``.
    """
    if requested is None:
        return defaults.key_length
    if isinstance(requested, bool):
        raise TypeError("Key length must be an int or an algorithm identifier")
    if isinstance(requested, int):
        return requested
    return key_length(requested)


def resolve_salt(
    salt: Optional[Union[str, BytesLike]], defaults: KdfDefaults = DEFAULT_KDF
) -> bytes:
    # An empty string counts as unset; an empty bytes salt is honoured.
    if salt is None or salt == "":
        return defaults.salt
    if isinstance(salt, str):
        return salt.encode("utf-8")
    return bytes(salt)


def resolve_hash(
    hash_alg: Optional[AlgorithmIdentifier], defaults: KdfDefaults = DEFAULT_KDF
) -> str:
    if hash_alg is None or hash_alg == "":
        return defaults.hash
    return normalize_algorithm(hash_alg)


def resolve_expiration(expires: Optional[T]) -> Optional[T]:
    # A zero offset means "no expiration", like None.
    if expires is None:
        return None
    if isinstance(expires, (int, float)) and not isinstance(expires, bool) and expires == 0:
        return None
    return expires


def resolve_iterations(
    iterations: Optional[int], defaults: KdfDefaults = DEFAULT_KDF
) -> int:
    # 0 counts as unset as well.
    if not iterations:
        return defaults.iterations
    return iterations


__all__ = [
    "KdfDefaults",
    "HmacDefaults",
    "SignedUrlConfig",
    "DEFAULT_KDF",
    "DEFAULT_HMAC",
    "DEFAULT_SIGNED_URL",
    "resolve_encoding",
    "resolve_key_length",
    "resolve_salt",
    "resolve_hash",
    "resolve_expiration",
    "resolve_iterations",
]
