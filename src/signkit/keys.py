# -*- coding: utf-8 -*-
"""
RU: Помеченные секреты: пароль (всегда растягивается через PBKDF2) или сырой ключ.

EN: Tagged secret inputs.

A secret is either a human ``Password`` (always stretched through PBKDF2 before
it keys an HMAC) or a ``RawKey`` (used as HMAC key material unchanged). Plain
``str``/``bytes`` values are tagged once at the API boundary by ``as_secret``.

Examples:
    >>> as_secret("hunter2")
    Password(<redacted>)
    >>> as_secret(b"\\x00" * 32)
    RawKey(<32 bytes>)
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Tuple, Union

from signkit.protocols import BytesLike


@dataclass(frozen=True)
class Password:
    """Low-entropy text secret."""

    text: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError("Password text must be str")

    def __repr__(self) -> str:
        return "Password(<redacted>)"


@dataclass(frozen=True)
class RawKey:
    """Key material the caller vouches for; used as-is."""

    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.material, (bytes, bytearray, memoryview)):
            raise TypeError("RawKey material must be bytes-like")
        object.__setattr__(self, "material", bytes(self.material))

    def __repr__(self) -> str:
        return f"RawKey(<{len(self.material)} bytes>)"


Secret = Union[Password, RawKey]
SecretInput = Union[Password, RawKey, str, BytesLike]


def as_secret(value: SecretInput) -> Secret:
    """
    Tag a secret input.

    Raises:
        TypeError: if the value is neither text nor bytes-like.
    """
    if isinstance(value, (Password, RawKey)):
        return value
    if isinstance(value, str):
        return Password(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawKey(bytes(value))
    raise TypeError("Secret must be str, bytes-like, Password or RawKey")


def as_secrets(
    value: Union[SecretInput, Sequence[SecretInput]],
) -> Tuple[Secret, ...]:
    """Tag a single secret or an ordered sequence of candidate secrets."""
    if isinstance(value, (Password, RawKey, str, bytes, bytearray, memoryview)):
        return (as_secret(value),)
    if isinstance(value, Sequence):
        return tuple(as_secret(v) for v in value)
    raise TypeError("Expected a secret or a sequence of secrets")


__all__ = [
    "Password",
    "RawKey",
    "Secret",
    "SecretInput",
    "as_secret",
    "as_secrets",
]
