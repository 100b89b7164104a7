# -*- coding: utf-8 -*-
"""
RU: Идентификаторы хеш-алгоритмов и их естественная длина вывода в байтах.

EN: Hash algorithm identifiers and their native output lengths.

An identifier is a bare name ("SHA-256", "sha-256"), an object with a ``name``
attribute (including ``cryptography`` hash instances, whose names look like
"sha256") or a mapping with a "name" key. Everything is reduced to one canonical
uppercase name before any lookup.

Examples:
    >>> normalize_algorithm("sha-512")
    'SHA-512'
    >>> key_length({"name": "SHA-1"})
    20
    >>> key_length("SHA-256")
    32
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from signkit.protocols import AlgorithmIdentifier

DEFAULT_KEY_LENGTH: Final[int] = 32  # SHA-256 output, the implicit default digest

KEY_LENGTHS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "SHA-1": 20,
        "SHA-384": 48,
        "SHA-512": 64,
        # asymmetric placeholders, 2048-bit moduli
        "RSA-OAEP": 256,
        "RSA-PSS": 256,
        "RSA-ES": 256,
    }
)

_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "SHA1": "SHA-1",
        "SHA256": "SHA-256",
        "SHA384": "SHA-384",
        "SHA512": "SHA-512",
    }
)


def normalize_algorithm(identifier: AlgorithmIdentifier) -> str:
    """
    Reduce an algorithm identifier to its canonical uppercase name.

    Raises:
        TypeError: if the identifier is neither a name nor carries one.
    """
    if isinstance(identifier, str):
        name = identifier
    elif isinstance(identifier, Mapping):
        name = identifier.get("name")
    else:
        name = getattr(identifier, "name", None)
    if not isinstance(name, str):
        raise TypeError("Algorithm identifier must be a name or carry a 'name'")
    upper = name.strip().upper()
    return _ALIASES.get(upper, upper)


def key_length(identifier: AlgorithmIdentifier) -> int:
    """Native output length in bytes; unknown names fall back to 32."""
    return KEY_LENGTHS.get(normalize_algorithm(identifier), DEFAULT_KEY_LENGTH)


__all__ = [
    "DEFAULT_KEY_LENGTH",
    "KEY_LENGTHS",
    "normalize_algorithm",
    "key_length",
]
