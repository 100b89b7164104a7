# -*- coding: utf-8 -*-
"""
RU: Общие типовые контракты: кодировки, идентификаторы алгоритмов, опции PBKDF2.

EN: Shared typing contracts: output encodings, hash algorithm identifiers and
PBKDF2 options.

Design notes:
- Protocols are @runtime_checkable to allow isinstance checks in tests.
- Options are TypedDicts (total=False) so callers may pass only what they override;
  a missing key and a None value mean the same thing.
"""

from __future__ import annotations

from typing import Literal, Mapping, Optional, Protocol, TypedDict, Union, runtime_checkable

BytesLike = Union[bytes, bytearray, memoryview]

Encoding = Literal["raw", "hex", "HEX", "base64url"]


@runtime_checkable
class HashDescriptor(Protocol):
    """Any object naming a hash algorithm through a ``name`` attribute."""

    @property
    def name(self) -> str: ...


AlgorithmIdentifier = Union[str, HashDescriptor, Mapping[str, str]]


class Pbkdf2Options(TypedDict, total=False):
    """PBKDF2 knobs; every key is optional and None is treated as unset."""

    salt: Optional[Union[str, BytesLike]]
    hash: Optional[AlgorithmIdentifier]
    iterations: Optional[int]


__all__ = [
    "BytesLike",
    "Encoding",
    "HashDescriptor",
    "AlgorithmIdentifier",
    "Pbkdf2Options",
]
