# -*- coding: utf-8 -*-
"""
RU: Вывод ключей из паролей (PBKDF2) с длиной ключа по хеш-алгоритму.

EN: Password-based key derivation (PBKDF2) with algorithm-aware output lengths.

The requested length is either a byte count or a hash algorithm identifier, in
which case the key is sized to that hash's output ("SHA-256" -> 32 bytes).

⚠️ The defaults (16 bytes, SHA-1, 1 iteration, salt b"\\x00") exist for
compatibility with keys derived by earlier releases. They are not a security
recommendation; pass ``hash``/``iterations``/``salt`` explicitly for new keys.

Examples:
    >>> len(pbkdf2("password"))
    16
    >>> len(pbkdf2("password", "SHA-512"))
    64
    >>> key = pbkdf2("password", 32, {"salt": "custom-salt", "hash": "SHA-256"})
"""
from __future__ import annotations

import logging
from typing import Final, Optional, Union, cast

from signkit.config import (
    DEFAULT_KDF,
    KdfDefaults,
    resolve_hash,
    resolve_iterations,
    resolve_key_length,
    resolve_salt,
)
from signkit.keys import Password, SecretInput, as_secret
from signkit.primitives import pbkdf2_derive_bits
from signkit.protocols import AlgorithmIdentifier, BytesLike, Pbkdf2Options

_LOGGER: Final = logging.getLogger(__name__)

KeyLengthSpec = Union[int, AlgorithmIdentifier]


class Pbkdf2KeyDeriver:
    """
    PBKDF2 provider bound to a set of defaults.

    Examples:
        >>> deriver = Pbkdf2KeyDeriver()
        >>> len(deriver.derive_key(b"raw-password", "SHA-1"))
        20
    """

    __slots__ = ("_defaults",)

    def __init__(self, defaults: KdfDefaults = DEFAULT_KDF) -> None:
        self._defaults = defaults

    @property
    def defaults(self) -> KdfDefaults:
        return self._defaults

    def derive_key(
        self,
        password: SecretInput,
        key_length: Optional[KeyLengthSpec] = None,
        options: Optional[Pbkdf2Options] = None,
    ) -> bytes:
        """
        Derive a key from a password.

        Args:
            password: text (UTF-8 encoded) or raw bytes.
            key_length: None for the default, a byte count, or a hash
                algorithm identifier whose output length sizes the key.
            options: optional ``salt``, ``hash`` and ``iterations``.

        Returns:
            Derived key bytes.
        """
        opts = options or {}
        secret = as_secret(password)
        pw_bytes = (
            secret.text.encode("utf-8")
            if isinstance(secret, Password)
            else secret.material
        )
        length = resolve_key_length(key_length, self._defaults)
        salt = resolve_salt(opts.get("salt"), self._defaults)
        hash_name = resolve_hash(opts.get("hash"), self._defaults)
        iterations = resolve_iterations(opts.get("iterations"), self._defaults)

        _LOGGER.debug("Deriving %d-byte key (hash=%s)", length, hash_name)
        return pbkdf2_derive_bits(pw_bytes, salt, hash_name, iterations, 8 * length)


_DEFAULT_DERIVER: Final = Pbkdf2KeyDeriver()


def make_pbkdf2_options(
    *,
    salt: Optional[Union[str, BytesLike]] = None,
    hash: Optional[AlgorithmIdentifier] = None,
    iterations: Optional[int] = None,
) -> Pbkdf2Options:
    """Build a ``Pbkdf2Options`` dict, leaving out unset values."""
    opts = {"salt": salt, "hash": hash, "iterations": iterations}
    return cast(Pbkdf2Options, {k: v for k, v in opts.items() if v is not None})


def pbkdf2(
    password: SecretInput,
    key_length: Optional[KeyLengthSpec] = None,
    options: Optional[Pbkdf2Options] = None,
) -> bytes:
    """Derive a key with the library defaults; see ``Pbkdf2KeyDeriver.derive_key``."""
    return _DEFAULT_DERIVER.derive_key(password, key_length, options)


__all__ = [
    "KeyLengthSpec",
    "Pbkdf2KeyDeriver",
    "make_pbkdf2_options",
    "pbkdf2",
]
