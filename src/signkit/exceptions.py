# -*- coding: utf-8 -*-
"""
RU: Иерархия исключений signkit без утечек секретов в тексты сообщений.

EN: Exception hierarchy for signkit.

Guidelines:
- Do not put secrets (passwords, derived keys, tags) into exception messages.
- Sign-path contract violations raise; verification never does, it returns False.
- Failures of the primitive provider propagate to the caller without wrapping.
"""

from __future__ import annotations

from typing import Optional


class CryptoError(Exception):
    """Base exception for all signkit failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


class UnsupportedAlgorithmError(CryptoError, ValueError):
    """Raised by the primitive provider for a hash algorithm it cannot run."""


class SignatureError(CryptoError):
    """Base class for signing errors."""


class SignedUrlError(SignatureError, ValueError):
    """Raised when a URL cannot be signed (e.g. it already carries a signature)."""


__all__ = [
    "CryptoError",
    "UnsupportedAlgorithmError",
    "SignatureError",
    "SignedUrlError",
]
