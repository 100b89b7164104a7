# -*- coding: utf-8 -*-
"""
RU: Health check подсистемы подписи: KAT-проверки примитивов и проверка подписанного URL.

EN: Health check for the signing layer: known-answer tests against the primitive
provider plus a signed-URL round trip.
"""
from __future__ import annotations

import logging
from typing import Final

_LOGGER: Final = logging.getLogger(__name__)

# FIPS 180-2, "abc"
_SHA256_ABC: Final[str] = (
    "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
)
# RFC 6070, P="password", S="salt", c=1, dkLen=20
_PBKDF2_SHA1_C1: Final[str] = "0c60c80f961f0e71f3a9b524af6012062fe037a6"
# RFC 4231, test case 2
_HMAC_SHA256_TC2: Final[str] = (
    "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
)


def crypto_health_check() -> dict[str, bool]:
    """
    Verify the primitive provider and the signed-URL protocol.

    Returns:
        Dictionary mapping check names to status (True = OK).

    Examples:
        >>> results = crypto_health_check()
        >>> assert all(results.values()), "signkit unhealthy!"
    """
    results: dict[str, bool] = {
        "sha-256": _test_digest(),
        "pbkdf2": _test_pbkdf2(),
        "hmac": _test_hmac(),
        "signed-url": _test_signed_url(),
    }

    failed = [k for k, v in results.items() if not v]
    if failed:
        _LOGGER.error("Crypto health check FAILED for: %s", ", ".join(failed))
    else:
        _LOGGER.info("Crypto health check PASSED")
    return results


def _test_digest() -> bool:
    """Test SHA-256 against the FIPS 180-2 "abc" vector."""
    try:
        from .hashing import sha256

        return sha256("abc") == _SHA256_ABC
    except Exception as e:
        _LOGGER.warning("SHA-256 test failed: %s", e.__class__.__name__)
        return False


def _test_pbkdf2() -> bool:
    """Test PBKDF2-HMAC-SHA1 against RFC 6070 (c=1)."""
    try:
        from .kdf import pbkdf2

        key = pbkdf2("password", "SHA-1", {"salt": "salt"})
        return key.hex() == _PBKDF2_SHA1_C1
    except Exception as e:
        _LOGGER.warning("PBKDF2 test failed: %s", e.__class__.__name__)
        return False


def _test_hmac() -> bool:
    """Test HMAC-SHA256 against RFC 4231 test case 2."""
    try:
        from .mac import sha256_hmac

        tag = sha256_hmac("what do ya want for nothing?", b"Jefe")
        return tag == _HMAC_SHA256_TC2
    except Exception as e:
        _LOGGER.warning("HMAC test failed: %s", e.__class__.__name__)
        return False


def _test_signed_url() -> bool:
    """Test signed URL round trip and wrong-key rejection."""
    try:
        from .signed_url import signed_url, verify_signed_url

        url = signed_url("https://example.com/health?b=2&a=1", "health-check", 60)
        return verify_signed_url(url, "health-check") and not verify_signed_url(
            url, "other"
        )
    except Exception as e:
        _LOGGER.warning("Signed URL test failed: %s", e.__class__.__name__)
        return False


__all__ = ["crypto_health_check"]
