# -*- coding: utf-8 -*-
"""
RU: Подписанные URL: HMAC канонического URL в параметре signature и необязательный срок expires.

EN: Signed URLs: an HMAC over the canonical URL carried in a ``signature`` query
parameter, with an optional ``expires`` Unix timestamp inside the signed content.

Wire format:
    https://example.com/path?a=1&b=2&expires=1700000000&signature=<base64url>

Canonical form:
- query parsed with blank values kept, then stable-sorted by parameter name;
- re-serialised as application/x-www-form-urlencoded the way URLSearchParams
  does it (space -> "+", "~" -> "%7E");
- an empty path on http(s)/ws(s)/ftp URLs with a host becomes "/".
Signing and verification share this one canonicalisation, and the tag is always
computed with the ``signature`` parameter absent.

Public API:
- signed_url(url, password, expires=None) -> str
- temporary_signed_url(url, password, expires) -> str
- verify_signed_url(url, password_or_passwords) -> bool
- inspect_signed_url(url, password_or_passwords) -> SignedUrlStatus

Examples:
    >>> url = signed_url("https://example.com/?b=2&a=1", "secret")
    >>> url.startswith("https://example.com/?a=1&b=2&signature=")
    True
    >>> verify_signed_url(url, "secret"), verify_signed_url(url, "wrong")
    (True, False)
    >>> verify_signed_url(signed_url("https://example.com/", "pw", 60), ["old", "pw"])
    True
"""
from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Final, List, Optional, Tuple, Union
from urllib.parse import (
    SplitResult,
    parse_qsl,
    quote_plus,
    urlencode,
    urlsplit,
    urlunsplit,
)

from signkit.compare import fixed_time_compare
from signkit.config import (
    DEFAULT_SIGNED_URL,
    SignedUrlConfig,
    resolve_expiration,
)
from signkit.exceptions import SignedUrlError
from signkit.keys import Secret, SecretInput, as_secret, as_secrets
from signkit.mac import compute_hmac

_LOGGER: Final = logging.getLogger(__name__)

_SPECIAL_SCHEMES: Final = frozenset({"http", "https", "ws", "wss", "ftp"})

# Absolute datetime, or an offset in seconds from now.
Expiration = Union[datetime, int, float]
QueryPairs = List[Tuple[str, str]]
Clock = Callable[[], float]


class SignedUrlStatus(str, Enum):
    """Outcome of checking a signed URL; only VALID means the URL is trusted."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    MISSING_SIGNATURE = "missing_signature"
    MALFORMED = "malformed"


# --- canonicalisation ---


def _split(url: object) -> Tuple[SplitResult, QueryPairs]:
    parts = urlsplit(str(url))
    return parts, parse_qsl(parts.query, keep_blank_values=True)


def _sorted_params(params: QueryPairs) -> QueryPairs:
    # sorted() is stable: repeated names keep their relative order.
    return sorted(params, key=lambda kv: kv[0])


def _form_quote(
    text: str,
    safe: str = "",
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
) -> str:
    # URLSearchParams leaves only alphanumerics and "*-._" unescaped.
    return quote_plus(text, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _serialize(parts: SplitResult, params: QueryPairs) -> str:
    path = parts.path
    if not path and parts.netloc and parts.scheme.lower() in _SPECIAL_SCHEMES:
        path = "/"
    query = urlencode(params, quote_via=_form_quote)
    return urlunsplit((parts.scheme, parts.netloc, path, query, parts.fragment))


def canonical_url(url: object, *, exclude: str = "signature") -> str:
    """Canonical form of ``url`` without the ``exclude`` parameter."""
    parts, params = _split(url)
    return _serialize(parts, _sorted_params([kv for kv in params if kv[0] != exclude]))


def expiration_timestamp(expires: Expiration, now: Optional[float] = None) -> int:
    """
    Normalise an expiration to Unix seconds.

    A datetime is absolute (naive values are read as UTC); a number is an offset
    in seconds added to ``floor(now)``.

    Raises:
        TypeError: for any other type (bool included) or a non-finite float.
    """
    if isinstance(expires, datetime):
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return math.floor(expires.timestamp())
    if isinstance(expires, float) and not math.isfinite(expires):
        raise TypeError("Invalid expiration type")
    if isinstance(expires, (int, float)) and not isinstance(expires, bool):
        current = time.time() if now is None else now
        return math.floor(math.floor(current) + expires)
    raise TypeError("Invalid expiration type")


class UrlSigner:
    """
    Signs and verifies URLs under a ``SignedUrlConfig``.

    Args:
        config: wire parameters (hash, parameter names, tag encoding).
        clock: returns the current Unix time in seconds; ``time.time`` when None.
    """

    __slots__ = ("_config", "_clock")

    def __init__(
        self,
        config: SignedUrlConfig = DEFAULT_SIGNED_URL,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self._config = config
        self._clock = clock

    @property
    def config(self) -> SignedUrlConfig:
        return self._config

    def _now(self) -> float:
        return self._clock() if self._clock is not None else time.time()

    def _tag(self, canonical: str, secret: Secret) -> str:
        return str(
            compute_hmac(
                self._config.algorithm, canonical, secret, self._config.encoding
            )
        )

    def sign(
        self,
        url: object,
        password: SecretInput,
        expires: Optional[Expiration] = None,
    ) -> str:
        """
        Return ``url`` with sorted parameters and a ``signature`` parameter.

        Raises:
            SignedUrlError: if the URL is not absolute or already carries the
                signature or expires parameter.
            TypeError: if ``expires`` is neither a datetime nor a number.
        """
        cfg = self._config
        secret = as_secret(password)
        try:
            parts, params = _split(url)
        except ValueError as exc:
            raise SignedUrlError("URL could not be parsed") from exc
        if not parts.scheme:
            raise SignedUrlError("URL must be absolute")

        names = {name for name, _ in params}
        if cfg.signature_param in names:
            raise SignedUrlError(f'URL already has "{cfg.signature_param}" parameter')
        # Verification trusts an existing expires parameter, so it must come from us.
        if cfg.expires_param in names:
            raise SignedUrlError(f'URL already has "{cfg.expires_param}" parameter')

        expires = resolve_expiration(expires)
        if expires is not None:
            stamp = expiration_timestamp(expires, self._now())
            params.append((cfg.expires_param, str(stamp)))

        params = _sorted_params(params)
        signature = self._tag(_serialize(parts, params), secret)
        params.append((cfg.signature_param, signature))
        _LOGGER.debug(
            "Signed URL (hash=%s, expiring=%s)", cfg.algorithm, expires is not None
        )
        return _serialize(parts, params)

    def inspect(
        self,
        url: object,
        password: Union[SecretInput, Sequence[SecretInput]],
    ) -> SignedUrlStatus:
        """
        Check ``url`` against one or more candidate secrets, tried in order.

        Never raises for malformed URLs or signatures; those map to a status.
        """
        cfg = self._config
        candidates = as_secrets(password)
        try:
            parts, params = _split(url)
        except ValueError:
            return SignedUrlStatus.MALFORMED
        if not parts.scheme:
            return SignedUrlStatus.MALFORMED

        signature = next((v for k, v in params if k == cfg.signature_param), "")
        remaining = _sorted_params([kv for kv in params if kv[0] != cfg.signature_param])
        canonical = _serialize(parts, remaining)

        for secret in candidates:
            if fixed_time_compare(signature, self._tag(canonical, secret)):
                status = self._check_expiry(remaining)
                _LOGGER.debug("Signed URL check: %s", status.value)
                return status

        status = (
            SignedUrlStatus.INVALID_SIGNATURE
            if signature
            else SignedUrlStatus.MISSING_SIGNATURE
        )
        _LOGGER.debug(
            "Signed URL check: %s (%d candidate keys)", status.value, len(candidates)
        )
        return status

    def verify(
        self,
        url: object,
        password: Union[SecretInput, Sequence[SecretInput]],
    ) -> bool:
        return self.inspect(url, password) is SignedUrlStatus.VALID

    def _check_expiry(self, params: QueryPairs) -> SignedUrlStatus:
        raw = next((v for k, v in params if k == self._config.expires_param), "")
        if not raw:
            return SignedUrlStatus.VALID
        try:
            expires_at = float(raw)
        except ValueError:
            return SignedUrlStatus.MALFORMED
        if not math.isfinite(expires_at):
            return SignedUrlStatus.MALFORMED
        if expires_at < math.floor(self._now()):
            return SignedUrlStatus.EXPIRED
        return SignedUrlStatus.VALID


_DEFAULT_SIGNER: Final = UrlSigner()


def signed_url(
    url: object, password: SecretInput, expires: Optional[Expiration] = None
) -> str:
    """Sign ``url``; see ``UrlSigner.sign``."""
    return _DEFAULT_SIGNER.sign(url, password, expires)


def temporary_signed_url(
    url: object, password: SecretInput, expires: Expiration
) -> str:
    """Same as ``signed_url`` with a mandatory expiration."""
    return _DEFAULT_SIGNER.sign(url, password, expires)


def inspect_signed_url(
    url: object, password: Union[SecretInput, Sequence[SecretInput]]
) -> SignedUrlStatus:
    return _DEFAULT_SIGNER.inspect(url, password)


def verify_signed_url(
    url: object, password: Union[SecretInput, Sequence[SecretInput]]
) -> bool:
    """True iff some candidate secret produced the signature and it has not expired."""
    return _DEFAULT_SIGNER.verify(url, password)


__all__ = [
    "Expiration",
    "SignedUrlStatus",
    "UrlSigner",
    "canonical_url",
    "expiration_timestamp",
    "signed_url",
    "temporary_signed_url",
    "inspect_signed_url",
    "verify_signed_url",
]
