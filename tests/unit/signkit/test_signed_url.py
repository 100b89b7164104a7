from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import parse_qsl, urlsplit

import pytest

from signkit.config import SignedUrlConfig
from signkit.exceptions import SignedUrlError
from signkit.signed_url import (
    SignedUrlStatus,
    UrlSigner,
    canonical_url,
    expiration_timestamp,
    inspect_signed_url,
    signed_url,
    temporary_signed_url,
    verify_signed_url,
)

NOW = 1_700_000_000.75


def fixed_clock(value: float = NOW):
    return lambda: value


def _params(url: str) -> list:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


def _reference_tag(canonical: str, password: str) -> str:
    key = hashlib.pbkdf2_hmac("sha1", password.encode(), b"hmac_hash", 1, dklen=20)
    tag = hmac.new(key, canonical.encode(), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(tag).rstrip(b"=").decode()


# --- signing ---


def test_concrete_scenario() -> None:
    url = signed_url("https://example.com/?b=2&a=1", "secret")
    expected_sig = _reference_tag("https://example.com/?a=1&b=2", "secret")
    assert url == "https://example.com/?a=1&b=2&signature=" + expected_sig
    assert verify_signed_url(url, "secret") is True
    assert verify_signed_url(url, "wrong") is False


def test_empty_path_becomes_slash() -> None:
    url = signed_url("https://example.com", "pw")
    assert url.startswith("https://example.com/?signature=")
    assert verify_signed_url(url, "pw")


def test_parameters_sorted_and_duplicates_kept_in_order() -> None:
    url = signed_url("https://example.com/p?z=1&a=2&m=&a=1", "pw")
    names = [k for k, _ in _params(url)]
    assert names == ["a", "a", "m", "z", "signature"]
    assert _params(url)[:2] == [("a", "2"), ("a", "1")]
    assert verify_signed_url(url, "pw")


def test_fragment_and_encoding_survive() -> None:
    url = signed_url("https://example.com/a b?q=hello world&x=%2F#frag", "pw")
    assert url.endswith("#frag")
    assert "q=hello+world" in url
    assert verify_signed_url(url, "pw")


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/?signature=abc",
        "https://example.com/?a=1&expires=123",
        "https://example.com/?expires=",
    ],
)
def test_refuses_presigned_urls(url: str) -> None:
    with pytest.raises(SignedUrlError):
        signed_url(url, "pw")


def test_refuses_relative_urls() -> None:
    with pytest.raises(SignedUrlError):
        signed_url("/relative/path?a=1", "pw")


def test_signed_url_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        signed_url("https://example.com/?signature=x", "pw")


def test_raw_key_signing() -> None:
    key = b"\x01" * 20
    url = signed_url("https://example.com/?a=1", key)
    assert verify_signed_url(url, key)
    assert not verify_signed_url(url, key.decode())


def test_accepts_objects_with_str() -> None:
    class Url:
        def __str__(self) -> str:
            return "https://example.com/?a=1"

    assert verify_signed_url(signed_url(Url(), "pw"), "pw")


# --- expiration ---


def test_offset_expiration_is_floor_now_plus_offset() -> None:
    signer = UrlSigner(clock=fixed_clock())
    url = signer.sign("https://example.com/", "pw", 60)
    assert dict(_params(url))["expires"] == str(1_700_000_000 + 60)


def test_datetime_expiration() -> None:
    when = datetime(2030, 1, 1, 0, 0, 0, 900_000, tzinfo=timezone.utc)
    url = signed_url("https://example.com/", "pw", when)
    assert dict(_params(url))["expires"] == str(int(when.timestamp()))


def test_naive_datetime_is_utc() -> None:
    assert expiration_timestamp(datetime(1970, 1, 2)) == 86_400


@pytest.mark.parametrize("offset", [0, 0.0])
def test_zero_offset_means_no_expiration(offset: float) -> None:
    signer = UrlSigner(clock=fixed_clock())
    url = signer.sign("https://example.com/", "pw", offset)
    assert "expires" not in dict(_params(url))
    assert url == signer.sign("https://example.com/", "pw")
    assert signer.verify(url, "pw") is True


def test_temporary_signed_url_matches_signed_url() -> None:
    when = datetime(2031, 6, 1, tzinfo=timezone.utc)
    assert temporary_signed_url("https://example.com/?a=1", "pw", when) == signed_url(
        "https://example.com/?a=1", "pw", when
    )
    url = temporary_signed_url("https://example.com/", "pw", 3600)
    assert "expires=" in url and verify_signed_url(url, "pw")


@pytest.mark.parametrize(
    "bad", ["60", True, [1], object(), float("nan"), float("inf"), float("-inf")]
)
def test_invalid_expiration_type(bad: Any) -> None:
    with pytest.raises(TypeError):
        signed_url("https://example.com/", "pw", bad)


def test_already_expired() -> None:
    url = signed_url("https://example.com/", "pw", -1)
    assert verify_signed_url(url, "pw") is False
    assert inspect_signed_url(url, "pw") is SignedUrlStatus.EXPIRED


def test_not_yet_expired() -> None:
    url = signed_url("https://example.com/", "pw", 3600)
    assert verify_signed_url(url, "pw") is True


def test_expiry_boundary() -> None:
    url = UrlSigner(clock=fixed_clock()).sign("https://example.com/", "pw", 10)
    at_expiry = UrlSigner(clock=fixed_clock(1_700_000_010.99))
    after = UrlSigner(clock=fixed_clock(1_700_000_011.0))
    assert at_expiry.verify(url, "pw") is True
    assert after.inspect(url, "pw") is SignedUrlStatus.EXPIRED


def test_past_datetime_expired() -> None:
    url = signed_url(
        "https://example.com/", "pw", datetime.now(timezone.utc) - timedelta(minutes=5)
    )
    assert verify_signed_url(url, "pw") is False


# --- verification ---


def test_tampering_detected() -> None:
    url = signed_url("https://example.com/item?id=7&role=user", "pw")
    assert verify_signed_url(url.replace("id=7", "id=8"), "pw") is False
    assert verify_signed_url(url.replace("role=user", "role=admin"), "pw") is False
    assert verify_signed_url(url.replace("/item", "/other"), "pw") is False
    assert verify_signed_url(url + "&extra=1", "pw") is False


def test_tampered_expiration_detected() -> None:
    url = UrlSigner(clock=fixed_clock()).sign("https://example.com/", "pw", 10)
    forged = url.replace("expires=1700000010", "expires=1900000000")
    assert UrlSigner(clock=fixed_clock()).verify(forged, "pw") is False


def test_parameter_order_does_not_matter_on_verify() -> None:
    url = signed_url("https://example.com/?a=1&b=2", "pw")
    sig = dict(_params(url))["signature"]
    reordered = f"https://example.com/?signature={sig}&b=2&a=1"
    assert verify_signed_url(reordered, "pw") is True


def test_multi_key_verification() -> None:
    url = signed_url("https://example.com/?a=1", "pw2")
    assert verify_signed_url(url, ["pw1", "pw2", "pw3"]) is True
    assert verify_signed_url(url, ["pw2", "pw1"]) is True
    assert verify_signed_url(url, ("pw3", "pw1", "pw2")) is True
    assert verify_signed_url(url, ["pw1", "pw3"]) is False
    assert verify_signed_url(url, []) is False


@pytest.mark.parametrize(
    "url, status",
    [
        ("https://example.com/?a=1", SignedUrlStatus.MISSING_SIGNATURE),
        ("https://example.com/?a=1&signature=", SignedUrlStatus.MISSING_SIGNATURE),
        ("https://example.com/?a=1&signature=garbage!!", SignedUrlStatus.INVALID_SIGNATURE),
        ("https://example.com/?a=1&signature=%FF%FE", SignedUrlStatus.INVALID_SIGNATURE),
        ("not a url", SignedUrlStatus.MALFORMED),
        ("http://[::1/?signature=x", SignedUrlStatus.MALFORMED),
    ],
)
def test_malformed_input_never_raises(url: str, status: SignedUrlStatus) -> None:
    assert inspect_signed_url(url, "pw") is status
    assert verify_signed_url(url, "pw") is False


def test_unparsable_expires_is_rejected() -> None:
    base = "https://example.com/?expires=soon"
    canonical = canonical_url(base)
    forged = f"{canonical}&signature={_reference_tag(canonical, 'pw')}"
    assert inspect_signed_url(forged, "pw") is SignedUrlStatus.MALFORMED


def test_tilde_is_percent_encoded() -> None:
    assert canonical_url("https://example.com/?a=x~y") == "https://example.com/?a=x%7Ey"
    assert canonical_url("https://example.com/?a=x%7Ey&b=*") == "https://example.com/?a=x%7Ey&b=*"
    url = signed_url("https://example.com/?path=~user/file", "pw")
    assert "path=%7Euser%2Ffile" in url
    assert verify_signed_url(url, "pw") is True
    assert verify_signed_url(url.replace("%7E", "~"), "pw") is True


def test_canonical_url_excludes_signature() -> None:
    assert canonical_url("https://example.com?b=2&signature=x&a=1") == "https://example.com/?a=1&b=2"
    assert canonical_url("https://example.com/?signature=x") == "https://example.com/"


def test_custom_config() -> None:
    cfg = SignedUrlConfig(
        algorithm="SHA-256", signature_param="sig", expires_param="exp", encoding="hex"
    )
    signer = UrlSigner(cfg, clock=fixed_clock())
    url = signer.sign("https://example.com/?signature=kept", "pw", 5)
    params = dict(_params(url))
    assert params["exp"] == "1700000005"
    assert len(params["sig"]) == 64
    assert signer.verify(url, "pw") is True
    assert verify_signed_url(url, "pw") is False
    assert signer.config is cfg


def test_verify_logs_outcome_without_secrets(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("DEBUG", logger="signkit")
    url = signed_url("https://example.com/?a=1", "top-secret")
    sig = dict(_params(url))["signature"]
    verify_signed_url(url, "top-secret")
    text = " ".join(rec.getMessage() for rec in caplog.records)
    assert "valid" in text
    assert "top-secret" not in text and sig not in text
