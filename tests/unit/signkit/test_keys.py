from __future__ import annotations

from typing import Any

import pytest

from signkit.keys import Password, RawKey, as_secret, as_secrets


def test_as_secret_tags_inputs() -> None:
    assert as_secret("pw") == Password("pw")
    assert as_secret(b"key") == RawKey(b"key")
    assert as_secret(bytearray(b"key")) == RawKey(b"key")
    assert as_secret(memoryview(b"key")) == RawKey(b"key")
    tagged = RawKey(b"k")
    assert as_secret(tagged) is tagged


@pytest.mark.parametrize("bad", [None, 42, 1.5, object()])
def test_as_secret_rejects_other_types(bad: Any) -> None:
    with pytest.raises(TypeError):
        as_secret(bad)


def test_as_secrets_single_and_sequence() -> None:
    assert as_secrets("a") == (Password("a"),)
    assert as_secrets(b"a") == (RawKey(b"a"),)
    assert as_secrets(["a", b"b", Password("c")]) == (
        Password("a"),
        RawKey(b"b"),
        Password("c"),
    )
    assert as_secrets(()) == ()
    with pytest.raises(TypeError):
        as_secrets(7)  # type: ignore[arg-type]


def test_repr_does_not_leak_material() -> None:
    assert "hunter2" not in repr(Password("hunter2"))
    assert repr(RawKey(b"\x01" * 32)) == "RawKey(<32 bytes>)"


def test_variants_validate_payload_type() -> None:
    with pytest.raises(TypeError):
        Password(b"bytes")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        RawKey("text")  # type: ignore[arg-type]
