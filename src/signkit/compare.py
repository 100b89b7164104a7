# -*- coding: utf-8 -*-
"""
RU: Сравнение строк в константное время для материала подписей.

EN: Constant-time string comparison for signature material.

The loop always runs ``len(a)`` iterations and never exits early: on a length
mismatch ``a`` is compared against itself with the accumulator pre-seeded to a
failing value, so neither the position of the first difference nor the length
of ``b`` changes the amount of work done.
"""
from __future__ import annotations

from typing import Tuple


def _accumulate(a: str, b: str) -> Tuple[int, int]:
    """Return (mismatch accumulator, iterations performed)."""
    mismatch = 0
    if len(a) != len(b):
        b = a
        mismatch = 1
    steps = 0
    for i in range(len(a)):
        mismatch |= ord(a[i]) ^ ord(b[i])
        steps += 1
    return mismatch, steps


def fixed_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings without leaking where they first differ.

    Args:
        a: reference value (its length drives the loop).
        b: candidate value.

    Returns:
        True iff both strings are identical.

    Raises:
        TypeError: if either argument is not a str.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        raise TypeError("fixed_time_compare expects two str values")
    mismatch, _ = _accumulate(a, b)
    return mismatch == 0


__all__ = ["fixed_time_compare"]
