"""Rounding helpers: Power2Round, Decompose, MakeHint and UseHint."""

from __future__ import annotations

from .params import D, Q

_GAMMA2_88 = (Q - 1) // 88
_GAMMA2_32 = (Q - 1) // 32


def _check_gamma2(gamma2: int) -> None:
    if gamma2 not in (_GAMMA2_88, _GAMMA2_32):
        raise ValueError(f"unsupported gamma2: {gamma2!r}")


def power2round(a: int) -> tuple[int, int]:
    """Split a standard representative into (a1, a0) with a = a1*2^D + a0."""
    a1 = (a + (1 << (D - 1)) - 1) >> D
    a0 = a - (a1 << D)
    return a1, a0


def decompose(a: int, gamma2: int) -> tuple[int, int]:
    """Split a standard representative into high and low bits (a1, a0)."""
    _check_gamma2(gamma2)
    a1 = (a + 127) >> 7
    if gamma2 == _GAMMA2_32:
        a1 = ((a1 * 1025 + (1 << 21)) >> 22) & 15
    else:
        a1 = (a1 * 11275 + (1 << 23)) >> 24
        if a1 > 43:
            a1 = 0
    a0 = a - a1 * 2 * gamma2
    if a0 > (Q - 1) // 2:
        a0 -= Q
    return a1, a0


def make_hint(a0: int, a1: int, gamma2: int) -> int:
    """Return 1 if the low bits a0 overflow into the high bits, else 0."""
    if a0 > gamma2 or a0 < -gamma2 or (a0 == -gamma2 and a1 != 0):
        return 1
    return 0


def use_hint(a: int, hint: int, gamma2: int) -> int:
    """Return the high bits of a, corrected according to the hint bit."""
    a1, a0 = decompose(a, gamma2)
    if hint == 0:
        return a1
    if gamma2 == _GAMMA2_32:
        return (a1 + 1) & 15 if a0 > 0 else (a1 - 1) & 15
    if a0 > 0:
        return 0 if a1 == 43 else a1 + 1
    return 43 if a1 == 0 else a1 - 1