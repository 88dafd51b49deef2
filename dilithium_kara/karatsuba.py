"""Polynomial multiplication in Z_Q[X]/(X^N + 1) by recursive Karatsuba."""

from __future__ import annotations

from collections.abc import Sequence

from .params import N, Q

KARATSUBA_THRESHOLD = 32


def _schoolbook(a: list[int], b: list[int]) -> list[int]:
    r = [0] * (2 * len(a))
    for i, ai in enumerate(a):
        if ai:
            for j, bj in enumerate(b):
                r[i + j] += ai * bj
    return r


def _karatsuba(a: list[int], b: list[int]) -> list[int]:
    n = len(a)
    if n <= KARATSUBA_THRESHOLD or n % 2:
        return _schoolbook(a, b)
    m = n // 2
    a_lo, a_hi = a[:m], a[m:]
    b_lo, b_hi = b[:m], b[m:]
    z0 = _karatsuba(a_lo, b_lo)
    z2 = _karatsuba(a_hi, b_hi)
    z1 = _karatsuba(
        [x + y for x, y in zip(a_lo, a_hi)],
        [x + y for x, y in zip(b_lo, b_hi)],
    )
    r = [0] * (2 * n)
    for i, (x0, x1, x2) in enumerate(zip(z0, z1, z2)):
        r[i] += x0
        r[i + m] += x1 - x0 - x2
        r[i + 2 * m] += x2
    return r


def karatsuba(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Full product of two equal-length coefficient lists; returns 2n entries."""
    a, b = list(a), list(b)
    if len(a) != len(b):
        raise ValueError("operands must have the same length")
    return _karatsuba(a, b)


def poly_mul_karatsuba(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Product in Z_Q[X]/(X^N + 1) with coefficients in [0, Q)."""
    a, b = list(a), list(b)
    if len(a) != N or len(b) != N:
        raise ValueError(f"polynomials must have {N} coefficients")
    full = karatsuba(a, b)
    return [(lo - hi) % Q for lo, hi in zip(full[:N], full[N:])]