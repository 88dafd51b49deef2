"""Modular reductions modulo Q on signed 32/64-bit style integers."""

from __future__ import annotations

from .params import Q

MONT = -4186625  # 2^32 mod Q
QINV = 58728449  # Q^(-1) mod 2^32


def _int32(x: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    x &= 0xFFFFFFFF
    return x - (1 << 32) if x & 0x80000000 else x


def montgomery_reduce(a: int) -> int:
    """For -2^31*Q <= a <= Q*2^31 return r = a*2^-32 mod Q with -Q < r < Q."""
    t = _int32(_int32(a) * QINV)
    return (a - t * Q) >> 32


def reduce32(a: int) -> int:
    """For a <= 2^31 - 2^22 - 1 return r = a mod Q with -6283009 <= r <= 6283007."""
    t = (a + (1 << 22)) >> 23
    return a - t * Q


def caddq(a: int) -> int:
    """Add Q if a is negative."""
    return a + Q if a < 0 else a


def freeze(a: int) -> int:
    """Return the standard representative a mod+ Q."""
    return caddq(reduce32(a))