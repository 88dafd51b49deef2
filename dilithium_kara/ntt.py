"""Forward and inverse number-theoretic transform over Z_Q[X]/(X^N + 1)."""

from __future__ import annotations

from collections.abc import Sequence

from .params import N, Q
from .reduce import montgomery_reduce

_ROOT_OF_UNITY = 1753
_MONT = pow(2, 32, Q)


def _bit_reverse(value: int, bits: int = 8) -> int:
    return int(format(value, f"0{bits}b")[::-1], 2)


def _centered(value: int) -> int:
    value %= Q
    return value - Q if value > Q // 2 else value


def _build_zetas() -> tuple[int, ...]:
    """Powers of the 512th root of unity in Montgomery form, bit-reversed order."""
    table = [
        _centered(_MONT * pow(_ROOT_OF_UNITY, _bit_reverse(k), Q)) for k in range(N)
    ]
    table[0] = 0  # never used by the transforms
    return tuple(table)


ZETAS = _build_zetas()

# mont^2 / 256 mod Q
_INV_FACTOR = (pow(2, 64, Q) * pow(N, -1, Q)) % Q


def _coefficients(coeffs: Sequence[int]) -> list[int]:
    a = list(coeffs)
    if len(a) != N:
        raise ValueError(f"expected {N} coefficients, got {len(a)}")
    return a


def ntt(coeffs: Sequence[int]) -> list[int]:
    """Forward NTT without reductions; the result is in bit-reversed order."""
    a = _coefficients(coeffs)
    k = 0
    length = 128
    while length > 0:
        for start in range(0, N, 2 * length):
            k += 1
            zeta = ZETAS[k]
            for j in range(start, start + length):
                t = montgomery_reduce(zeta * a[j + length])
                a[j + length] = a[j] - t
                a[j] = a[j] + t
        length >>= 1
    return a


def invntt_tomont(coeffs: Sequence[int]) -> list[int]:
    """Inverse NTT followed by multiplication with the Montgomery factor 2^32."""
    a = _coefficients(coeffs)
    k = N
    length = 1
    while length < N:
        for start in range(0, N, 2 * length):
            k -= 1
            zeta = -ZETAS[k]
            for j in range(start, start + length):
                t = a[j]
                a[j] = t + a[j + length]
                a[j + length] = montgomery_reduce(zeta * (t - a[j + length]))
        length <<= 1
    return [montgomery_reduce(_INV_FACTOR * x) for x in a]