"""Polynomials in Z_Q[X]/(X^N + 1): arithmetic, rounding and sampling."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from . import rounding
from .bitpack import unpack_z
from .karatsuba import poly_mul_karatsuba
from .params import D, N, Q, SEEDBYTES
from .reduce import caddq, reduce32
from .symmetric import (
    STREAM128_BLOCKBYTES,
    STREAM256_BLOCKBYTES,
    XofStream,
    shake128_stream,
    shake256_stream,
)

_POLYZ_PACKEDBYTES = {1 << 17: 576, 1 << 19: 640}
_ETA_NBLOCKS_BYTES = {2: 136, 4: 227}
_UNIFORM_BYTES = 768


def _zero() -> tuple[int, ...]:
    return (0,) * N


@dataclass(frozen=True)
class Poly:
    """An immutable polynomial with N integer coefficients."""

    coeffs: tuple[int, ...] = field(default_factory=_zero)

    def __post_init__(self) -> None:
        coeffs = tuple(int(c) for c in self.coeffs)
        if len(coeffs) != N:
            raise ValueError(f"expected {N} coefficients, got {len(coeffs)}")
        object.__setattr__(self, "coeffs", coeffs)

    def __iter__(self) -> Iterator[int]:
        return iter(self.coeffs)

    def __len__(self) -> int:
        return N

    def __getitem__(self, index: int) -> int:
        return self.coeffs[index]

    def __add__(self, other: Poly) -> Poly:
        """Coefficient-wise sum without modular reduction."""
        if not isinstance(other, Poly):
            return NotImplemented
        return Poly(tuple(a + b for a, b in zip(self.coeffs, other.coeffs)))

    def __sub__(self, other: Poly) -> Poly:
        """Coefficient-wise difference without modular reduction."""
        if not isinstance(other, Poly):
            return NotImplemented
        return Poly(tuple(a - b for a, b in zip(self.coeffs, other.coeffs)))

    def __mul__(self, other: Poly) -> Poly:
        """Product in Z_Q[X]/(X^N + 1) with coefficients in [0, Q)."""
        if not isinstance(other, Poly):
            return NotImplemented
        return Poly(tuple(poly_mul_karatsuba(self.coeffs, other.coeffs)))

    def reduce(self) -> Poly:
        """Reduce every coefficient to a representative in [-6283009, 6283007]."""
        return Poly(tuple(reduce32(c) for c in self.coeffs))

    def caddq(self) -> Poly:
        """Add Q to every negative coefficient."""
        return Poly(tuple(caddq(c) for c in self.coeffs))

    def shiftl(self) -> Poly:
        """Multiply by 2^D without modular reduction."""
        return Poly(tuple(c << D for c in self.coeffs))

    def power2round(self) -> tuple[Poly, Poly]:
        """Return (a1, a0) with c = a1*2^D + a0 for every coefficient c."""
        pairs = [rounding.power2round(c) for c in self.coeffs]
        return Poly(tuple(p[0] for p in pairs)), Poly(tuple(p[1] for p in pairs))

    def decompose(self, gamma2: int) -> tuple[Poly, Poly]:
        """Return the high bits a1 and low bits a0 of every coefficient."""
        pairs = [rounding.decompose(c, gamma2) for c in self.coeffs]
        return Poly(tuple(p[0] for p in pairs)), Poly(tuple(p[1] for p in pairs))

    def use_hint(self, hint: Poly, gamma2: int) -> Poly:
        """Return the high bits of every coefficient, corrected by the hint."""
        return Poly(
            tuple(
                rounding.use_hint(a, h, gamma2)
                for a, h in zip(self.coeffs, hint.coeffs)
            )
        )

    def chknorm(self, bound: int) -> bool:
        """Return True if the infinity norm is not strictly below bound.

        A bound above (Q-1)/8 is always rejected. Coefficients are assumed
        to have been reduced with reduce().
        """
        if bound > (Q - 1) // 8:
            return True
        return any(abs(c) >= bound for c in self.coeffs)


def poly_make_hint(a0: Poly, a1: Poly, gamma2: int) -> tuple[Poly, int]:
    """Return the hint polynomial and the number of its one bits."""
    hints = tuple(
        rounding.make_hint(x0, x1, gamma2) for x0, x1 in zip(a0.coeffs, a1.coeffs)
    )
    return Poly(hints), sum(hints)


def poly_uniform(seed: bytes, nonce: int) -> Poly:
    """Sample coefficients uniformly in [0, Q-1] from SHAKE128(seed || nonce)."""
    stream = shake128_stream(seed, nonce)
    nblocks = -(-_UNIFORM_BYTES // STREAM128_BLOCKBYTES)
    buf = stream.squeeze_blocks(nblocks)
    coeffs: list[int] = []
    pos = 0
    while len(coeffs) < N:
        if pos + 3 > len(buf):
            buf = buf[pos:] + stream.squeeze_blocks(1)
            pos = 0
        t = int.from_bytes(buf[pos:pos + 3], "little") & 0x7FFFFF
        pos += 3
        if t < Q:
            coeffs.append(t)
    return Poly(tuple(coeffs))


def _eta_nibble(t: int, eta: int) -> int | None:
    if eta == 2:
        return 2 - t % 5 if t < 15 else None
    return 4 - t if t < 9 else None


def poly_uniform_eta(seed: bytes, nonce: int, eta: int) -> Poly:
    """Sample coefficients uniformly in [-eta, eta] from SHAKE256(seed || nonce)."""
    try:
        first_bytes = _ETA_NBLOCKS_BYTES[eta]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported eta: {eta!r}") from None
    stream = shake256_stream(seed, nonce)
    nblocks = -(-first_bytes // STREAM256_BLOCKBYTES)
    buf = stream.squeeze_blocks(nblocks)
    coeffs: list[int] = []
    while True:
        for byte in buf:
            for t in (byte & 0x0F, byte >> 4):
                value = _eta_nibble(t, eta)
                if value is not None and len(coeffs) < N:
                    coeffs.append(value)
            if len(coeffs) >= N:
                return Poly(tuple(coeffs))
        buf = stream.squeeze_blocks(1)


def poly_uniform_gamma1(seed: bytes, nonce: int, gamma1: int) -> Poly:
    """Sample coefficients in [-(gamma1 - 1), gamma1] from SHAKE256(seed || nonce)."""
    try:
        size = _POLYZ_PACKEDBYTES[gamma1]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported gamma1: {gamma1!r}") from None
    stream = shake256_stream(seed, nonce)
    nblocks = -(-size // STREAM256_BLOCKBYTES)
    buf = stream.squeeze_blocks(nblocks)
    return Poly(tuple(unpack_z(buf[:size], gamma1)))


def poly_challenge(seed: bytes, tau: int) -> Poly:
    """Sample a polynomial with tau coefficients in {-1, 1} from SHAKE256(seed)."""
    if len(seed) != SEEDBYTES:
        raise ValueError(f"seed must be {SEEDBYTES} bytes")
    if not 0 <= tau <= min(N, 64):
        raise ValueError(f"unsupported tau: {tau!r}")
    stream = XofStream("shake256", bytes(seed))
    signs = int.from_bytes(stream.read(8), "little")
    c = [0] * N
    for i in range(N - tau, N):
        b = stream.read(1)[0]
        while b > i:
            b = stream.read(1)[0]
        c[i] = c[b]
        c[b] = 1 - 2 * (signs & 1)
        signs >>= 1
    return Poly(tuple(c))