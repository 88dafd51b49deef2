"""Vectors and matrices of polynomials used by the signature scheme."""

from __future__ import annotations

from collections.abc import Sequence

from .bitpack import pack_w1
from .params import Params
from .poly import (
    Poly,
    poly_make_hint,
    poly_uniform,
    poly_uniform_eta,
    poly_uniform_gamma1,
)

PolyVec = tuple[Poly, ...]
PolyMatrix = tuple[PolyVec, ...]


def _pairs(u: Sequence[Poly], v: Sequence[Poly]) -> zip:
    if len(u) != len(v):
        raise ValueError(f"vector lengths differ: {len(u)} and {len(v)}")
    return zip(u, v)


def matrix_expand(rho: bytes, params: Params) -> PolyMatrix:
    """ExpandA: the k x l matrix A sampled from SHAKE128(rho || j || i)."""
    return tuple(
        tuple(poly_uniform(rho, (i << 8) + j) for j in range(params.l))
        for i in range(params.k)
    )


def matrix_mul(mat: Sequence[Sequence[Poly]], vector: Sequence[Poly]) -> PolyVec:
    """Matrix-vector product; each entry is a sum of products in [0, Q) left unreduced."""
    rows = []
    for row in mat:
        products = [a * b for a, b in _pairs(row, vector)]
        if not products:
            raise ValueError("matrix rows must not be empty")
        total = products[0]
        for p in products[1:]:
            total = total + p
        rows.append(total)
    return tuple(rows)


def uniform_eta_vec(seed: bytes, nonce: int, count: int, eta: int) -> PolyVec:
    """Sample count polynomials in [-eta, eta] with consecutive 16-bit nonces."""
    return tuple(
        poly_uniform_eta(seed, (nonce + i) & 0xFFFF, eta) for i in range(count)
    )


def uniform_gamma1_vec(seed: bytes, nonce: int, params: Params) -> PolyVec:
    """Sample l polynomials in [-(gamma1 - 1), gamma1] with nonces l*nonce + i."""
    return tuple(
        poly_uniform_gamma1(seed, (params.l * nonce + i) & 0xFFFF, params.gamma1)
        for i in range(params.l)
    )


def vec_reduce(vec: Sequence[Poly]) -> PolyVec:
    """Reduce every coefficient to a representative in [-6283009, 6283007]."""
    return tuple(p.reduce() for p in vec)


def vec_caddq(vec: Sequence[Poly]) -> PolyVec:
    """Add Q to every negative coefficient."""
    return tuple(p.caddq() for p in vec)


def vec_add(u: Sequence[Poly], v: Sequence[Poly]) -> PolyVec:
    """Element-wise sum without modular reduction."""
    return tuple(a + b for a, b in _pairs(u, v))


def vec_sub(u: Sequence[Poly], v: Sequence[Poly]) -> PolyVec:
    """Element-wise difference without modular reduction."""
    return tuple(a - b for a, b in _pairs(u, v))


def vec_shiftl(vec: Sequence[Poly]) -> PolyVec:
    """Multiply every polynomial by 2^D without modular reduction."""
    return tuple(p.shiftl() for p in vec)


def chknorm_vec(vec: Sequence[Poly], bound: int) -> bool:
    """Return True if any polynomial's infinity norm is not strictly below bound."""
    return any(p.chknorm(bound) for p in vec)


def power2round_vec(vec: Sequence[Poly]) -> tuple[PolyVec, PolyVec]:
    """Return (v1, v0) with v = v1*2^D + v0 coefficient-wise."""
    pairs = [p.power2round() for p in vec]
    return tuple(p[0] for p in pairs), tuple(p[1] for p in pairs)


def decompose_vec(vec: Sequence[Poly], gamma2: int) -> tuple[PolyVec, PolyVec]:
    """Return the high bits v1 and low bits v0 of every polynomial."""
    pairs = [p.decompose(gamma2) for p in vec]
    return tuple(p[0] for p in pairs), tuple(p[1] for p in pairs)


def make_hint_vec(
    v0: Sequence[Poly], v1: Sequence[Poly], gamma2: int
) -> tuple[PolyVec, int]:
    """Return the hint vector and the total number of its one bits."""
    results = [poly_make_hint(a0, a1, gamma2) for a0, a1 in _pairs(v0, v1)]
    return tuple(r[0] for r in results), sum(r[1] for r in results)


def use_hint_vec(
    vec: Sequence[Poly], hints: Sequence[Poly], gamma2: int
) -> PolyVec:
    """Correct the high bits of every polynomial according to the hints."""
    return tuple(p.use_hint(h, gamma2) for p, h in _pairs(vec, hints))


def pack_w1_vec(vec: Sequence[Poly], gamma2: int) -> bytes:
    """Concatenate the packed encodings of the high-bit polynomials."""
    return b"".join(pack_w1(p.coeffs, gamma2) for p in vec)