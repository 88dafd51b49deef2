"""Bit-packing of polynomial coefficients into their wire encodings."""

from __future__ import annotations

from collections.abc import Sequence

from .params import D, N, Q

_ETA_BITS = {2: 3, 4: 4}
_GAMMA1_BITS = {1 << 17: 18, 1 << 19: 20}
_W1_BITS = {(Q - 1) // 88: 6, (Q - 1) // 32: 4}
_T1_BITS = 10
_T0_BITS = D
_T0_OFFSET = 1 << (D - 1)


def _width(table: dict[int, int], key: int, what: str) -> int:
    try:
        return table[key]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported {what}: {key!r}") from None


def _pack(values: Sequence[int], width: int) -> bytes:
    values = list(values)
    if len(values) != N:
        raise ValueError(f"expected {N} coefficients, got {len(values)}")
    mask = (1 << width) - 1
    acc = 0
    for i, v in enumerate(values):
        acc |= (v & mask) << (i * width)
    return acc.to_bytes(N * width // 8, "little")


def _unpack(data: bytes, width: int) -> list[int]:
    expected = N * width // 8
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    acc = int.from_bytes(bytes(data), "little")
    mask = (1 << width) - 1
    return [(acc >> (i * width)) & mask for i in range(N)]


def pack_eta(coeffs: Sequence[int], eta: int) -> bytes:
    """Pack coefficients in [-eta, eta]."""
    width = _width(_ETA_BITS, eta, "eta")
    return _pack([eta - c for c in coeffs], width)


def unpack_eta(data: bytes, eta: int) -> list[int]:
    """Unpack coefficients in [-eta, eta]."""
    width = _width(_ETA_BITS, eta, "eta")
    return [eta - v for v in _unpack(data, width)]


def pack_t1(coeffs: Sequence[int]) -> bytes:
    """Pack 10-bit standard-representative coefficients of t1."""
    return _pack(coeffs, _T1_BITS)


def unpack_t1(data: bytes) -> list[int]:
    """Unpack 10-bit coefficients of t1."""
    return _unpack(data, _T1_BITS)


def pack_t0(coeffs: Sequence[int]) -> bytes:
    """Pack coefficients of t0 in (-2^(D-1), 2^(D-1)]."""
    return _pack([_T0_OFFSET - c for c in coeffs], _T0_BITS)


def unpack_t0(data: bytes) -> list[int]:
    """Unpack coefficients of t0 in (-2^(D-1), 2^(D-1)]."""
    return [_T0_OFFSET - v for v in _unpack(data, _T0_BITS)]


def pack_z(coeffs: Sequence[int], gamma1: int) -> bytes:
    """Pack coefficients in [-(gamma1 - 1), gamma1]."""
    width = _width(_GAMMA1_BITS, gamma1, "gamma1")
    return _pack([gamma1 - c for c in coeffs], width)


def unpack_z(data: bytes, gamma1: int) -> list[int]:
    """Unpack coefficients in [-(gamma1 - 1), gamma1]."""
    width = _width(_GAMMA1_BITS, gamma1, "gamma1")
    return [gamma1 - v for v in _unpack(data, width)]


def pack_w1(coeffs: Sequence[int], gamma2: int) -> bytes:
    """Pack high bits w1 with coefficients in [0, 43] or [0, 15]."""
    width = _width(_W1_BITS, gamma2, "gamma2")
    return _pack(coeffs, width)