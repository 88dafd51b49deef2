"""Wire encodings of public keys, secret keys and signatures."""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass

from .bitpack import (
    pack_eta,
    pack_t0,
    pack_t1,
    pack_z,
    unpack_eta,
    unpack_t0,
    unpack_t1,
    unpack_z,
)
from .params import N, POLYT0_PACKEDBYTES, POLYT1_PACKEDBYTES, SEEDBYTES, Params
from .poly import Poly

PolyVec = tuple[Poly, ...]


class MalformedSignatureError(ValueError):
    """Raised when an encoded signature is not in canonical form."""


@dataclass(frozen=True)
class SecretKey:
    """The components of a secret key: (rho, key, tr, t0, s1, s2)."""

    rho: bytes
    key: bytes
    tr: bytes
    t0: PolyVec
    s1: PolyVec
    s2: PolyVec


@dataclass(frozen=True)
class Signature:
    """The components of a signature: challenge hash c, response z and hints h."""

    c: bytes
    z: PolyVec
    h: PolyVec


def _check_seed(value: bytes, what: str) -> bytes:
    value = bytes(value)
    if len(value) != SEEDBYTES:
        raise ValueError(f"{what} must be {SEEDBYTES} bytes, got {len(value)}")
    return value


def _check_count(vec: Sequence[Poly], count: int, what: str) -> None:
    if len(vec) != count:
        raise ValueError(f"{what} must hold {count} polynomials, got {len(vec)}")


def _check_length(data: bytes, expected: int, what: str) -> bytes:
    data = bytes(data)
    if len(data) != expected:
        raise ValueError(f"{what} must be {expected} bytes, got {len(data)}")
    return data


def _read_polys(stream: io.BytesIO, count: int, size: int, decode) -> PolyVec:
    return tuple(Poly(decode(stream.read(size))) for _ in range(count))


def pack_pk(rho: bytes, t1: Sequence[Poly], params: Params) -> bytes:
    """Encode the public key (rho, t1)."""
    rho = _check_seed(rho, "rho")
    _check_count(t1, params.k, "t1")
    return rho + b"".join(pack_t1(p.coeffs) for p in t1)


def unpack_pk(data: bytes, params: Params) -> tuple[bytes, PolyVec]:
    """Decode a public key into (rho, t1)."""
    data = _check_length(data, params.public_key_bytes, "public key")
    stream = io.BytesIO(data)
    rho = stream.read(SEEDBYTES)
    t1 = _read_polys(stream, params.k, POLYT1_PACKEDBYTES, unpack_t1)
    return rho, t1


def pack_sk(secret: SecretKey, params: Params) -> bytes:
    """Encode a secret key as rho || key || tr || s1 || s2 || t0."""
    parts = [
        _check_seed(secret.rho, "rho"),
        _check_seed(secret.key, "key"),
        _check_seed(secret.tr, "tr"),
    ]
    _check_count(secret.s1, params.l, "s1")
    _check_count(secret.s2, params.k, "s2")
    _check_count(secret.t0, params.k, "t0")
    parts.extend(pack_eta(p.coeffs, params.eta) for p in secret.s1)
    parts.extend(pack_eta(p.coeffs, params.eta) for p in secret.s2)
    parts.extend(pack_t0(p.coeffs) for p in secret.t0)
    return b"".join(parts)


def unpack_sk(data: bytes, params: Params) -> SecretKey:
    """Decode a secret key."""
    data = _check_length(data, params.secret_key_bytes, "secret key")
    stream = io.BytesIO(data)
    rho = stream.read(SEEDBYTES)
    key = stream.read(SEEDBYTES)
    tr = stream.read(SEEDBYTES)

    def decode_eta(chunk: bytes) -> list[int]:
        return unpack_eta(chunk, params.eta)

    s1 = _read_polys(stream, params.l, params.polyeta_packedbytes, decode_eta)
    s2 = _read_polys(stream, params.k, params.polyeta_packedbytes, decode_eta)
    t0 = _read_polys(stream, params.k, POLYT0_PACKEDBYTES, unpack_t0)
    return SecretKey(rho=rho, key=key, tr=tr, t0=t0, s1=s1, s2=s2)


def pack_sig(signature: Signature, params: Params) -> bytes:
    """Encode a signature as c || z || hint indices || hint counts."""
    c = _check_seed(signature.c, "c")
    _check_count(signature.z, params.l, "z")
    _check_count(signature.h, params.k, "h")
    z_bytes = b"".join(pack_z(p.coeffs, params.gamma1) for p in signature.z)

    hints = bytearray(params.omega + params.k)
    count = 0
    for i, poly in enumerate(signature.h):
        for j, coeff in enumerate(poly):
            if coeff:
                if count >= params.omega:
                    raise ValueError(f"more than {params.omega} hint bits")
                hints[count] = j
                count += 1
        hints[params.omega + i] = count
    return c + z_bytes + bytes(hints)


def unpack_sig(data: bytes, params: Params) -> Signature:
    """Decode a signature, rejecting any non-canonical hint encoding."""
    data = bytes(data)
    if len(data) != params.signature_bytes:
        raise MalformedSignatureError(
            f"signature must be {params.signature_bytes} bytes, got {len(data)}"
        )
    stream = io.BytesIO(data)
    c = stream.read(SEEDBYTES)

    def decode_z(chunk: bytes) -> list[int]:
        return unpack_z(chunk, params.gamma1)

    z = _read_polys(stream, params.l, params.polyz_packedbytes, decode_z)

    hint_bytes = stream.read(params.omega + params.k)
    omega = params.omega
    hints = []
    k = 0
    for i in range(params.k):
        end = hint_bytes[omega + i]
        if end < k or end > omega:
            raise MalformedSignatureError("hint counts out of range")
        coeffs = [0] * N
        for j in range(k, end):
            # Indices must be strictly increasing for strong unforgeability.
            if j > k and hint_bytes[j] <= hint_bytes[j - 1]:
                raise MalformedSignatureError("hint indices not increasing")
            coeffs[hint_bytes[j]] = 1
        hints.append(Poly(coeffs))
        k = end

    if any(hint_bytes[k:omega]):
        raise MalformedSignatureError("unused hint indices are not zero")
    return Signature(c=c, z=z, h=tuple(hints))