"""SHAKE-based extendable output streams used for sampling."""

from __future__ import annotations

import hashlib

from .params import CRHBYTES, SEEDBYTES

SHAKE128_RATE = 168
SHAKE256_RATE = 136
STREAM128_BLOCKBYTES = SHAKE128_RATE
STREAM256_BLOCKBYTES = SHAKE256_RATE

_XOFS = {
    "shake128": (hashlib.shake_128, SHAKE128_RATE),
    "shake256": (hashlib.shake_256, SHAKE256_RATE),
}


class XofStream:
    """Incremental reader over the output of SHAKE128 or SHAKE256."""

    def __init__(self, hash_name: str, data: bytes) -> None:
        try:
            factory, self.rate = _XOFS[hash_name]
        except KeyError:
            raise ValueError(f"unsupported XOF: {hash_name!r}") from None
        self.hash_name = hash_name
        self._hash = factory(bytes(data))
        self._buffer = b""
        self._pos = 0

    def read(self, n: int) -> bytes:
        """Return the next n bytes of output."""
        if n < 0:
            raise ValueError("cannot read a negative number of bytes")
        end = self._pos + n
        if end > len(self._buffer):
            size = max(end, 2 * len(self._buffer), 4 * self.rate)
            self._buffer = self._hash.digest(size)
        out = self._buffer[self._pos:end]
        self._pos = end
        return out

    def squeeze_blocks(self, count: int) -> bytes:
        """Return the next count full blocks of output."""
        return self.read(count * self.rate)


def _nonce_bytes(nonce: int) -> bytes:
    return (nonce & 0xFFFF).to_bytes(2, "little")


def shake128_stream(seed: bytes, nonce: int) -> XofStream:
    """SHAKE128(seed || nonce) with a 32-byte seed and a 16-bit nonce."""
    if len(seed) != SEEDBYTES:
        raise ValueError(f"seed must be {SEEDBYTES} bytes")
    return XofStream("shake128", bytes(seed) + _nonce_bytes(nonce))


def shake256_stream(seed: bytes, nonce: int) -> XofStream:
    """SHAKE256(seed || nonce) with a 64-byte seed and a 16-bit nonce."""
    if len(seed) != CRHBYTES:
        raise ValueError(f"seed must be {CRHBYTES} bytes")
    return XofStream("shake256", bytes(seed) + _nonce_bytes(nonce))


def shake256(data: bytes, length: int) -> bytes:
    """One-shot SHAKE256 of data, returning length bytes."""
    return hashlib.shake_256(bytes(data)).digest(length)