"""Key generation, signing and verification for Dilithium."""

from __future__ import annotations

import hmac
import os

from .packing import (
    MalformedSignatureError,
    SecretKey,
    Signature,
    pack_pk,
    pack_sig,
    pack_sk,
    unpack_pk,
    unpack_sig,
    unpack_sk,
)
from .params import CRHBYTES, SEEDBYTES, Params, params_for
from .poly import poly_challenge
from .polyvec import (
    chknorm_vec,
    decompose_vec,
    make_hint_vec,
    matrix_expand,
    matrix_mul,
    pack_w1_vec,
    power2round_vec,
    uniform_eta_vec,
    uniform_gamma1_vec,
    use_hint_vec,
    vec_add,
    vec_caddq,
    vec_reduce,
    vec_shiftl,
    vec_sub,
)
from .symmetric import shake256


class BadSignatureError(ValueError):
    """Raised when a signature does not verify."""


class Dilithium:
    """The Dilithium signature scheme for one security mode."""

    def __init__(self, mode: int = 2, randomized: bool = False) -> None:
        self.params: Params = params_for(mode)
        self.randomized = randomized

    @property
    def name(self) -> str:
        return self.params.name

    def keypair(self, seed: bytes | None = None) -> tuple[bytes, bytes]:
        """Generate (public_key, secret_key), from seed if given."""
        params = self.params
        if seed is None:
            seed = os.urandom(SEEDBYTES)
        seed = bytes(seed)
        if len(seed) != SEEDBYTES:
            raise ValueError(f"seed must be {SEEDBYTES} bytes")

        seedbuf = shake256(seed, 2 * SEEDBYTES + CRHBYTES)
        rho = seedbuf[:SEEDBYTES]
        rhoprime = seedbuf[SEEDBYTES:SEEDBYTES + CRHBYTES]
        key = seedbuf[SEEDBYTES + CRHBYTES:]

        mat = matrix_expand(rho, params)
        s1 = uniform_eta_vec(rhoprime, 0, params.l, params.eta)
        s2 = uniform_eta_vec(rhoprime, params.l, params.k, params.eta)

        t = vec_reduce(matrix_mul(mat, s1))
        t = vec_caddq(vec_reduce(vec_add(t, s2)))
        t1, t0 = power2round_vec(t)

        public_key = pack_pk(rho, t1, params)
        tr = shake256(public_key, SEEDBYTES)
        secret = SecretKey(rho=rho, key=key, tr=tr, t0=t0, s1=s1, s2=s2)
        return public_key, pack_sk(secret, params)

    def signature(self, message: bytes, secret_key: bytes) -> bytes:
        """Return a detached signature of message."""
        params = self.params
        message = bytes(message)
        sk = unpack_sk(secret_key, params)

        mu = shake256(sk.tr + message, CRHBYTES)
        if self.randomized:
            rhoprime = os.urandom(CRHBYTES)
        else:
            rhoprime = shake256(sk.key + mu, CRHBYTES)

        mat = matrix_expand(sk.rho, params)
        nonce = 0
        while True:
            y = uniform_gamma1_vec(rhoprime, nonce, params)
            nonce = (nonce + 1) & 0xFFFF

            w = vec_caddq(vec_reduce(matrix_mul(mat, y)))
            w1, w0 = decompose_vec(w, params.gamma2)
            c = shake256(mu + pack_w1_vec(w1, params.gamma2), SEEDBYTES)
            cp = poly_challenge(c, params.tau)

            z = vec_reduce(vec_add(tuple(cp * s for s in sk.s1), y))
            if chknorm_vec(z, params.gamma1 - params.beta):
                continue

            w0 = vec_reduce(vec_sub(w0, tuple(cp * s for s in sk.s2)))
            if chknorm_vec(w0, params.gamma2 - params.beta):
                continue

            ct0 = vec_reduce(tuple(cp * t for t in sk.t0))
            if chknorm_vec(ct0, params.gamma2):
                continue

            w0 = vec_add(w0, ct0)
            hints, count = make_hint_vec(w0, w1, params.gamma2)
            if count > params.omega:
                continue

            return pack_sig(Signature(c=c, z=z, h=hints), params)

    def sign(self, message: bytes, secret_key: bytes) -> bytes:
        """Return the signed message: signature followed by message."""
        message = bytes(message)
        return self.signature(message, secret_key) + message

    def verify(self, signature: bytes, message: bytes, public_key: bytes) -> None:
        """Check a detached signature; raise BadSignatureError if it fails."""
        params = self.params
        signature = bytes(signature)
        message = bytes(message)
        if len(signature) != params.signature_bytes:
            raise BadSignatureError("signature has the wrong length")

        rho, t1 = unpack_pk(public_key, params)
        try:
            sig = unpack_sig(signature, params)
        except MalformedSignatureError as exc:
            raise BadSignatureError(str(exc)) from exc
        if chknorm_vec(sig.z, params.gamma1 - params.beta):
            raise BadSignatureError("response vector out of bounds")

        tr = shake256(bytes(public_key), SEEDBYTES)
        mu = shake256(tr + message, CRHBYTES)

        cp = poly_challenge(sig.c, params.tau)
        mat = matrix_expand(rho, params)
        az = matrix_mul(mat, sig.z)
        ct1 = tuple(cp * t for t in vec_shiftl(t1))
        w = vec_caddq(vec_reduce(vec_sub(az, ct1)))
        w1 = use_hint_vec(w, sig.h, params.gamma2)

        c2 = shake256(mu + pack_w1_vec(w1, params.gamma2), SEEDBYTES)
        if not hmac.compare_digest(sig.c, c2):
            raise BadSignatureError("challenge mismatch")

    def open(self, signed_message: bytes, public_key: bytes) -> bytes:
        """Verify a signed message and return the message it carries."""
        signed_message = bytes(signed_message)
        size = self.params.signature_bytes
        if len(signed_message) < size:
            raise BadSignatureError("signed message is too short")
        message = signed_message[size:]
        self.verify(signed_message[:size], message, public_key)
        return message