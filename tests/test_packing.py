import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dilithium_kara.packing import (
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
from dilithium_kara.params import N, params_for
from dilithium_kara.poly import Poly

P2 = params_for(2)
P3 = params_for(3)


def _random_poly(rng, low, high):
    return Poly(tuple(rng.randint(low, high) for _ in range(N)))


def _hint_poly(positions):
    coeffs = [0] * N
    for p in positions:
        coeffs[p] = 1
    return Poly(tuple(coeffs))


def _sample_signature(params, rng):
    z = tuple(
        _random_poly(rng, -(params.gamma1 - 1), params.gamma1) for _ in range(params.l)
    )
    h = (_hint_poly([3, 7]),) + tuple(Poly() for _ in range(params.k - 1))
    return Signature(c=bytes(range(32)), z=z, h=h)


def _hint_region_offset(params):
    return 32 + params.l * params.polyz_packedbytes


def test_public_key_length_and_rho_prefix():
    rng = random.Random(1)
    rho = bytes(rng.randrange(256) for _ in range(32))
    t1 = tuple(_random_poly(rng, 0, 1023) for _ in range(P2.k))
    pk = pack_pk(rho, t1, P2)
    assert len(pk) == 1312
    assert pk[:32] == rho


def test_public_key_round_trip():
    rng = random.Random(2)
    rho = bytes(rng.randrange(256) for _ in range(32))
    t1 = tuple(_random_poly(rng, 0, 1023) for _ in range(P3.k))
    rho2, t1_2 = unpack_pk(pack_pk(rho, t1, P3), P3)
    assert rho2 == rho
    assert t1_2 == t1


@settings(max_examples=15, deadline=None)
@given(
    st.lists(
        st.lists(st.integers(0, 1023), min_size=N, max_size=N),
        min_size=P2.k,
        max_size=P2.k,
    ),
    st.binary(min_size=32, max_size=32),
)
def test_public_key_round_trip_property(rows, rho):
    t1 = tuple(Poly(tuple(r)) for r in rows)
    assert unpack_pk(pack_pk(rho, t1, P2), P2) == (rho, t1)


def test_public_key_errors():
    with pytest.raises(ValueError):
        unpack_pk(b"\x00" * 10, P2)
    with pytest.raises(ValueError):
        pack_pk(b"\x00" * 31, tuple(Poly() for _ in range(P2.k)), P2)
    with pytest.raises(ValueError):
        pack_pk(b"\x00" * 32, (Poly(),), P2)


@pytest.mark.parametrize("mode", [2, 3, 5])
def test_secret_key_round_trip(mode):
    params = params_for(mode)
    rng = random.Random(mode)
    secret = SecretKey(
        rho=bytes(rng.randrange(256) for _ in range(32)),
        key=bytes(rng.randrange(256) for _ in range(32)),
        tr=bytes(rng.randrange(256) for _ in range(32)),
        t0=tuple(_random_poly(rng, -4095, 4096) for _ in range(params.k)),
        s1=tuple(_random_poly(rng, -params.eta, params.eta) for _ in range(params.l)),
        s2=tuple(_random_poly(rng, -params.eta, params.eta) for _ in range(params.k)),
    )
    data = pack_sk(secret, params)
    assert len(data) == params.secret_key_bytes
    assert data[:32] == secret.rho
    assert data[32:64] == secret.key
    assert data[64:96] == secret.tr
    assert unpack_sk(data, params) == secret


def test_secret_key_length_pinned_and_errors():
    assert P2.secret_key_bytes == 2528
    with pytest.raises(ValueError):
        unpack_sk(b"\x00" * 100, P2)


def test_signature_round_trip_and_length():
    rng = random.Random(5)
    sig = _sample_signature(P2, rng)
    data = pack_sig(sig, P2)
    assert len(data) == 2420
    assert data[:32] == sig.c
    assert unpack_sig(data, P2) == sig


def test_signature_hint_wire_format():
    sig = _sample_signature(P2, random.Random(6))
    region = pack_sig(sig, P2)[_hint_region_offset(P2):]
    assert region[:2] == bytes([3, 7])
    assert not any(region[2:P2.omega])
    assert list(region[P2.omega:]) == [2, 2, 2, 2]


def test_too_many_hints_rejected_when_packing():
    rng = random.Random(7)
    sig = _sample_signature(P2, rng)
    crowded = (_hint_poly(range(P2.omega + 1)),) + sig.h[1:]
    with pytest.raises(ValueError):
        pack_sig(Signature(c=sig.c, z=sig.z, h=crowded), P2)


def _tampered(change):
    data = bytearray(pack_sig(_sample_signature(P2, random.Random(8)), P2))
    change(data, _hint_region_offset(P2))
    return bytes(data)


def test_unordered_hint_indices_are_malformed():
    def swap(data, off):
        data[off], data[off + 1] = 7, 3

    with pytest.raises(MalformedSignatureError):
        unpack_sig(_tampered(swap), P2)


def test_hint_count_above_omega_is_malformed():
    def overflow(data, off):
        data[off + P2.omega + 3] = P2.omega + 1

    with pytest.raises(MalformedSignatureError):
        unpack_sig(_tampered(overflow), P2)


def test_decreasing_hint_count_is_malformed():
    def shrink(data, off):
        data[off + P2.omega + 1] = 1

    with pytest.raises(MalformedSignatureError):
        unpack_sig(_tampered(shrink), P2)


def test_nonzero_unused_hint_index_is_malformed():
    def extra(data, off):
        data[off + 5] = 9

    with pytest.raises(MalformedSignatureError):
        unpack_sig(_tampered(extra), P2)


def test_wrong_signature_length_is_malformed():
    with pytest.raises(MalformedSignatureError):
        unpack_sig(b"\x00" * 100, P2)