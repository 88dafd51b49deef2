import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dilithium_kara.params import D, N, Q, params_for
from dilithium_kara.poly import (
    Poly,
    poly_challenge,
    poly_make_hint,
    poly_uniform,
    poly_uniform_eta,
    poly_uniform_gamma1,
)

SEED32 = bytes(range(32))
SEED64 = bytes(range(64))
GAMMA2_88 = (Q - 1) // 88
GAMMA2_32 = (Q - 1) // 32

standard_coeffs = st.lists(st.integers(0, Q - 1), min_size=N, max_size=N)


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Poly((1, 2, 3))


def test_default_is_zero():
    assert Poly().coeffs == (0,) * N


def test_add_sub_roundtrip():
    a = poly_uniform(SEED32, 0)
    b = poly_uniform(SEED32, 1)
    assert (a + b) - b == a


def test_multiply_by_one_is_identity():
    a = poly_uniform(SEED32, 3)
    one = Poly((1,) + (0,) * (N - 1))
    assert a * one == a


def test_negacyclic_wrap():
    x = Poly((0, 1) + (0,) * (N - 2))
    x_top = Poly((0,) * (N - 1) + (1,))
    product = x * x_top
    assert product.coeffs == (Q - 1,) + (0,) * (N - 1)


def test_multiplication_is_commutative():
    a = poly_uniform(SEED32, 4)
    b = poly_uniform_eta(SEED64, 0, 2)
    assert a * b == b * a


@settings(max_examples=20)
@given(st.lists(st.integers(-(2**30), 2**30), min_size=N, max_size=N))
def test_reduce_range_and_congruence(values):
    r = Poly(values).reduce()
    for orig, red in zip(values, r):
        assert -6283009 <= red <= 6283007
        assert (orig - red) % Q == 0


def test_caddq_makes_nonnegative():
    p = Poly([-(i + 1) for i in range(N)])
    out = p.caddq()
    assert all(c >= 0 for c in out)
    assert all((a - b) % Q == 0 for a, b in zip(p, out))


def test_shiftl_scales_by_two_to_d():
    p = poly_uniform_eta(SEED64, 1, 2)
    assert all(s == c * (1 << D) for c, s in zip(p, p.shiftl()))


@settings(max_examples=20)
@given(standard_coeffs)
def test_power2round_recombines(values):
    a1, a0 = Poly(values).power2round()
    for c, hi, lo in zip(values, a1, a0):
        assert hi * (1 << D) + lo == c
        assert -(1 << (D - 1)) < lo <= 1 << (D - 1)


@pytest.mark.parametrize("gamma2", [GAMMA2_88, GAMMA2_32])
def test_decompose_recombines(gamma2):
    p = poly_uniform(SEED32, 7)
    a1, a0 = p.decompose(gamma2)
    for c, hi, lo in zip(p, a1, a0):
        assert (hi * 2 * gamma2 + lo - c) % Q == 0


def test_decompose_rejects_bad_gamma2():
    with pytest.raises(ValueError):
        poly_uniform(SEED32, 0).decompose(12345)


@pytest.mark.parametrize("gamma2", [GAMMA2_88, GAMMA2_32])
def test_use_hint_zero_gives_high_bits(gamma2):
    p = poly_uniform(SEED32, 2)
    a1, _ = p.decompose(gamma2)
    assert p.use_hint(Poly(), gamma2) == a1


def test_make_hint_count_matches():
    p = poly_uniform(SEED32, 5)
    a1, a0 = p.decompose(GAMMA2_88)
    shifted = a0 + Poly([GAMMA2_88] * N)
    hints, count = poly_make_hint(shifted, a1, GAMMA2_88)
    assert count == sum(hints)
    assert set(hints) <= {0, 1}
    assert count > 0


def test_make_hint_zero_low_bits():
    hints, count = poly_make_hint(Poly(), Poly(), GAMMA2_32)
    assert count == 0
    assert hints == Poly()


def test_chknorm():
    p = Poly([5] + [0] * (N - 1))
    assert p.chknorm(5) is True
    assert p.chknorm(6) is False
    assert Poly([-5] + [0] * (N - 1)).chknorm(5) is True
    assert Poly().chknorm((Q - 1) // 8 + 1) is True


def test_poly_uniform_range_and_determinism():
    p = poly_uniform(SEED32, 0)
    assert all(0 <= c < Q for c in p)
    assert p == poly_uniform(SEED32, 0)
    assert p != poly_uniform(SEED32, 1)


def test_poly_uniform_bad_seed():
    with pytest.raises(ValueError):
        poly_uniform(b"short", 0)


@pytest.mark.parametrize("eta", [2, 4])
def test_poly_uniform_eta_range(eta):
    p = poly_uniform_eta(SEED64, 9, eta)
    assert all(-eta <= c <= eta for c in p)
    assert p == poly_uniform_eta(SEED64, 9, eta)


def test_poly_uniform_eta_errors():
    with pytest.raises(ValueError):
        poly_uniform_eta(SEED64, 0, 3)
    with pytest.raises(ValueError):
        poly_uniform_eta(SEED32, 0, 2)


@pytest.mark.parametrize("mode", [2, 3, 5])
def test_poly_uniform_gamma1_range(mode):
    gamma1 = params_for(mode).gamma1
    p = poly_uniform_gamma1(SEED64, 11, gamma1)
    assert all(-(gamma1 - 1) <= c <= gamma1 for c in p)
    assert p == poly_uniform_gamma1(SEED64, 11, gamma1)


def test_poly_uniform_gamma1_bad():
    with pytest.raises(ValueError):
        poly_uniform_gamma1(SEED64, 0, 1000)


@pytest.mark.parametrize("mode", [2, 3, 5])
def test_challenge_weight(mode):
    tau = params_for(mode).tau
    c = poly_challenge(SEED32, tau)
    nonzero = [x for x in c if x]
    assert len(nonzero) == tau
    assert set(nonzero) <= {-1, 1}
    assert c == poly_challenge(SEED32, tau)


def test_challenge_bad_seed():
    with pytest.raises(ValueError):
        poly_challenge(SEED64, 39)