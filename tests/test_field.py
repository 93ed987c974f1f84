import pytest
from hypothesis import given, strategies as st

from sonicproofs.field import (
    MODULUS,
    DummyEngine,
    FieldDecodingError,
    Fr,
    LegendreSymbol,
)

values = st.integers(0, MODULUS - 1)
nonzero_values = st.integers(1, MODULUS - 1)
elements = values.map(Fr)
nonzero = nonzero_values.map(Fr)


@given(values, values)
def test_add_sub_round_trip(x, y):
    a, b = Fr(x), Fr(y)
    assert (a + b) - b == a
    assert a + b == Fr.from_int(x + y)


@given(values, values, values)
def test_distributive(x, y, z):
    a, b, c = Fr(x), Fr(y), Fr(z)
    assert a * (b + c) == a * b + a * c


@given(values)
def test_negation_sums_to_zero(x):
    a = Fr(x)
    assert a + (-a) == Fr.zero()
    assert -a == Fr.from_int(-x)


@given(values)
def test_double_is_self_addition(x):
    a = Fr(x)
    assert a.double() == a + a
    assert a.double() == Fr.from_int(2 * x)


@given(values)
def test_square_is_self_product(x):
    a = Fr(x)
    assert a.square() == a * a
    assert a.square() == Fr.from_int(x * x)


@given(nonzero)
def test_inverse(a):
    assert a * a.inverse() == Fr.one()


def test_zero_has_no_inverse():
    with pytest.raises(ZeroDivisionError):
        Fr.zero().inverse()


@given(nonzero)
def test_fermat(a):
    assert a.pow(MODULUS - 1) == Fr.one()


@given(elements)
def test_small_powers(a):
    assert a.pow(0) == Fr.one()
    assert a.pow(3) == a * a * a
    assert a ** 2 == a.square()


def test_negative_exponent_rejected():
    with pytest.raises(ValueError):
        Fr(3).pow(-1)


def test_root_of_unity_order():
    w = Fr.root_of_unity()
    assert w == Fr(57751)
    assert w.pow(1 << Fr.S) == Fr.one()
    assert w.pow(1 << (Fr.S - 1)) == -Fr.one()


def test_generator_is_non_residue():
    g = Fr.multiplicative_generator()
    assert g == Fr(5)
    assert g.legendre() is LegendreSymbol.QUADRATIC_NON_RESIDUE
    assert g.sqrt() is None


def test_zero_legendre_and_sqrt():
    assert Fr.zero().legendre() is LegendreSymbol.ZERO
    assert Fr.zero().sqrt() == Fr.zero()


@given(nonzero_values)
def test_sqrt_of_square(x):
    a = Fr(x)
    sq = Fr.from_int(x * x)
    assert sq.legendre() is LegendreSymbol.QUADRATIC_RESIDUE
    root = sq.sqrt()
    assert root is not None
    assert root.square() == sq
    assert root in (a, -a)


@given(values)
def test_legendre_matches_sqrt(x):
    a = Fr(x)
    has_root = a.sqrt() is not None
    assert has_root == (a.legendre() is not LegendreSymbol.QUADRATIC_NON_RESIDUE)


def test_from_repr_bounds():
    assert Fr.from_repr(MODULUS - 1) == -Fr.one()
    with pytest.raises(FieldDecodingError):
        Fr.from_repr(64513)
    with pytest.raises(FieldDecodingError):
        Fr(MODULUS)


def test_from_int_reduces():
    assert Fr.from_int(-1) == Fr(MODULUS - 1)
    assert Fr.from_int(MODULUS + 7) == Fr(7)


@given(elements)
def test_repr_round_trip(a):
    assert Fr.from_repr(a.to_repr()) == a


@given(elements)
def test_bytes_round_trip(a):
    data = a.to_bytes()
    assert len(data) == Fr.REPR_BYTES
    assert Fr.from_bytes(data) == a


def test_bytes_are_big_endian():
    assert Fr.one().to_bytes() == b"\x00" * 7 + b"\x01"


def test_from_bytes_errors():
    with pytest.raises(FieldDecodingError):
        Fr.from_bytes(b"\xff" * 8)
    with pytest.raises(ValueError):
        Fr.from_bytes(b"\x00\x01")


@given(nonzero, nonzero, nonzero)
def test_pairing_bilinearity(a, b, s):
    engine = DummyEngine()
    assert engine.pairing_check([(a * s, b), (-a, b * s)])


@given(nonzero, nonzero)
def test_pairing_of_nonzero_points_is_not_identity(a, b):
    assert not DummyEngine().pairing_check([(a, b)])


@given(elements, elements)
def test_final_exponentiation_of_loop(a, b):
    engine = DummyEngine()
    assert engine.final_exponentiation(engine.miller_loop([(a, b)])) == a * b