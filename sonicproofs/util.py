"""Polynomial arithmetic, multi-exponentiation and polynomial commitments."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, TypeVar

from .field import Fr
from .source import AssignmentMissingError
from .srs import SRS

T = TypeVar("T")


def polynomial_commitment(
    max_degree: int,
    largest_negative_power: int,
    largest_positive_power: int,
    srs: SRS,
    scalars: Iterable[Fr],
) -> Fr:
    """Commit to a Laurent polynomial, shifted so its top power lands at x^d."""
    if max_degree < largest_positive_power:
        raise ValueError("max_degree must be at least largest_positive_power")
    d = srs.d
    if d < max_degree + largest_negative_power + 1:
        min_power = largest_negative_power + max_degree - d
        max_power = d + largest_positive_power - max_degree
        bases = list(reversed(srs.g_negative_x_alpha[:min_power]))
        bases.extend(srs.g_positive_x_alpha[:max_power])
    else:
        bases = srs.g_positive_x_alpha[d - max_degree - largest_negative_power - 1:]
    return multiexp(bases, scalars)


def polynomial_commitment_opening(
    largest_negative_power: int,
    largest_positive_power: int,
    coefficients: Iterable[Fr],
    point: Fr,
    srs: SRS,
) -> Fr:
    """Open a commitment to f(X) - f(point); the input must already be in that form."""
    quotient = kate_division(coefficients, point)
    negative = list(reversed(quotient[:largest_negative_power]))
    positive = quotient[largest_negative_power:]
    bases = list(srs.g_negative_x[1:len(negative) + 1])
    bases.extend(srs.g_positive_x[:len(positive)])
    return multiexp(bases, negative + positive)


def evaluate_at_consecutive_powers(coeffs: Iterable[Fr], first_power: Fr, base: Fr) -> Fr:
    """Sum of coeffs[i] * first_power * base^i."""
    acc = Fr.zero()
    power = first_power
    for coeff in coeffs:
        acc = acc + coeff * power
        power = power * base
    return acc


def mut_evaluate_at_consecutive_powers(coeffs: List[Fr], first_power: Fr, base: Fr) -> Fr:
    """Scale coeffs in place by first_power * base^i and return their sum."""
    distribute_consecutive_powers(coeffs, first_power, base)
    return sum(coeffs, Fr.zero())


def distribute_consecutive_powers(coeffs: List[Fr], first_power: Fr, base: Fr) -> None:
    """Multiply coeffs[i] in place by first_power * base^i."""
    power = first_power
    for i, coeff in enumerate(coeffs):
        coeffs[i] = coeff * power
        power = power * base


def _paired(bases: Iterable[Fr], scalars: Iterable[Fr]) -> tuple:
    base_list = list(bases)
    scalar_list = list(scalars)
    if len(base_list) != len(scalar_list):
        raise ValueError("scalars and exponents must have the same length")
    return base_list, scalar_list


def multiexp(bases: Iterable[Fr], scalars: Iterable[Fr]) -> Fr:
    """Sum of bases[i] multiplied by scalars[i]."""
    base_list, scalar_list = _paired(bases, scalars)
    return sum((g * s for g, s in zip(base_list, scalar_list)), Fr.zero())


def multiexp_serial(bases: Iterable[Fr], scalars: Iterable[Fr]) -> Fr:
    """Bucketed windowed multi-exponentiation; same result as multiexp."""
    base_list, scalar_list = _paired(bases, scalars)
    count = len(scalar_list)
    c = 3 if count < 32 else math.ceil(math.log(count))
    mask = (1 << c) - 1
    reprs = [s.to_repr() for s in scalar_list]

    windows = []
    cur = 0
    while cur <= Fr.NUM_BITS:
        buckets = [Fr.zero()] * ((1 << c) - 1)
        shifted = []
        for value, g in zip(reprs, base_list):
            index = value & mask
            if index:
                buckets[index - 1] = buckets[index - 1] + g
            shifted.append(value >> c)
        reprs = shifted

        acc = Fr.zero()
        running_sum = Fr.zero()
        for bucket in reversed(buckets):
            running_sum = running_sum + bucket
            acc = acc + running_sum
        windows.append(acc)
        cur += c

    acc = Fr.zero()
    for window in reversed(windows):
        for _ in range(c):
            acc = acc.double()
        acc = acc + window
    return acc


def kate_division(coefficients: Iterable[Fr], point: Fr) -> List[Fr]:
    """Divide a polynomial by (X - point), dropping the remainder."""
    coeffs = list(coefficients)
    if not coeffs:
        raise ValueError("cannot divide an empty polynomial")
    neg_point = -point
    quotient_reversed = []
    tmp = Fr.zero()
    for coeff in reversed(coeffs[1:]):
        lead = coeff - tmp
        quotient_reversed.append(lead)
        tmp = lead * neg_point
    return quotient_reversed[::-1]


def check_polynomial_commitment(
    commitment: Fr,
    point: Fr,
    value: Fr,
    opening: Fr,
    max_degree: int,
    srs: SRS,
) -> bool:
    """Check that opening proves the committed polynomial takes value at point."""
    if srs.d < max_degree:
        return False
    alpha_x = srs.h_positive_x_alpha[1]
    alpha = srs.h_positive_x_alpha[0]
    neg_x_n_minus_d = -srs.h_negative_x[srs.d - max_degree]
    gv = srs.g_positive_x[0] * value + opening * (-point)
    return srs.engine.pairing_check(
        [
            (opening, alpha_x),
            (gv, alpha),
            (commitment, neg_x_n_minus_d),
        ]
    )


def _bitreverse(n: int, bits: int) -> int:
    r = 0
    for _ in range(bits):
        r = (r << 1) | (n & 1)
        n >>= 1
    return r


def _fft(values: List[Fr], omega: Fr, log_n: int) -> None:
    n = len(values)
    if n != 1 << log_n:
        raise ValueError("length must be a power of two matching log_n")
    for k in range(n):
        rk = _bitreverse(k, log_n)
        if k < rk:
            values[k], values[rk] = values[rk], values[k]

    m = 1
    for _ in range(log_n):
        w_m = omega.pow(n // (2 * m))
        for k in range(0, n, 2 * m):
            w = Fr.one()
            for j in range(m):
                t = values[k + j + m] * w
                values[k + j + m] = values[k + j] - t
                values[k + j] = values[k + j] + t
                w = w * w_m
        m *= 2


def _fft_multiply(a: Sequence[Fr], b: Sequence[Fr], max_exp: int) -> List[Fr]:
    if not a or not b:
        raise ValueError("cannot multiply empty polynomials")
    result_len = len(a) + len(b) - 1
    m = 1
    exp = 0
    while m < result_len:
        m *= 2
        exp += 1
        if exp > max_exp:
            raise ValueError("polynomial too large")

    omega = Fr.root_of_unity()
    for _ in range(exp, Fr.S):
        omega = omega.square()

    fa = list(a) + [Fr.zero()] * (m - len(a))
    fb = list(b) + [Fr.zero()] * (m - len(b))
    _fft(fa, omega, exp)
    _fft(fb, omega, exp)
    product = [x * y for x, y in zip(fa, fb)]
    _fft(product, omega.inverse(), exp)

    m_inv = Fr.from_int(m).inverse()
    return [coeff * m_inv for coeff in product[:result_len]]


def multiply_polynomials(a: Sequence[Fr], b: Sequence[Fr]) -> List[Fr]:
    """Product of two polynomials through an evaluation domain of size up to 2^S."""
    return _fft_multiply(a, b, Fr.S)


def multiply_polynomials_serial(a: Sequence[Fr], b: Sequence[Fr]) -> List[Fr]:
    """Product of two polynomials through a radix-2 FFT of size below 2^S."""
    return _fft_multiply(a, b, Fr.S - 1)


def _check_lengths(a: Sequence[Fr], b: Sequence[Fr]) -> None:
    if len(a) != len(b):
        raise ValueError("polynomials must have the same length")


def add_polynomials(a: List[Fr], b: Sequence[Fr]) -> None:
    """Add b into a in place."""
    _check_lengths(a, b)
    for i, coeff in enumerate(b):
        a[i] = a[i] + coeff


def mul_polynomial_by_scalar(a: List[Fr], scalar: Fr) -> None:
    """Multiply every coefficient of a by scalar in place."""
    for i, coeff in enumerate(a):
        a[i] = coeff * scalar


def mul_add_polynomials(a: List[Fr], b: Sequence[Fr], scalar: Fr) -> None:
    """Add scalar * b into a in place."""
    _check_lengths(a, b)
    for i, coeff in enumerate(b):
        a[i] = a[i] + coeff * scalar


def require_assignment(value: Optional[T]) -> T:
    """Return value, or raise when it is missing."""
    if value is None:
        raise AssignmentMissingError("assignment is missing")
    return value