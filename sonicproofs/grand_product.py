"""Grand product argument.

For commitments to two polynomials of degree n, proves that the products of
their coefficients are equal, assuming no coefficient is zero. This is one
part of the permutation argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .field import Fr
from .srs import SRS
from .util import (
    distribute_consecutive_powers,
    evaluate_at_consecutive_powers,
    mul_add_polynomials,
    mul_polynomial_by_scalar,
    multiexp,
    multiply_polynomials,
    polynomial_commitment_opening,
)


@dataclass(frozen=True)
class GrandProductProof:
    t_opening: Fr
    e_zinv: Fr
    e_opening: Fr
    f_y: Fr
    f_opening: Fr


def _running_products(values: Sequence[Fr]) -> List[Fr]:
    products = []
    acc = Fr.one()
    for value in values:
        acc = acc * value
        products.append(acc)
    return products


def _c_at_zy(a: Fr, v: Fr, n: int, y: Fr, z: Fr, z_inv: Fr) -> Fr:
    """c_j = ((a_j + v_j (yz)^{n+1}) y + z^{n+2} + z^{n+1} y - z^{2n+2} y) z^-1."""
    yz = y * z
    c_zy = ((yz.pow(n + 1) * v) + a) * y
    z_n_plus_1 = z.pow(n + 1)
    z_n_plus_2 = z_n_plus_1 * z
    z_2n_plus_2 = z_n_plus_1.square() * y
    c_zy = c_zy + z_n_plus_1 * y + z_n_plus_2 - z_2n_plus_2
    return c_zy * z_inv


def _accumulate(acc: Optional[List[Fr]], poly: Sequence[Fr], scalar: Fr) -> List[Fr]:
    if acc is None:
        acc = list(poly)
        mul_polynomial_by_scalar(acc, scalar)
        return acc
    mul_add_polynomials(acc, poly, scalar)
    return acc


class GrandProductArgument:
    """Prover state for a batch of pairs of polynomials with equal products.

    For each pair (a, b) of length n the prover keeps
    a' = [a_1..a_n, 0, b_1..b_n] and the running products
    c = [a_1, a_1 a_2, ..., prod a, 1, b_1, b_1 b_2, ..., prod b].
    """

    def __init__(self, polynomials: Sequence[Tuple[Sequence[Fr], Sequence[Fr]]]) -> None:
        if not polynomials:
            raise ValueError("at least one pair of polynomials is required")
        n = len(polynomials[0][0])
        if n == 0:
            raise ValueError("polynomials must not be empty")

        self.a_polynomials: List[List[Fr]] = []
        self.c_polynomials: List[List[Fr]] = []
        self.v_elements: List[Fr] = []
        self.t_polynomial: Optional[List[Fr]] = None
        self.n = n

        for p0, p1 in polynomials:
            if len(p0) != len(p1) or len(p0) != n:
                raise ValueError("all polynomials must have the same length")
            c_poly = _running_products(p0)
            v = c_poly[n - 1].inverse()
            c_poly.append(Fr.one())
            c_poly.extend(_running_products(p1))
            if c_poly[n - 1] != c_poly[2 * n]:
                raise ValueError("products of the coefficients differ")
            self.a_polynomials.append(list(p0) + [Fr.zero()] + list(p1))
            self.c_polynomials.append(c_poly)
            self.v_elements.append(v)

    @staticmethod
    def commit_for_grand_product(a: Sequence[Fr], b: Sequence[Fr], srs: SRS) -> Fr:
        """Commit to [a_1..a_n, 0, b_1..b_n]."""
        if len(a) != len(b):
            raise ValueError("a and b must have the same length")
        n = len(a)
        return multiexp(srs.g_positive_x_alpha[: 2 * n + 1], list(a) + [Fr.zero()] + list(b))

    @staticmethod
    def commit_for_individual_products(
        a: Sequence[Fr], b: Sequence[Fr], srs: SRS
    ) -> Tuple[Fr, Fr]:
        if len(a) != len(b):
            raise ValueError("a and b must have the same length")
        bases = srs.g_positive_x_alpha[: len(a)]
        return multiexp(bases, a), multiexp(bases, b)

    def open_commitments_for_grand_product(
        self, y: Fr, z: Fr, srs: SRS
    ) -> List[Tuple[Fr, Fr]]:
        """Evaluate each a' at yz and open its commitment there."""
        n = self.n
        yz = y * z
        results = []
        for a_poly in self.a_polynomials:
            a = a_poly[:n]
            b = a_poly[n + 1:]
            val = evaluate_at_consecutive_powers(a, yz, yz)
            val = val + evaluate_at_consecutive_powers(b, yz.pow(n + 2), yz)
            opening = polynomial_commitment_opening(
                0, 2 * n + 1, [-val] + a + [Fr.zero()] + b, yz, srs
            )
            results.append((val, opening))
        return results

    def commit_to_individual_c_polynomials(self, srs: SRS) -> List[Tuple[Fr, Fr]]:
        """Commitments to each c polynomial, paired with its v element."""
        length = len(self.c_polynomials[0])
        bases = srs.g_positive_x_alpha[:length]
        return [(multiexp(bases, c), v) for c, v in zip(self.c_polynomials, self.v_elements)]

    def commit_to_t_polynomial(self, challenges: Sequence[Fr], y: Fr, srs: SRS) -> Fr:
        """Build the combined t polynomial, keep it, and return its commitment."""
        if len(challenges) != len(self.a_polynomials):
            raise ValueError("one challenge per polynomial pair is required")
        n = self.n
        t_polynomial: Optional[List[Fr]] = None

        for a, c, v, challenge in zip(
            self.a_polynomials, self.c_polynomials, self.v_elements, challenges
        ):
            # p_a(X, Y) * Y plus v (XY)^{n+1} Y + X^{n+2} + X^{n+1} Y - X^{2n+2} Y
            a_xy = list(a)
            distribute_consecutive_powers(a_xy, y.square(), y)
            a_xy[n] = a_xy[n] + v * y.pow(n + 2) + y
            a_xy[n + 1] = a_xy[n + 1] + Fr.one()
            a_xy.append(-y)
            r = [Fr.zero()] * (2 * n + 3) + a_xy

            r_prime = list(reversed(c)) + [Fr.one(), Fr.zero()]

            t = multiply_polynomials(r, r_prime)
            if len(t) != 6 * n + 7:
                raise ArithmeticError("unexpected product length")
            for i, el in enumerate(t[: 2 * n + 3]):
                if not el.is_zero():
                    raise ArithmeticError(f"Element {i} is non-zero")
            t = t[2 * n + 3:]
            if not t.pop().is_zero():
                raise ArithmeticError("last element should be zero")

            val = evaluate_at_consecutive_powers(c, y.square(), y) + Fr.one()
            if t[2 * n + 1] != val:
                raise ArithmeticError("constant term of t does not match")
            t[2 * n + 1] = t[2 * n + 1] - val

            t_polynomial = _accumulate(t_polynomial, t, challenge)

        assert t_polynomial is not None
        bases = list(reversed(srs.g_negative_x_alpha[: 2 * n + 1]))
        bases.extend(srs.g_positive_x_alpha[: 2 * n + 1])
        commitment = multiexp(
            bases, t_polynomial[: 2 * n + 1] + t_polynomial[2 * n + 2:]
        )
        self.t_polynomial = t_polynomial
        return commitment

    def make_argument(
        self,
        a_zy: Sequence[Fr],
        challenges: Sequence[Fr],
        y: Fr,
        z: Fr,
        srs: SRS,
    ) -> GrandProductProof:
        if len(a_zy) != len(self.a_polynomials):
            raise ValueError("one evaluation per polynomial pair is required")
        if len(challenges) != len(self.a_polynomials):
            raise ValueError("one challenge per polynomial pair is required")
        if self.t_polynomial is None:
            raise ValueError("commit_to_t_polynomial must be called first")

        n = self.n
        z_inv = z.inverse()
        e_polynomial: Optional[List[Fr]] = None
        f_polynomial: Optional[List[Fr]] = None

        for a, c, challenge, v in zip(a_zy, self.c_polynomials, challenges, self.v_elements):
            rc = _c_at_zy(a, v, n, y, z, z_inv) * challenge
            ry = y * challenge
            e_polynomial = _accumulate(e_polynomial, c, rc)
            f_polynomial = _accumulate(f_polynomial, c, ry)

        assert e_polynomial is not None and f_polynomial is not None

        e_val = evaluate_at_consecutive_powers(e_polynomial, z_inv, z_inv)
        f_val = evaluate_at_consecutive_powers(f_polynomial, y, y)

        e_opening = polynomial_commitment_opening(
            0, 2 * n + 1, [-e_val] + e_polynomial, z_inv, srs
        )
        f_opening = polynomial_commitment_opening(
            0, 2 * n + 1, [-f_val] + f_polynomial, y, srs
        )

        t_poly = list(self.t_polynomial)
        if len(t_poly) != 4 * n + 3:
            raise ArithmeticError("t polynomial has an unexpected length")
        # The largest negative power of t is -(2n + 1).
        t_zy = evaluate_at_consecutive_powers(t_poly, z_inv.pow(2 * n + 1), z)
        t_poly[2 * n + 1] = t_poly[2 * n + 1] - t_zy
        t_opening = polynomial_commitment_opening(2 * n + 1, 2 * n + 1, t_poly, z, srs)

        return GrandProductProof(
            t_opening=t_opening,
            e_zinv=e_val,
            e_opening=e_opening,
            f_y=f_val,
            f_opening=f_opening,
        )

    @staticmethod
    def verify_ab_commitment(
        n: int,
        randomness: Sequence[Fr],
        a_commitments: Sequence[Fr],
        b_commitments: Sequence[Fr],
        openings: Sequence[Tuple[Fr, Fr]],
        y: Fr,
        z: Fr,
        srs: SRS,
    ) -> bool:
        if not (
            len(randomness) == len(a_commitments) == len(openings) == len(b_commitments)
        ):
            raise ValueError("randomness, commitments and openings must match in length")

        g = srs.g_positive_x[0]
        h_alpha_x = srs.h_positive_x_alpha[1]
        h_alpha = srs.h_positive_x_alpha[0]
        h_x_n_plus_one = -srs.h_positive_x[n]
        h_neg = -srs.h_positive_x[0]

        a = multiexp(a_commitments, randomness)
        b = multiexp(b_commitments, randomness)

        yz_neg = -(y * z)
        value = sum((v * r for (v, _), r in zip(openings, randomness)), Fr.zero())
        value_point = g * value

        combined_opening = multiexp([o for _, o in openings], randomness)
        opening_zy = combined_opening * yz_neg

        return srs.engine.pairing_check(
            [
                (combined_opening, h_alpha_x),
                (opening_zy, h_alpha),
                (a, h_neg),
                (b, h_x_n_plus_one),
                (value_point, h_alpha),
            ]
        )

    @staticmethod
    def verify(
        n: int,
        randomness: Sequence[Fr],
        a_zy: Sequence[Fr],
        challenges: Sequence[Fr],
        t_commitment: Fr,
        commitments: Sequence[Tuple[Fr, Fr]],
        proof: GrandProductProof,
        y: Fr,
        z: Fr,
        srs: SRS,
    ) -> bool:
        if len(randomness) != 3:
            raise ValueError("exactly three randomness values are required")
        if len(a_zy) != len(challenges) or len(commitments) != len(challenges):
            raise ValueError("evaluations, challenges and commitments must match in length")

        g = srs.g_positive_x[0]
        h_alpha_x = srs.h_positive_x_alpha[1]
        h_alpha = srs.h_positive_x_alpha[0]
        h_neg = -srs.h_positive_x[0]

        z_inv = z.inverse()
        t_zy = proof.e_zinv - proof.f_y

        points = []
        rc_values = []
        ry_values = []
        for r, (c, v), a in zip(challenges, commitments, a_zy):
            points.append(c)
            rc = _c_at_zy(a, v, n, y, z, z_inv) * r
            rc_values.append(rc)
            ry_values.append(y * r)
            t_zy = t_zy + (rc - r)

        c_rc = multiexp(points, rc_values)
        c_ry = multiexp(points, ry_values)

        f_y = proof.f_opening * (-y) + g * proof.f_y
        t_z = proof.t_opening * (-z) + g * t_zy
        e_z_inv = proof.e_opening * (-z_inv) + g * proof.e_zinv

        h_alpha_term = multiexp([e_z_inv, f_y, t_z], randomness)
        h_alpha_x_term = multiexp(
            [proof.e_opening, proof.f_opening, proof.t_opening], randomness
        )
        h_term = multiexp([c_rc, c_ry, t_commitment], randomness)

        return srs.engine.pairing_check(
            [
                (h_alpha_x_term, h_alpha_x),
                (h_alpha_term, h_alpha),
                (h_term, h_neg),
            ]
        )