"""Provable evaluation of s2(X, Y) = sum_{i=1}^{n} (Y^-i + Y^i) X^i."""

from __future__ import annotations

from dataclasses import dataclass

from .field import Fr
from .srs import SRS
from .util import evaluate_at_consecutive_powers, polynomial_commitment_opening


@dataclass(frozen=True)
class S2Proof:
    o: Fr
    c_value: Fr
    d_value: Fr
    c_opening: Fr
    d_opening: Fr


@dataclass(frozen=True)
class S2Eval:
    """Evaluator of s2 for a circuit of size n."""

    n: int

    @staticmethod
    def calculate_commitment_element(n: int, srs: SRS) -> Fr:
        """Commitment to the all-ones polynomial of n terms."""
        return sum(srs.g_positive_x_alpha[:n], Fr.zero())

    def _open(self, point: Fr, srs: SRS) -> tuple:
        ones = [Fr.one()] * self.n
        value = evaluate_at_consecutive_powers(ones, Fr.one(), point)
        poly = [-value] + ones
        opening = polynomial_commitment_opening(0, self.n, poly, point, srs)
        return value, opening

    def evaluate(self, x: Fr, y: Fr, srs: SRS) -> S2Proof:
        o = self.calculate_commitment_element(self.n, srs)
        c_value, c_opening = self._open(y * x, srs)
        d_value, d_opening = self._open(y.inverse() * x, srs)
        return S2Proof(
            o=o,
            c_value=c_value,
            d_value=d_value,
            c_opening=c_opening,
            d_opening=d_opening,
        )

    @staticmethod
    def verify(x: Fr, y: Fr, proof: S2Proof, srs: SRS) -> bool:
        alpha_x = srs.h_positive_x_alpha[1]
        alpha = srs.h_positive_x_alpha[0]
        h_neg = -srs.h_positive_x[0]
        engine = srs.engine

        c_minus_xy = proof.c_value - x * y
        c_term = proof.c_opening * c_minus_xy
        if not engine.pairing_check(
            [(proof.c_opening, alpha_x), (c_term, alpha), (proof.o, h_neg)]
        ):
            return False

        d_minus_x_y_inv = proof.d_value - x * y.inverse()
        d_term = proof.d_opening * d_minus_x_y_inv
        return engine.pairing_check(
            [(proof.d_opening, alpha_x), (d_term, alpha), (proof.o, h_neg)]
        )