"""Argument that committed polynomials have degree below n, no constant term
and no negative powers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .field import Fr
from .srs import SRS
from .util import mul_add_polynomials, multiexp


@dataclass(frozen=True)
class WellformednessProof:
    l: Fr
    r: Fr


@dataclass
class WellformednessArgument:
    """Holds polynomials of a common length to be proven well formed."""

    polynomials: List[List[Fr]]

    def __post_init__(self) -> None:
        if not self.polynomials:
            raise ValueError("at least one polynomial is required")
        length = len(self.polynomials[0])
        if any(len(p) != length for p in self.polynomials):
            raise ValueError("all polynomials must have the same length")

    def commit(self, srs: SRS) -> List[Fr]:
        n = len(self.polynomials[0])
        bases = srs.g_positive_x_alpha[:n]
        return [multiexp(bases, p) for p in self.polynomials]

    def make_argument(self, challenges: Sequence[Fr], srs: SRS) -> WellformednessProof:
        if len(challenges) != len(self.polynomials):
            raise ValueError("one challenge per polynomial is required")
        n = len(self.polynomials[0])
        combined = [Fr.zero()] * n
        for p, r in zip(reversed(self.polynomials), reversed(list(challenges))):
            mul_add_polynomials(combined, p, r)

        d = srs.d
        if n >= d:
            raise ValueError("polynomial length must be smaller than the SRS degree")

        # Multiplier x^-d: powers run from -(d - 1) down to -(d - n).
        l = multiexp(reversed(srs.g_negative_x[d - n:d]), combined)
        # Multiplier x^(d - n): powers run from d down to d - n + 1.
        r = multiexp(reversed(srs.g_positive_x[d - n + 1:]), combined)
        return WellformednessProof(l=l, r=r)

    @staticmethod
    def verify(
        n: int,
        challenges: Sequence[Fr],
        commitments: Sequence[Fr],
        proof: WellformednessProof,
        srs: SRS,
    ) -> bool:
        d = srs.d
        if n > d:
            raise ValueError("n must not exceed the SRS degree")
        alpha_x_d = srs.h_positive_x_alpha[d]
        alpha_x_n_minus_d = srs.h_negative_x_alpha[d - n]
        h_neg = -srs.h_positive_x[0]

        a = multiexp(commitments, challenges)

        if not srs.engine.pairing_check([(a, h_neg), (proof.l, alpha_x_d)]):
            return False
        return srs.engine.pairing_check([(a, h_neg), (proof.r, alpha_x_n_minus_d)])