"""Permutation argument.

Proves that a commitment to a vector A commits to values of the form
s_{perm(i)} * y^{perm(i)} for some fixed permutation perm of the
coefficients s.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .field import Fr
from .grand_product import GrandProductArgument
from .srs import SRS
from .util import (
    add_polynomials,
    distribute_consecutive_powers,
    evaluate_at_consecutive_powers,
    mul_add_polynomials,
    mul_polynomial_by_scalar,
    multiexp,
    polynomial_commitment_opening,
)
from .wellformed import WellformednessArgument

_RANDOMNESS_SEED = 0x3DBE62598D313D763237DB17E5BC0654


def permute(coeffs: Sequence[Fr], permutation: Sequence[int]) -> List[Fr]:
    """Place coeffs[i] at position permutation[i] (positions count from 1)."""
    if len(coeffs) != len(permutation):
        raise ValueError("coefficients and permutation must have the same length")
    size = len(coeffs)
    result = [Fr.zero()] * size
    for coeff, position in zip(coeffs, permutation):
        if not 1 <= position <= size:
            raise ValueError(f"permutation entry {position} is out of range")
        result[position - 1] = coeff
    return result


def _as_field_elements(values: Sequence[int]) -> List[Fr]:
    return [Fr.from_repr(value) for value in values]


def _combine(polynomials: Sequence[Sequence[Fr]], scalars: Sequence[Fr]) -> Optional[List[Fr]]:
    combined: Optional[List[Fr]] = None
    for poly, scalar in zip(polynomials, scalars):
        if combined is None:
            combined = list(poly)
            mul_polynomial_by_scalar(combined, scalar)
        else:
            mul_add_polynomials(combined, poly, scalar)
    return combined


def _random_scalars(rng: random.Random, count: int) -> List[Fr]:
    return [Fr(rng.randrange(Fr.MODULUS)) for _ in range(count)]


@dataclass(frozen=True)
class SpecializedSRS:
    p_1: Fr
    p_2: List[Fr]
    p_3: Fr
    p_4: List[Fr]
    n: int


@dataclass(frozen=True)
class PermutationProof:
    v_zy: Fr
    e_opening: Fr
    f_opening: Fr


@dataclass(frozen=True)
class Proof:
    j: int
    s_opening: Fr
    s_zy: Fr


class PermutationArgument:
    """Prover state for a batch of coefficient vectors and their permutations."""

    def __init__(
        self,
        coefficients: Sequence[Sequence[Fr]],
        permutations: Sequence[Sequence[int]],
    ) -> None:
        if not coefficients:
            raise ValueError("at least one coefficient vector is required")
        if len(coefficients) != len(permutations):
            raise ValueError("one permutation per coefficient vector is required")
        n = len(coefficients[0])
        for c, p in zip(coefficients, permutations):
            if len(c) != len(p) or len(c) != n:
                raise ValueError("all coefficient vectors and permutations must have length n")

        self.non_permuted_coefficients: List[List[Fr]] = [list(c) for c in coefficients]
        self.permuted_coefficients: List[List[Fr]] = []
        self.permuted_at_y_coefficients: List[List[Fr]] = []
        self.permutations: List[List[int]] = [list(p) for p in permutations]
        self.n = n

    @staticmethod
    def make_specialized_srs(
        non_permuted_coefficients: Sequence[Sequence[Fr]],
        permutations: Sequence[Sequence[int]],
        srs: SRS,
    ) -> SpecializedSRS:
        if not non_permuted_coefficients:
            raise ValueError("at least one coefficient vector is required")
        if len(non_permuted_coefficients) != len(permutations):
            raise ValueError("one permutation per coefficient vector is required")

        n = len(non_permuted_coefficients[0])
        bases = srs.g_positive_x_alpha[:n]

        # p_1 commits to the powers of x alone.
        p_1 = multiexp(bases, [Fr.one()] * n)
        p_3 = multiexp(bases, _as_field_elements(range(1, n + 1)))

        p_2 = []
        p_4 = []
        for c, p in zip(non_permuted_coefficients, permutations):
            if len(c) != len(p) or len(c) != n:
                raise ValueError("all coefficient vectors and permutations must have length n")
            p_2.append(multiexp(bases, c))
            p_4.append(multiexp(bases, _as_field_elements(p)))

        return SpecializedSRS(p_1=p_1, p_2=p_2, p_3=p_3, p_4=p_4, n=n)

    def commit(self, y: Fr, srs: SRS) -> List[Tuple[Fr, Fr]]:
        """Commit to s and s' at y; returns (s, s') per vector and keeps the state."""
        n = len(self.non_permuted_coefficients[0])
        bases = srs.g_positive_x_alpha[:n]

        result = []
        permuted_coefficients = []
        permuted_at_y_coefficients = []

        for c, p in zip(self.non_permuted_coefficients, self.permutations):
            non_permuted = list(c)
            permuted = permute(non_permuted, p)

            distribute_consecutive_powers(non_permuted, y, y)
            s_prime = multiexp(bases, non_permuted)

            permuted_at_y = permute(non_permuted, p)
            s = multiexp(bases, permuted_at_y)

            result.append((s, s_prime))
            permuted_coefficients.append(permuted)
            permuted_at_y_coefficients.append(permuted_at_y)

        self.permuted_coefficients = permuted_coefficients
        self.permuted_at_y_coefficients = permuted_at_y_coefficients
        return result

    def open_commitments_to_s_prime(
        self,
        challenges: Sequence[Fr],
        y: Fr,
        z_prime: Fr,
        srs: SRS,
    ) -> PermutationProof:
        n = len(self.non_permuted_coefficients[0])
        yz = y * z_prime

        polynomial = _combine(self.non_permuted_coefficients, challenges)
        if polynomial is None:
            raise ValueError("at least one challenge is required")

        v = evaluate_at_consecutive_powers(polynomial, yz, yz)
        f = polynomial_commitment_opening(0, n, [-v] + polynomial, yz, srs)

        distribute_consecutive_powers(polynomial, y, y)
        e = polynomial_commitment_opening(0, n, [-v] + polynomial, z_prime, srs)

        return PermutationProof(v_zy=v, e_opening=e, f_opening=f)

    def make_argument(
        self,
        beta: Fr,
        gamma: Fr,
        grand_product_challenges: Sequence[Fr],
        wellformed_challenges: Sequence[Fr],
        y: Fr,
        z: Fr,
        specialized_srs: SpecializedSRS,
        srs: SRS,
    ) -> Proof:
        """Open s = sum of the permuted-at-y vectors at z and check the
        grand product and wellformedness sub-arguments along the way."""
        n = self.n
        j = len(self.non_permuted_coefficients)
        if len(grand_product_challenges) != j:
            raise ValueError("one grand product challenge per vector is required")
        if len(wellformed_challenges) != 2 * j:
            raise ValueError("two wellformedness challenges per vector are required")
        if len(self.permuted_at_y_coefficients) != j:
            raise ValueError("commit must be called first")

        s_polynomial = list(self.permuted_at_y_coefficients[0])
        for c in self.permuted_at_y_coefficients[1:]:
            add_polynomials(s_polynomial, c)

        s_zy = evaluate_at_consecutive_powers(s_polynomial, z, z)
        s_zy_opening = polynomial_commitment_opening(0, n, [-s_zy] + s_polynomial, z, srs)

        # prod (s_i + beta sigma_i + gamma) equals prod (s'_i + beta i + gamma)
        p_1_values = [Fr.one()] * n
        p_3_values = _as_field_elements(range(1, n + 1))

        grand_products = []
        for non_permuted, permuted, permutation in zip(
            self.non_permuted_coefficients, self.permuted_coefficients, self.permutations
        ):
            s_j_combination = list(non_permuted)
            mul_add_polynomials(s_j_combination, _as_field_elements(permutation), beta)
            mul_add_polynomials(s_j_combination, p_1_values, gamma)

            s_prime_j_combination = list(permuted)
            mul_add_polynomials(s_prime_j_combination, p_3_values, beta)
            mul_add_polynomials(s_prime_j_combination, p_1_values, gamma)

            grand_products.append((s_j_combination, s_prime_j_combination))

        a_commitments = []
        b_commitments = []
        for a, b in grand_products:
            c_a, c_b = GrandProductArgument.commit_for_individual_products(a, b, srs)
            a_commitments.append(c_a)
            b_commitments.append(c_b)

        all_polys = [poly for pair in grand_products for poly in pair]
        wellformed_argument = WellformednessArgument([list(p) for p in all_polys])
        wf_commitments = wellformed_argument.commit(srs)
        wf_proof = wellformed_argument.make_argument(list(wellformed_challenges), srs)
        if not WellformednessArgument.verify(
            n, wellformed_challenges, wf_commitments, wf_proof, srs
        ):
            raise ArithmeticError("wellformedness argument must be valid")

        grand_product_argument = GrandProductArgument(grand_products)
        c_commitments = grand_product_argument.commit_to_individual_c_polynomials(srs)
        t_commitment = grand_product_argument.commit_to_t_polynomial(
            grand_product_challenges, y, srs
        )
        openings = grand_product_argument.open_commitments_for_grand_product(y, z, srs)
        a_zy = [value for value, _ in openings]
        gp_proof = grand_product_argument.make_argument(
            a_zy, grand_product_challenges, y, z, srs
        )

        rng = random.Random(_RANDOMNESS_SEED)
        randomness = _random_scalars(rng, j)
        if not GrandProductArgument.verify_ab_commitment(
            n, randomness, a_commitments, b_commitments, openings, y, z, srs
        ):
            raise ArithmeticError("ab part of grand product argument must be valid")

        randomness = _random_scalars(rng, 3)
        if not GrandProductArgument.verify(
            n,
            randomness,
            a_zy,
            grand_product_challenges,
            t_commitment,
            c_commitments,
            gp_proof,
            y,
            z,
            srs,
        ):
            raise ArithmeticError("grand product argument must be valid")

        return Proof(j=j, s_opening=s_zy_opening, s_zy=s_zy)

    @staticmethod
    def verify_s_prime_commitment(
        n: int,
        randomness: Sequence[Fr],
        challenges: Sequence[Fr],
        commitments: Sequence[Fr],
        proof: PermutationProof,
        y: Fr,
        z_prime: Fr,
        specialized_srs: SpecializedSRS,
        srs: SRS,
    ) -> bool:
        if len(randomness) != 2:
            raise ValueError("exactly two randomness values are required")
        if len(challenges) != len(commitments):
            raise ValueError("one challenge per commitment is required")

        g = srs.g_positive_x[0]
        h_alpha_x = srs.h_positive_x_alpha[1]
        h_alpha = srs.h_positive_x_alpha[0]
        h_neg = -srs.h_positive_x[0]

        value = sum(randomness, Fr.zero()) * proof.v_zy

        minus_yz = -(z_prime * y)
        minus_z_prime = -z_prime

        f_yz = proof.f_opening * minus_yz
        e_z = proof.e_opening * minus_z_prime

        h_alpha_term = multiexp([e_z, f_yz], randomness) + g * value
        h_alpha_x_term = multiexp([proof.e_opening, proof.f_opening], randomness)

        s_r = multiexp(commitments, challenges)
        p2_r = multiexp(specialized_srs.p_2, challenges)
        h_term = multiexp([s_r, p2_r], randomness)

        return srs.engine.pairing_check(
            [
                (h_alpha_x_term, h_alpha_x),
                (h_alpha_term, h_alpha),
                (h_term, h_neg),
            ]
        )

    @staticmethod
    def verify(s_commitments: Sequence[Fr], proof: Proof, z: Fr, srs: SRS) -> bool:
        g = srs.g_positive_x[0]
        h_alpha_x = srs.h_positive_x_alpha[1]
        h_alpha = srs.h_positive_x_alpha[0]
        h_neg = -srs.h_positive_x[0]

        h_alpha_term = proof.s_opening * (-z) + g * proof.s_zy
        h_alpha_x_term = proof.s_opening
        h_term = sum(s_commitments, Fr.zero())

        return srs.engine.pairing_check(
            [
                (h_alpha_x_term, h_alpha_x),
                (h_alpha_term, h_alpha),
                (h_term, h_neg),
            ]
        )