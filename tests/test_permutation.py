import dataclasses

import pytest
from hypothesis import given, strategies as st

from sonicproofs.field import Fr
from sonicproofs.permutation import (
    PermutationArgument,
    PermutationProof,
    Proof,
    SpecializedSRS,
    permute,
)
from sonicproofs.srs import SRS


def _dummy_srs(d=32):
    return SRS.dummy(d, Fr(23923 % Fr.MODULUS), Fr(23728792 % Fr.MODULUS))


def _setup():
    srs = _dummy_srs()
    coeffs = [[Fr(3), Fr(4)]]
    permutations = [[2, 1]]
    specialized = PermutationArgument.make_specialized_srs(coeffs, permutations, srs)
    argument = PermutationArgument(coeffs, permutations)
    return srs, specialized, argument


def test_permute_swaps_pair():
    assert permute([Fr(3), Fr(4)], [2, 1]) == [Fr(4), Fr(3)]


def test_permute_three_cycle():
    a, b, c = Fr(10), Fr(20), Fr(30)
    assert permute([a, b, c], [3, 1, 2]) == [b, c, a]


def test_permute_length_mismatch():
    with pytest.raises(ValueError):
        permute([Fr(1), Fr(2)], [1])


def test_permute_out_of_range():
    with pytest.raises(ValueError):
        permute([Fr(1), Fr(2)], [0, 1])


@given(st.permutations(list(range(1, 7))), st.lists(st.integers(0, Fr.MODULUS - 1), min_size=6, max_size=6))
def test_permute_inverse_restores(permutation, values):
    coeffs = [Fr(v) for v in values]
    inverse = [0] * len(permutation)
    for i, p in enumerate(permutation):
        inverse[p - 1] = i + 1
    assert permute(permute(coeffs, permutation), inverse) == coeffs


def test_constructor_rejects_empty():
    with pytest.raises(ValueError):
        PermutationArgument([], [])


def test_constructor_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        PermutationArgument([[Fr(1), Fr(2)]], [[1]])


def test_specialized_srs_on_dummy():
    srs, specialized, _ = _setup()
    assert specialized == SpecializedSRS(p_1=Fr(2), p_2=[Fr(7)], p_3=Fr(3), p_4=[Fr(3)], n=2)


def test_commit_values_with_generated_srs():
    srs = SRS.generate(8, Fr(3), Fr(5))
    argument = PermutationArgument([[Fr(3), Fr(4)]], [[2, 1]])
    result = argument.commit(Fr(2), srs)
    # s' = 6*(15) + 16*(45), s = 16*(15) + 6*(45)
    assert result == [(Fr(510), Fr(810))]
    assert argument.permuted_coefficients == [[Fr(4), Fr(3)]]
    assert argument.permuted_at_y_coefficients == [[Fr(16), Fr(6)]]


def test_full_argument_is_valid():
    srs, specialized, argument = _setup()
    y = Fr(2)
    challenges = [Fr.one()]
    commitments = argument.commit(y, srs)
    s_commitments = [s for s, _ in commitments]
    s_prime_commitments = [sp for _, sp in commitments]

    z_prime = Fr.one()
    opening = argument.open_commitments_to_s_prime(challenges, y, z_prime, srs)
    randomness = [Fr(11), Fr(13)]
    assert PermutationArgument.verify_s_prime_commitment(
        2, randomness, challenges, s_prime_commitments, opening, y, z_prime, specialized, srs
    )

    proof = argument.make_argument(
        Fr(5), Fr(7), [Fr(3)], [Fr(17), Fr(19)], y, Fr(9), specialized, srs
    )
    assert proof.j == 1
    assert PermutationArgument.verify(s_commitments, proof, Fr(9), srs)


def test_tampered_s_zy_fails():
    srs, specialized, argument = _setup()
    commitments = argument.commit(Fr(2), srs)
    s_commitments = [s for s, _ in commitments]
    proof = argument.make_argument(
        Fr(5), Fr(7), [Fr(3)], [Fr(17), Fr(19)], Fr(2), Fr(9), specialized, srs
    )
    bad = dataclasses.replace(proof, s_zy=proof.s_zy + Fr.one())
    assert isinstance(bad, Proof)
    assert PermutationArgument.verify(s_commitments, bad, Fr(9), srs) is False


def test_tampered_s_prime_opening_fails():
    srs, specialized, argument = _setup()
    y = Fr(2)
    commitments = argument.commit(y, srs)
    s_prime_commitments = [sp for _, sp in commitments]
    opening = argument.open_commitments_to_s_prime([Fr.one()], y, Fr.one(), srs)
    bad = dataclasses.replace(opening, v_zy=opening.v_zy + Fr.one())
    assert isinstance(bad, PermutationProof)
    assert (
        PermutationArgument.verify_s_prime_commitment(
            2, [Fr(11), Fr(13)], [Fr.one()], s_prime_commitments, bad, y, Fr.one(), specialized, srs
        )
        is False
    )


def test_make_argument_requires_commit():
    srs, specialized, argument = _setup()
    with pytest.raises(ValueError):
        argument.make_argument(
            Fr(5), Fr(7), [Fr(3)], [Fr(17), Fr(19)], Fr(2), Fr(9), specialized, srs
        )


def test_make_argument_challenge_counts():
    srs, specialized, argument = _setup()
    argument.commit(Fr(2), srs)
    with pytest.raises(ValueError):
        argument.make_argument(
            Fr(5), Fr(7), [Fr(3)], [Fr(17)], Fr(2), Fr(9), specialized, srs
        )


def test_verify_s_prime_requires_two_randomness_values():
    srs, specialized, argument = _setup()
    y = Fr(2)
    commitments = argument.commit(y, srs)
    opening = argument.open_commitments_to_s_prime([Fr.one()], y, Fr.one(), srs)
    with pytest.raises(ValueError):
        PermutationArgument.verify_s_prime_commitment(
            2, [Fr(11)], [Fr.one()], [sp for _, sp in commitments], opening, y, Fr.one(), specialized, srs
        )


def test_open_requires_challenges():
    srs, _, argument = _setup()
    argument.commit(Fr(2), srs)
    with pytest.raises(ValueError):
        argument.open_commitments_to_s_prime([], Fr(2), Fr.one(), srs)