import random

import pytest

from sonicproofs.field import Fr
from sonicproofs.srs import SRS
from sonicproofs.wellformed import WellformednessArgument, WellformednessProof


@pytest.fixture(scope="module")
def srs():
    return SRS.dummy(830564, Fr.from_int(23923), Fr.from_int(23728792))


def _random_fr(rng):
    return Fr.from_int(rng.randrange(Fr.MODULUS))


def _challenge(rng):
    return Fr.from_int(rng.randrange(1, Fr.MODULUS))


def test_argument(srs):
    rng = random.Random(0x3DBE6259)
    n = 1 << 16
    coeffs = [_random_fr(rng) for _ in range(n)]
    argument = WellformednessArgument([coeffs])
    challenges = [_challenge(rng)]
    commitments = argument.commit(srs)
    proof = argument.make_argument(challenges, srs)
    assert WellformednessArgument.verify(n, challenges, commitments, proof, srs)


def test_argument_soundness(srs):
    rng = random.Random(0x8D313D76)
    n = 1 << 8
    coeffs = [_random_fr(rng) for _ in range(n)]
    commitments = WellformednessArgument([coeffs]).commit(srs)

    other = [_random_fr(rng) for _ in range(n)]
    argument = WellformednessArgument([other])
    challenges = [_challenge(rng)]
    proof = argument.make_argument(challenges, srs)
    assert not WellformednessArgument.verify(n, challenges, commitments, proof, srs)


def test_multiple_polynomials_verify(srs):
    rng = random.Random(7)
    n = 16
    polys = [[_random_fr(rng) for _ in range(n)] for _ in range(3)]
    argument = WellformednessArgument(polys)
    challenges = [_challenge(rng) for _ in range(3)]
    commitments = argument.commit(srs)
    assert len(commitments) == 3
    proof = argument.make_argument(challenges, srs)
    assert WellformednessArgument.verify(n, challenges, commitments, proof, srs)
    assert argument.polynomials == polys


def test_tampered_proof_rejected(srs):
    rng = random.Random(11)
    n = 8
    argument = WellformednessArgument([[_random_fr(rng) for _ in range(n)]])
    challenges = [_challenge(rng)]
    commitments = argument.commit(srs)
    proof = argument.make_argument(challenges, srs)
    bad = WellformednessProof(l=proof.l + Fr.one(), r=proof.r)
    assert not WellformednessArgument.verify(n, challenges, commitments, bad, srs)


def test_zero_polynomial_commits_to_zero(srs):
    commitments = WellformednessArgument([[Fr.zero()] * 4]).commit(srs)
    assert commitments == [Fr.zero()]


def test_empty_polynomial_list_rejected():
    with pytest.raises(ValueError):
        WellformednessArgument([])


def test_unequal_lengths_rejected():
    with pytest.raises(ValueError):
        WellformednessArgument([[Fr.one()], [Fr.one(), Fr.one()]])


def test_challenge_count_mismatch(srs):
    argument = WellformednessArgument([[Fr.one()] * 4])
    with pytest.raises(ValueError):
        argument.make_argument([Fr.one(), Fr.one()], srs)


def test_length_must_be_below_degree():
    small = SRS.dummy(4, Fr.one(), Fr.one())
    argument = WellformednessArgument([[Fr.one()] * 4])
    with pytest.raises(ValueError):
        argument.make_argument([Fr.one()], small)