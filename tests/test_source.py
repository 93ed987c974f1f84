import itertools

import pytest

from sonicproofs.field import Fr
from sonicproofs.source import (
    BaseSource,
    DensityTracker,
    FullDensity,
    SynthesisError,
    UnexpectedIdentityError,
)


def test_add_assign_mixed_accumulates():
    bases = [Fr(3), Fr(5), Fr(7)]
    source = BaseSource(bases)
    acc = Fr.zero()
    for _ in bases:
        acc = source.add_assign_mixed(acc)
    assert acc == Fr(3) + Fr(5) + Fr(7)
    assert source.position == 3


def test_add_past_end_raises():
    source = BaseSource([Fr(3)])
    source.add_assign_mixed(Fr.zero())
    with pytest.raises(SynthesisError):
        source.add_assign_mixed(Fr.zero())


def test_identity_base_raises():
    source = BaseSource([Fr.zero(), Fr(2)])
    with pytest.raises(UnexpectedIdentityError):
        source.add_assign_mixed(Fr.one())
    assert source.position == 0


def test_identity_error_is_caught_as_synthesis_error():
    source = BaseSource([Fr.zero()])
    with pytest.raises(SynthesisError):
        source.add_assign_mixed(Fr.one())


def test_skip_moves_position():
    source = BaseSource([Fr(1), Fr(2), Fr(4)])
    source.skip(2)
    assert source.add_assign_mixed(Fr.zero()) == Fr(4)


def test_skip_at_end_raises():
    source = BaseSource([Fr(1)])
    source.skip(1)
    with pytest.raises(SynthesisError):
        source.skip(1)


def test_full_density():
    density = FullDensity()
    assert list(itertools.islice(density, 5)) == [True] * 5
    assert density.query_size() is None


def test_density_tracker():
    tracker = DensityTracker()
    for _ in range(3):
        tracker.add_element()
    tracker.inc(1)
    tracker.inc(1)
    assert tracker.total_density() == 1
    assert list(tracker) == [False, True, False]
    assert tracker.query_size() == 3
    tracker.inc(0)
    assert tracker.total_density() == 2


def test_density_tracker_out_of_range():
    tracker = DensityTracker()
    tracker.add_element()
    with pytest.raises(IndexError):
        tracker.inc(1)