"""Sources of curve bases and density trackers for queries."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .field import Fr


class SynthesisError(Exception):
    """Raised when a computation over bases or assignments cannot proceed."""


class UnexpectedIdentityError(SynthesisError):
    """Raised when a base turns out to be the point at infinity."""


class AssignmentMissingError(SynthesisError):
    """Raised when a required assignment is absent."""


@dataclass
class BaseSource:
    """Reads bases one after another from a shared sequence."""

    bases: Sequence[Fr]
    position: int = 0

    def add_assign_mixed(self, acc: Fr) -> Fr:
        """Return acc plus the next base and advance past it."""
        if self.position >= len(self.bases):
            raise SynthesisError("expected more bases when adding from source")
        base = self.bases[self.position]
        if base.is_zero():
            raise UnexpectedIdentityError("base is the point at infinity")
        self.position += 1
        return acc + base

    def skip(self, amount: int) -> None:
        if self.position >= len(self.bases):
            raise SynthesisError("expected more bases skipping from source")
        self.position += amount


class FullDensity:
    """A query in which every base is present."""

    def __iter__(self) -> Iterator[bool]:
        return itertools.repeat(True)

    def query_size(self) -> Optional[int]:
        return None


@dataclass
class DensityTracker:
    """Tracks which bases of a query are used."""

    _bits: List[bool] = field(default_factory=list)
    _total: int = 0

    def add_element(self) -> None:
        self._bits.append(False)

    def inc(self, index: int) -> None:
        if not 0 <= index < len(self._bits):
            raise IndexError(f"no element at index {index}")
        if not self._bits[index]:
            self._bits[index] = True
            self._total += 1

    def total_density(self) -> int:
        return self._total

    def __iter__(self) -> Iterator[bool]:
        return iter(self._bits)

    def __len__(self) -> int:
        return len(self._bits)

    def query_size(self) -> Optional[int]:
        return len(self._bits)