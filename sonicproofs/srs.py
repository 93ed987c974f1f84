"""Structured reference string: powers of a secret in both source groups."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field as dc_field
from typing import BinaryIO, Iterator, List, Optional, Tuple

from .field import DummyEngine, FieldDecodingError, Fr

# Field name and how many more points than d it holds, in wire order.
_LAYOUT: Tuple[Tuple[str, int], ...] = (
    ("g_negative_x", 1),
    ("g_positive_x", 1),
    ("h_negative_x", 1),
    ("h_positive_x", 1),
    ("g_negative_x_alpha", 0),
    ("g_positive_x_alpha", 0),
    ("h_negative_x_alpha", 1),
    ("h_positive_x_alpha", 1),
)


def _table(start: Fr, step: Fr, count: int, generator: Fr) -> List[Fr]:
    points = []
    current = start
    for _ in range(count):
        points.append(generator * current)
        current = current * step
    return points


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


@dataclass
class SRS:
    """Powers x^i and x^-i of a secret, optionally scaled by alpha."""

    d: int
    g_negative_x: List[Fr]
    g_positive_x: List[Fr]
    h_negative_x: List[Fr]
    h_positive_x: List[Fr]
    g_negative_x_alpha: List[Fr]
    g_positive_x_alpha: List[Fr]
    h_negative_x_alpha: List[Fr]
    h_positive_x_alpha: List[Fr]
    engine: DummyEngine = dc_field(default_factory=DummyEngine, compare=False, repr=False)

    @classmethod
    def dummy(cls, d: int, x: Fr, alpha: Fr, engine: Optional[DummyEngine] = None) -> SRS:
        """An SRS of the right shape filled with generators only."""
        engine = engine or DummyEngine()
        g1 = engine.g1_generator
        g2 = engine.g2_generator
        return cls(
            d=d,
            g_negative_x=[g1] * (d + 1),
            g_positive_x=[g1] * (d + 1),
            h_negative_x=[g2] * (d + 1),
            h_positive_x=[g2] * (d + 1),
            g_negative_x_alpha=[g1] * d,
            g_positive_x_alpha=[g1] * d,
            h_negative_x_alpha=[g2] * (d + 1),
            h_positive_x_alpha=[g2] * (d + 1),
            engine=engine,
        )

    @classmethod
    def generate(cls, d: int, x: Fr, alpha: Fr, engine: Optional[DummyEngine] = None) -> SRS:
        """Build the SRS for secret x and alpha; x must be non-zero."""
        engine = engine or DummyEngine()
        g1 = engine.g1_generator
        g2 = engine.g2_generator
        one = Fr.one()
        x_inv = x.inverse()
        x_alpha = x * alpha
        inv_x_alpha = x_inv * alpha
        return cls(
            d=d,
            g_negative_x=_table(one, x_inv, d + 1, g1),
            g_positive_x=_table(one, x, d + 1, g1),
            h_negative_x=_table(one, x_inv, d + 1, g2),
            h_positive_x=_table(one, x, d + 1, g2),
            g_negative_x_alpha=_table(inv_x_alpha, x_inv, d, g1),
            g_positive_x_alpha=_table(x_alpha, x, d, g1),
            h_negative_x_alpha=_table(alpha, x_inv, d + 1, g2),
            h_positive_x_alpha=_table(alpha, x, d + 1, g2),
            engine=engine,
        )

    def _groups(self) -> Iterator[Tuple[str, List[Fr], int]]:
        for name, extra in _LAYOUT:
            yield name, getattr(self, name), self.d + extra

    def write(self, stream: BinaryIO) -> None:
        """Write d as a big-endian u32 followed by every point in order."""
        for name, points, expected in self._groups():
            if len(points) != expected:
                raise ValueError(f"{name} holds {len(points)} points, expected {expected}")
        if not 0 <= self.d <= 0xFFFFFFFF:
            raise ValueError("d does not fit in 32 bits")
        stream.write(struct.pack(">I", self.d))
        for _, points, _ in self._groups():
            for point in points:
                stream.write(point.to_bytes())

    @classmethod
    def read(
        cls,
        stream: BinaryIO,
        checked: bool = True,
        engine: Optional[DummyEngine] = None,
    ) -> SRS:
        """Read an SRS written by write; points at infinity are rejected."""
        engine = engine or DummyEngine()
        (d,) = struct.unpack(">I", _read_exact(stream, 4))

        def read_point() -> Fr:
            data = _read_exact(stream, Fr.REPR_BYTES)
            if checked:
                try:
                    point = Fr.from_bytes(data)
                except FieldDecodingError as exc:
                    raise ValueError(f"invalid point encoding: {exc}") from exc
            else:
                point = Fr.from_int(int.from_bytes(data, "big"))
            if point.is_zero():
                raise ValueError("point at infinity")
            return point

        groups = {
            name: [read_point() for _ in range(d + extra)] for name, extra in _LAYOUT
        }
        return cls(d=d, engine=engine, **groups)