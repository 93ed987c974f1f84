"""Prime field arithmetic and a small pairing engine built on top of it.

The scalar field has a 16-bit prime modulus with a large power-of-two
subgroup. The pairing engine uses the same field for both source groups, so
group elements are field elements, and scalar multiplication is field
multiplication.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Tuple

MODULUS = 64513
NUM_BITS = 16
CAPACITY = 15
S = 10
REPR_BYTES = 8

_ROOT_OF_UNITY = 57751
_MULTIPLICATIVE_GENERATOR = 5


class FieldDecodingError(ValueError):
    """Raised when a representation does not encode an element of the field."""


class LegendreSymbol(enum.Enum):
    """Quadratic character of a field element."""

    ZERO = 0
    QUADRATIC_RESIDUE = 1
    QUADRATIC_NON_RESIDUE = -1


@dataclass(frozen=True, slots=True)
class Fr:
    """An element of the prime field, kept in canonical form."""

    value: int

    MODULUS: ClassVar[int] = MODULUS
    NUM_BITS: ClassVar[int] = NUM_BITS
    CAPACITY: ClassVar[int] = CAPACITY
    S: ClassVar[int] = S
    REPR_BYTES: ClassVar[int] = REPR_BYTES

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("field elements are built from integers")
        if not 0 <= self.value < MODULUS:
            raise FieldDecodingError(f"{self.value} is not in the field")

    @classmethod
    def zero(cls) -> Fr:
        return cls(0)

    @classmethod
    def one(cls) -> Fr:
        return cls(1)

    @classmethod
    def from_int(cls, value: int) -> Fr:
        """Reduce an arbitrary integer into the field."""
        return cls(value % MODULUS)

    @classmethod
    def from_repr(cls, repr_value: int) -> Fr:
        """Decode a canonical representation, rejecting values out of range."""
        if repr_value < 0 or repr_value >= MODULUS:
            raise FieldDecodingError(f"{repr_value} is not in the field")
        return cls(repr_value)

    def to_repr(self) -> int:
        return self.value

    @classmethod
    def root_of_unity(cls) -> Fr:
        """A primitive 2^S-th root of unity."""
        return cls(_ROOT_OF_UNITY)

    @classmethod
    def multiplicative_generator(cls) -> Fr:
        return cls(_MULTIPLICATIVE_GENERATOR)

    def is_zero(self) -> bool:
        return self.value == 0

    def square(self) -> Fr:
        return Fr(self.value * self.value % MODULUS)

    def double(self) -> Fr:
        return Fr((self.value << 1) % MODULUS)

    def inverse(self) -> Fr:
        """Multiplicative inverse; zero has none."""
        if self.is_zero():
            raise ZeroDivisionError("zero has no inverse")
        return self.pow(MODULUS - 2)

    def pow(self, exponent: int) -> Fr:
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        return Fr(pow(self.value, exponent, MODULUS))

    def legendre(self) -> LegendreSymbol:
        s = self.pow((MODULUS - 1) // 2)
        if s.is_zero():
            return LegendreSymbol.ZERO
        if s == Fr.one():
            return LegendreSymbol.QUADRATIC_RESIDUE
        return LegendreSymbol.QUADRATIC_NON_RESIDUE

    def sqrt(self) -> Optional[Fr]:
        """A square root by Tonelli-Shanks, or None for a non-residue."""
        symbol = self.legendre()
        if symbol is LegendreSymbol.ZERO:
            return self
        if symbol is LegendreSymbol.QUADRATIC_NON_RESIDUE:
            return None
        odd_part = (MODULUS - 1) >> S
        one = Fr.one()
        c = Fr.root_of_unity()
        r = self.pow((odd_part + 1) // 2)
        t = self.pow(odd_part)
        m = S
        while t != one:
            i = 1
            t2i = t.square()
            while t2i != one:
                t2i = t2i.square()
                i += 1
            for _ in range(m - i - 1):
                c = c.square()
            r = r * c
            c = c.square()
            t = t * c
            m = i
        return r

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the representation."""
        return self.value.to_bytes(REPR_BYTES, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> Fr:
        if len(data) != REPR_BYTES:
            raise ValueError(f"expected {REPR_BYTES} bytes, got {len(data)}")
        return cls.from_repr(int.from_bytes(data, "big"))

    def __add__(self, other: object) -> Fr:
        if not isinstance(other, Fr):
            return NotImplemented
        return Fr((self.value + other.value) % MODULUS)

    def __sub__(self, other: object) -> Fr:
        if not isinstance(other, Fr):
            return NotImplemented
        return Fr((self.value - other.value) % MODULUS)

    def __mul__(self, other: object) -> Fr:
        if not isinstance(other, Fr):
            return NotImplemented
        return Fr(self.value * other.value % MODULUS)

    def __truediv__(self, other: object) -> Fr:
        if not isinstance(other, Fr):
            return NotImplemented
        return self * other.inverse()

    def __neg__(self) -> Fr:
        return Fr(-self.value % MODULUS)

    def __pow__(self, exponent: int) -> Fr:
        return self.pow(exponent)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class DummyEngine:
    """Pairing engine whose groups are all the scalar field.

    The pairing of a and b is their product. The target group is kept in
    additive (exponent) form, so its identity is zero and a pairing product
    is the sum of the individual pairings.
    """

    g1_generator: Fr = Fr.one()
    g2_generator: Fr = Fr.one()
    scalar_field = Fr

    def miller_loop(self, pairs: Iterable[Tuple[Fr, Fr]]) -> Fr:
        acc = Fr.zero()
        for a, b in pairs:
            acc = acc + a * b
        return acc

    def final_exponentiation(self, value: Fr) -> Fr:
        return value

    def pairing_check(self, pairs: Iterable[Tuple[Fr, Fr]]) -> bool:
        """True when the product of the pairings is the target identity."""
        return self.final_exponentiation(self.miller_loop(pairs)).is_zero()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DummyEngine)

    def __hash__(self) -> int:
        return hash(DummyEngine)