"""Storage sizes expressed as a count of units of a given ratio of bytes."""

from __future__ import annotations

from fractions import Fraction

KILO = 1024
MEGA = 1024 * 1024
GIGA = 1024 * 1024 * 1024
TERA = 1024 * 1024 * 1024 * 1024


def space_cast(space: Space, ratio: int | Fraction) -> Space:
    """Convert ``space`` to units of ``ratio`` bytes, truncating toward zero."""
    factor = space.ratio / Fraction(ratio)
    count = int(Fraction(space.count() * factor.numerator, factor.denominator))
    return Space(count, ratio)


class Space:
    """An amount of storage: ``count`` units of ``ratio`` bytes each."""

    __slots__ = ("_rep", "ratio")

    def __init__(self, count: int = 0, ratio: int | Fraction = 1) -> None:
        ratio = Fraction(ratio)
        if ratio <= 0:
            raise ValueError("ratio must be positive")
        self._rep = count
        self.ratio = ratio

    def count(self) -> int:
        """Return the number of units."""
        return self._rep

    def cast(self, ratio: int | Fraction) -> Space:
        """Return this amount in units of ``ratio`` bytes."""
        return space_cast(self, ratio)

    def _same_unit(self, other: object) -> Space:
        if not isinstance(other, Space):
            return NotImplemented
        if other.ratio != self.ratio:
            raise TypeError("spaces of different units cannot be combined")
        return other

    def __pos__(self) -> Space:
        return Space(self._rep, self.ratio)

    def __neg__(self) -> Space:
        return Space(-self._rep, self.ratio)

    def __add__(self, other: Space) -> Space:
        other = self._same_unit(other)
        if other is NotImplemented:
            return NotImplemented
        return Space(self._rep + other._rep, self.ratio)

    def __sub__(self, other: Space) -> Space:
        other = self._same_unit(other)
        if other is NotImplemented:
            return NotImplemented
        return Space(self._rep - other._rep, self.ratio)

    def __mul__(self, scalar: int) -> Space:
        if not isinstance(scalar, int):
            return NotImplemented
        return Space(self._rep * scalar, self.ratio)

    __rmul__ = __mul__

    def __floordiv__(self, scalar: int) -> Space:
        if not isinstance(scalar, int):
            return NotImplemented
        return Space(self._rep // scalar, self.ratio)

    def __mod__(self, scalar: int) -> Space:
        if not isinstance(scalar, int):
            return NotImplemented
        return Space(self._rep % scalar, self.ratio)

    def _total(self) -> Fraction:
        return self._rep * self.ratio

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Space):
            return NotImplemented
        return self._total() == other._total()

    def __hash__(self) -> int:
        return hash(self._total())

    def __repr__(self) -> str:
        return f"Space({self._rep}, ratio={self.ratio})"