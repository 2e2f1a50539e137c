"""
Typed quantities: an ExactDecimal tagged as implicit or explicit.

Implicit measures are relative layout units (a default shape is 1 x 1);
explicit measures are output pixels and are not scaled by the drawing ratio.
Gaps between adjacent shapes are Measures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from relative_drawing.numeric.exact_decimal import ExactDecimal, Number


class Unit(Enum):
    """Unit a Measure is expressed in."""
    IMPLICIT = "implicit"  # relative layout units
    EXPLICIT = "explicit"  # output pixels


@dataclass(frozen=True, eq=False)
class Measure:
    """Numeric quantity with a unit tag.

    Equality and ordering compare values only, so
    Measure.implicit(1) == Measure.explicit("1.00").
    """
    value: ExactDecimal
    unit: Unit = Unit.IMPLICIT

    def __post_init__(self):
        object.__setattr__(self, 'value', ExactDecimal.create(self.value))
        if not isinstance(self.unit, Unit):
            object.__setattr__(self, 'unit', Unit(self.unit))

    @classmethod
    def implicit(cls, value: Number) -> 'Measure':
        return cls(ExactDecimal.create(value), Unit.IMPLICIT)

    @classmethod
    def explicit(cls, value: Number) -> 'Measure':
        return cls(ExactDecimal.create(value), Unit.EXPLICIT)

    @classmethod
    def coerce(cls, value: Union['Measure', Number, None]) -> 'Measure':
        """Accept a Measure as is; numbers become implicit Measures, None is 0."""
        if value is None:
            return cls.implicit(0)
        if isinstance(value, Measure):
            return value
        return cls.implicit(value)

    @property
    def is_implicit(self) -> bool:
        return self.unit is Unit.IMPLICIT

    @property
    def is_explicit(self) -> bool:
        return self.unit is Unit.EXPLICIT

    def __neg__(self) -> 'Measure':
        return Measure(self.value.negate(), self.unit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Measure):
            return self.value == other.value
        return NotImplemented

    def __lt__(self, other: 'Measure') -> bool:
        if isinstance(other, Measure):
            return self.value < other.value
        return NotImplemented

    def __le__(self, other: 'Measure') -> bool:
        if isinstance(other, Measure):
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other: 'Measure') -> bool:
        if isinstance(other, Measure):
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other: 'Measure') -> bool:
        if isinstance(other, Measure):
            return self.value >= other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return f"{self.value} ({self.unit.value})"
