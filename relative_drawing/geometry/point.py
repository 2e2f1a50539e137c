"""
Immutable points in explicit (pixel) space.

SVG coordinates: x grows to the right, y grows downward.
"""

from dataclasses import dataclass

from relative_drawing.numeric.exact_decimal import ExactDecimal


@dataclass(frozen=True)
class Point:
    """(x, y) pair of ExactDecimals.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate (downward)
    """
    x: ExactDecimal
    y: ExactDecimal

    def __post_init__(self):
        object.__setattr__(self, 'x', ExactDecimal.create(self.x))
        object.__setattr__(self, 'y', ExactDecimal.create(self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
