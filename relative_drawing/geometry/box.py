"""
Resolved explicit geometry of one shape.

A ShapeGeometry is a snapshot: it is produced by a drawing for a given set of
constraints and explicit dimensions, and never updated in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.geometry.point import Point
from relative_drawing.numeric.exact_decimal import ExactDecimal, HALF


class PortSide(Enum):
    """Edge midpoints where lines may attach."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, side: Union['PortSide', str]) -> 'PortSide':
        if isinstance(side, cls):
            return side
        try:
            return cls(str(side).lower())
        except ValueError:
            raise UnsupportedOperationError(
                f"Unknown port side {side!r}; expected one of "
                f"{', '.join(s.value for s in cls)}"
            ) from None


@dataclass(frozen=True)
class ShapeGeometry:
    """Center and size in explicit (SVG) coordinates, y growing downward.

    Attributes:
        x: Horizontal center
        y: Vertical center
        width: Explicit width
        height: Explicit height
    """
    x: ExactDecimal
    y: ExactDecimal
    width: ExactDecimal
    height: ExactDecimal

    @property
    def left(self) -> ExactDecimal:
        return self.x - self.width * HALF

    @property
    def right(self) -> ExactDecimal:
        return self.x + self.width * HALF

    @property
    def top(self) -> ExactDecimal:
        return self.y - self.height * HALF

    @property
    def bottom(self) -> ExactDecimal:
        return self.y + self.height * HALF

    def port(self, side: Union[PortSide, str]) -> Point:
        """Midpoint of the given edge of the bounding box."""
        side = PortSide.parse(side)
        if side is PortSide.LEFT:
            return Point(self.left, self.y)
        if side is PortSide.RIGHT:
            return Point(self.right, self.y)
        if side is PortSide.TOP:
            return Point(self.x, self.top)
        return Point(self.x, self.bottom)
