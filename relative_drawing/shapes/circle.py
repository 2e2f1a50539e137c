"""Circle: a shape whose implicit width and height are always equal."""

from typing import TYPE_CHECKING, Any, List, Optional

from relative_drawing.numeric.exact_decimal import ExactDecimal, HALF, Number
from relative_drawing.shapes.shape import Shape, Size, implicit_size

if TYPE_CHECKING:
    from relative_drawing.drawing.fitting import Resolution


class Circle(Shape):
    """Circle of implicit diameter 1 unless sized otherwise.

    Setting either implicit dimension sets both.
    """

    def __init__(self, diameter: Size = 1):
        size = implicit_size(diameter)
        super().__init__(size, size)

    @Shape.implicit_width.setter
    def implicit_width(self, value: Size) -> None:
        size = implicit_size(value)
        self.graph.set_size(self.handle, width=size, height=size)

    @Shape.implicit_height.setter
    def implicit_height(self, value: Size) -> None:
        size = implicit_size(value)
        self.graph.set_size(self.handle, width=size, height=size)

    @property
    def implicit_radius(self) -> ExactDecimal:
        return self.implicit_width * HALF

    @property
    def explicit_radius(self) -> Optional[ExactDecimal]:
        width = self.explicit_width
        return None if width is None else width * HALF

    def set_radius(self, radius: Number) -> None:
        """Set the implicit radius (half the implicit diameter)."""
        self.implicit_width = implicit_size(radius) * 2

    def _svg_body(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        geometry = resolution.geometry(self)
        fmt = resolution.format
        circle = factory.circle(
            center=(fmt(geometry.x), fmt(geometry.y)),
            r=fmt(geometry.width * HALF),
            **self._style_attributes(),
        )
        return [circle]
