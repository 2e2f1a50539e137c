"""Rectangle with a configurable aspect ratio."""

from typing import TYPE_CHECKING, Any, List

from relative_drawing.numeric.exact_decimal import ExactDecimal, ONE
from relative_drawing.shapes.shape import Shape, Size, implicit_size

if TYPE_CHECKING:
    from relative_drawing.drawing.fitting import Resolution


class Rectangle(Shape):
    """Rectangle of implicit height 1 and implicit width `aspect_ratio`."""

    def __init__(self, aspect_ratio: Size = ONE):
        super().__init__(implicit_size(aspect_ratio), ONE)

    @property
    def aspect_ratio(self) -> ExactDecimal:
        """Width divided by height, at the configured division precision."""
        from relative_drawing import config

        if self.implicit_height.is_zero():
            raise ZeroDivisionError("Rectangle has zero implicit height")
        return self.implicit_width.div(self.implicit_height, config.DIVISION_PRECISION)

    def _svg_body(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        geometry = resolution.geometry(self)
        fmt = resolution.format
        rect = factory.rect(
            insert=(fmt(geometry.left), fmt(geometry.top)),
            size=(fmt(geometry.width), fmt(geometry.height)),
            **self._style_attributes(),
        )
        return [rect]
