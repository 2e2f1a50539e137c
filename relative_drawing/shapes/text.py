"""
Text labels.

Text has no font metrics: its implicit width is estimated from the number of
characters (TEXT_CHAR_WIDTH implicit units each, at least 1) unless the width
is set explicitly. Explicit geometry of text exists only in a drawing with
explicit dimensions; natural-size rendering cannot place it.
"""

from typing import TYPE_CHECKING, Any, List, Optional

from relative_drawing import config
from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.geometry.box import ShapeGeometry
from relative_drawing.numeric.exact_decimal import ExactDecimal, ONE
from relative_drawing.shapes.shape import Shape, Size

if TYPE_CHECKING:
    from relative_drawing.drawing.fitting import Resolution

TEXT_GEOMETRY_ERROR = "Cannot resolve text geometry without explicit dimensions"


def estimated_width(payload: Optional[str]) -> ExactDecimal:
    """Implicit width heuristic: max(1, len * TEXT_CHAR_WIDTH)."""
    length = len(payload or "")
    return ONE.max(ExactDecimal.create(config.TEXT_CHAR_WIDTH) * length)


class Text(Shape):
    """A string drawn centered in its box.

    Attached to another shape with `Shape.add_text()`, the text is drawn at
    that shape's center instead of its own position.
    """

    def __init__(self, payload: Optional[str] = None):
        super().__init__(estimated_width(payload), ONE)
        self._payload = payload
        self._width_overridden = False

    def __repr__(self) -> str:
        return f"Text({self._payload!r})"

    @property
    def payload(self) -> Optional[str]:
        return self._payload

    @payload.setter
    def payload(self, value: Optional[str]) -> None:
        self._payload = value
        if not self._width_overridden:
            self.graph.set_size(self.handle, width=estimated_width(value))

    @property
    def is_empty(self) -> bool:
        return not self._payload

    @Shape.implicit_width.setter
    def implicit_width(self, value: Size) -> None:
        Shape.implicit_width.fset(self, value)
        self._width_overridden = True

    def _resolve_geometry(self, resolution: 'Resolution') -> ShapeGeometry:
        if resolution.natural:
            raise UnsupportedOperationError(TEXT_GEOMETRY_ERROR)
        parent = self.parent
        if parent is not None:
            return resolution.geometry(parent)
        return resolution.box(self)

    @property
    def explicit_geometry(self) -> Optional[ShapeGeometry]:
        """Explicit geometry of the text box.

        Raises:
            UnsupportedOperationError: If the owning drawing has no explicit
                dimensions (or there is no owning drawing)
        """
        geometry = super().explicit_geometry
        if geometry is None:
            raise UnsupportedOperationError(TEXT_GEOMETRY_ERROR)
        return geometry

    def _svg_body(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        if self.is_empty:
            return []
        geometry = resolution.geometry(self)
        fmt = resolution.format
        attributes = {'dominant-baseline': 'middle', 'text-anchor': 'middle'}
        if self.stroke is not None:
            attributes['stroke'] = self.stroke
        if self.fill is not None:
            attributes['fill'] = self.fill
        text = factory.text(
            self._payload,
            x=[fmt(geometry.x)],
            y=[fmt(geometry.y)],
            **attributes,
        )
        return [text]
