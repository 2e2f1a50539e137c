"""
Lines and their decorations.

A Line is either

* standalone: placed by constraints like any other shape, drawn along the
  horizontal midline (HORIZONTAL, implicit box 1 x 0) or the vertical midline
  (VERTICAL, implicit box 0 x 1) of its box; or
* anchored: drawn between two endpoints, each an explicit Point or a Port of
  another shape. Anchored lines never occupy space in a drawing.

Decorations (LineEnding or the legacy Arrowhead) are drawn as SVG markers at
either end.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from relative_drawing import config
from relative_drawing.drawing.markers.line_ending import Arrowhead, LineEnding
from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.geometry.box import ShapeGeometry
from relative_drawing.geometry.point import Point
from relative_drawing.numeric.exact_decimal import ExactDecimal, HALF, Number, ONE, ZERO
from relative_drawing.shapes.shape import Port, Shape

if TYPE_CHECKING:
    from relative_drawing.drawing.fitting import Resolution
    from relative_drawing.drawing.markers.geometry import MarkerGeometry

logger = logging.getLogger(__name__)

Endpoint = Union[Point, Port]


class Orientation(Enum):
    """Direction of a standalone line."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, orientation: Union['Orientation', str]) -> 'Orientation':
        if isinstance(orientation, cls):
            return orientation
        try:
            return cls(str(orientation).lower())
        except ValueError:
            raise UnsupportedOperationError(
                f"Orientation must be horizontal or vertical, got {orientation!r}"
            ) from None


class LineEnd(Enum):
    """Which end of a line a decoration sits on."""
    START = "start"
    END = "end"


def _as_endpoint(value: Any) -> Endpoint:
    if isinstance(value, (Point, Port)):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return Point(*value)
    raise TypeError(f"Line endpoints must be Points or Ports, got {type(value).__name__}")


class Line(Shape):
    """Straight line, standalone or between two endpoints.

    Examples:
        Line()                                    # horizontal, 1 x 0
        Line(Orientation.VERTICAL)
        Line(a.port("right"), b.port("left"))     # anchored to two shapes
        Line(Point(0, 0), Point(10, 10))          # fixed explicit coordinates

    Attributes:
        thickness: Stroke width in explicit units (None: attribute omitted)
    """

    def __init__(
        self,
        start: Union[Endpoint, Orientation, str, None] = None,
        end: Optional[Endpoint] = None,
        orientation: Union[Orientation, str, None] = None,
    ):
        if isinstance(start, (Orientation, str)) and end is None:
            orientation, start = start, None
        if (start is None) != (end is None):
            raise UnsupportedOperationError("A line needs both endpoints or neither")

        self._orientation = Orientation.parse(orientation or Orientation.HORIZONTAL)
        self._endpoints: Optional[Tuple[Endpoint, Endpoint]] = None
        if start is not None:
            super().__init__(ZERO, ZERO)
            self._endpoints = (_as_endpoint(start), _as_endpoint(end))
            self.graph.set_occupies_space(self.handle, False)
            for endpoint in self._endpoints:
                if isinstance(endpoint, Port):
                    self._join(endpoint.shape)
        elif self._orientation is Orientation.HORIZONTAL:
            super().__init__(ONE, ZERO)
        else:
            super().__init__(ZERO, ONE)

        self.thickness: Optional[ExactDecimal] = None
        self._endings: Dict[LineEnd, LineEnding] = {}

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def is_anchored(self) -> bool:
        """True for lines drawn between endpoints rather than placed by constraints."""
        return self._endpoints is not None

    @property
    def endpoints(self) -> Optional[Tuple[Endpoint, Endpoint]]:
        return self._endpoints

    def set_thickness(self, thickness: Number) -> None:
        value = ExactDecimal.create(thickness)
        if value < 0:
            raise ValueError(f"Line thickness must be non-negative, got {value}")
        self.thickness = value

    # ------------------------------------------------------------------
    # Decorations
    # ------------------------------------------------------------------

    def add_line_ending(
        self,
        ending: LineEnding,
        end: Union[LineEnd, str] = LineEnd.END,
    ) -> LineEnding:
        """Attach a decoration to one end; replaces any earlier one there."""
        if not isinstance(ending, LineEnding):
            raise TypeError(f"Expected a LineEnding, got {type(ending).__name__}")
        end = LineEnd(end) if isinstance(end, str) else end
        self._endings[end] = ending
        return ending

    def add_arrowhead(self, arrowhead: Optional[Arrowhead] = None) -> Arrowhead:
        """Attach a legacy arrowhead at the end of the line."""
        if arrowhead is None:
            arrowhead = Arrowhead()
        self.add_line_ending(arrowhead, LineEnd.END)
        return arrowhead

    @property
    def line_endings(self) -> Dict[LineEnd, LineEnding]:
        return dict(self._endings)

    def marker_geometries(self) -> List['MarkerGeometry']:
        return [
            self._endings[end].geometry()
            for end in (LineEnd.START, LineEnd.END)
            if end in self._endings
        ]

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def points(self, resolution: 'Resolution') -> Tuple[Point, Point]:
        """Explicit start and end points under `resolution`."""
        if self._endpoints is not None:
            return tuple(
                endpoint.resolve(resolution) if isinstance(endpoint, Port) else endpoint
                for endpoint in self._endpoints
            )
        box = resolution.box(self)
        if self._orientation is Orientation.HORIZONTAL:
            return Point(box.left, box.y), Point(box.right, box.y)
        return Point(box.x, box.bottom), Point(box.x, box.top)

    def _resolve_geometry(self, resolution: 'Resolution') -> ShapeGeometry:
        if self._endpoints is None:
            return resolution.box(self)
        start, end = self.points(resolution)
        return ShapeGeometry(
            x=(start.x + end.x) * HALF,
            y=(start.y + end.y) * HALF,
            width=(end.x - start.x).abs(),
            height=(end.y - start.y).abs(),
        )

    def _svg_body(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        start, end = self.points(resolution)
        fmt = resolution.format
        attributes = {}
        if self.fill is not None:
            attributes['fill'] = self.fill
        attributes['stroke'] = self.stroke if self.stroke is not None else config.LINE_STROKE
        if self.thickness is not None:
            attributes['stroke-width'] = fmt(self.thickness)
        for end_name in (LineEnd.START, LineEnd.END):
            ending = self._endings.get(end_name)
            if ending is not None:
                attributes[f'marker-{end_name.value}'] = f"url(#{ending.marker_id})"
        line = factory.line(
            start=(fmt(start.x), fmt(start.y)),
            end=(fmt(end.x), fmt(end.y)),
            **attributes,
        )
        return [line]
