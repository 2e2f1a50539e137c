"""
Base shape: a box with an implicit size and relative-position constraints.

A plain Shape draws nothing and can serve as an invisible spacer. Concrete
shapes (Circle, Rectangle, Line, Text) override `_svg_body()`.

Placement is declared pairwise:

    b.set_right_of(a)            # b touches a on a's right
    c.set_below(a, gap=0.5)      # half an implicit unit of space between them
    d.set_above(a, gap=Measure.explicit(10))   # 10 pixels, never scaled

Explicit geometry (pixels) exists only once the shape belongs to a Drawing
that has at least one explicit dimension.
"""

import logging
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.geometry.box import PortSide, ShapeGeometry
from relative_drawing.geometry.point import Point
from relative_drawing.graph.adjacency import (
    Axis,
    ConstraintGraph,
    Direction,
    merge,
    next_handle,
)
from relative_drawing.numeric.exact_decimal import ExactDecimal, Number, ONE
from relative_drawing.numeric.measure import Measure

if TYPE_CHECKING:
    from relative_drawing.drawing.drawing import Drawing
    from relative_drawing.drawing.fitting import Resolution
    from relative_drawing.shapes.text import Text

logger = logging.getLogger(__name__)

Gap = Union[Measure, Number, None]
Size = Union[Measure, Number]


def implicit_size(value: Size) -> ExactDecimal:
    """Convert a size argument to an implicit ExactDecimal.

    Raises:
        UnsupportedOperationError: If an explicit Measure is passed
        ValueError: If the size is negative
    """
    if isinstance(value, Measure):
        if value.is_explicit:
            raise UnsupportedOperationError("Implicit sizes cannot be explicit measures")
        value = value.value
    size = ExactDecimal.create(value)
    if size < 0:
        raise ValueError(f"Size must be non-negative, got {size}")
    return size


@dataclass(frozen=True)
class Port:
    """Lazy reference to an edge midpoint of a shape.

    Unlike the `*_port` properties of Shape, a Port is usable before any
    explicit dimensions exist; lines resolve it at render time.
    """
    shape: 'Shape'
    side: PortSide

    def resolve(self, resolution: 'Resolution') -> Point:
        return resolution.geometry(self.shape).port(self.side)

    def point(self) -> Optional[Point]:
        """Current explicit point, or None while the shape is unresolved."""
        geometry = self.shape.explicit_geometry
        return None if geometry is None else geometry.port(self.side)


class Shape:
    """Box-shaped node in a constraint graph.

    Attributes:
        fill: SVG fill color (None: attribute omitted)
        stroke: SVG stroke color (None: attribute omitted)
    """

    def __init__(self, width: Size = ONE, height: Size = ONE):
        self._handle = next_handle()
        self._graph = ConstraintGraph()
        self._graph.add_node(
            self._handle, implicit_size(width), implicit_size(height), owner=self,
        )
        self._drawing_ref: Optional['weakref.ReferenceType[Drawing]'] = None
        self._parent_ref: Optional['weakref.ReferenceType[Shape]'] = None
        self._text: Optional['Text'] = None
        self.fill: Optional[str] = None
        self.stroke: Optional[str] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handle={self._handle})"

    # ------------------------------------------------------------------
    # Graph membership
    # ------------------------------------------------------------------

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def graph(self) -> ConstraintGraph:
        """Constraint graph currently holding this shape."""
        self._graph = self._graph.find()
        return self._graph

    def _join(self, other: 'Shape') -> ConstraintGraph:
        graph = merge(self.graph, other.graph)
        self._graph = graph
        other._graph = graph
        return graph

    # ------------------------------------------------------------------
    # Relative placement
    # ------------------------------------------------------------------

    def _set_adjacent(self, other: 'Shape', direction: Direction, gap: Gap) -> None:
        if other is self:
            raise UnsupportedOperationError(
                f"{type(self).__name__} cannot be {direction.label.replace('_', ' ')} itself"
            )
        if not isinstance(other, Shape):
            raise TypeError(f"Expected a Shape, got {type(other).__name__}")
        graph = self._join(other)
        graph.connect(self._handle, direction, other._handle, Measure.coerce(gap))

    def set_right_of(self, other: 'Shape', gap: Gap = None) -> None:
        """Place this shape to the right of `other`, `gap` apart."""
        self._set_adjacent(other, Direction.RIGHT_OF, gap)

    def set_left_of(self, other: 'Shape', gap: Gap = None) -> None:
        """Place this shape to the left of `other`, `gap` apart."""
        self._set_adjacent(other, Direction.LEFT_OF, gap)

    def set_above(self, other: 'Shape', gap: Gap = None) -> None:
        """Place this shape above `other`, `gap` apart."""
        self._set_adjacent(other, Direction.ABOVE, gap)

    def set_below(self, other: 'Shape', gap: Gap = None) -> None:
        """Place this shape below `other`, `gap` apart."""
        self._set_adjacent(other, Direction.BELOW, gap)

    def _neighbour(self, direction: Direction) -> Optional['Shape']:
        graph = self.graph
        edge = graph.edge(self._handle, direction.axis)
        if edge is None or edge.direction is not direction:
            return None
        return graph.owner(edge.target)

    @property
    def right_of(self) -> Optional['Shape']:
        """Shape this one was placed right of, if any."""
        return self._neighbour(Direction.RIGHT_OF)

    @property
    def left_of(self) -> Optional['Shape']:
        return self._neighbour(Direction.LEFT_OF)

    @property
    def above(self) -> Optional['Shape']:
        return self._neighbour(Direction.ABOVE)

    @property
    def below(self) -> Optional['Shape']:
        return self._neighbour(Direction.BELOW)

    # ------------------------------------------------------------------
    # Implicit geometry
    # ------------------------------------------------------------------

    @property
    def implicit_width(self) -> ExactDecimal:
        return self.graph.node(self._handle).width

    @implicit_width.setter
    def implicit_width(self, value: Size) -> None:
        self.graph.set_size(self._handle, width=implicit_size(value))

    @property
    def implicit_height(self) -> ExactDecimal:
        return self.graph.node(self._handle).height

    @implicit_height.setter
    def implicit_height(self, value: Size) -> None:
        self.graph.set_size(self._handle, height=implicit_size(value))

    @property
    def occupies_space(self) -> bool:
        return self.graph.node(self._handle).occupies_space

    @property
    def implicit_x_position_center(self) -> ExactDecimal:
        """Implicit horizontal center relative to the root of this shape's graph.

        Explicit gaps contribute nothing here; they only exist in pixels.
        """
        return self.graph.positions(Axis.HORIZONTAL)[self._handle].implicit

    @property
    def implicit_y_position_center(self) -> ExactDecimal:
        """Implicit vertical center, y growing upward."""
        return self.graph.positions(Axis.VERTICAL)[self._handle].implicit

    # ------------------------------------------------------------------
    # Drawing membership and explicit geometry
    # ------------------------------------------------------------------

    @property
    def drawing(self) -> Optional['Drawing']:
        """Drawing this shape (or the shape it labels) was added to."""
        if self._drawing_ref is not None:
            drawing = self._drawing_ref()
            if drawing is not None:
                return drawing
        parent = self.parent
        return None if parent is None else parent.drawing

    @property
    def parent(self) -> Optional['Shape']:
        """Shape this one is attached to as a label, if any."""
        return None if self._parent_ref is None else self._parent_ref()

    def _attach(self, drawing: 'Drawing') -> None:
        current = None if self._drawing_ref is None else self._drawing_ref()
        if current is not None and current is not drawing:
            logger.debug("%r moved to another drawing", self)
        self._drawing_ref = weakref.ref(drawing)

    def _resolve_geometry(self, resolution: 'Resolution') -> ShapeGeometry:
        return resolution.box(self)

    @property
    def explicit_geometry(self) -> Optional[ShapeGeometry]:
        """Explicit geometry, or None outside a dimensioned drawing."""
        drawing = self.drawing
        if drawing is None:
            return None
        return drawing.geometry_of(self)

    def _explicit(self, attribute: str) -> Any:
        geometry = self.explicit_geometry
        return None if geometry is None else getattr(geometry, attribute)

    @property
    def explicit_width(self) -> Optional[ExactDecimal]:
        return self._explicit('width')

    @property
    def explicit_height(self) -> Optional[ExactDecimal]:
        return self._explicit('height')

    @property
    def explicit_x_position(self) -> Optional[ExactDecimal]:
        """Explicit horizontal center."""
        return self._explicit('x')

    @property
    def explicit_y_position(self) -> Optional[ExactDecimal]:
        """Explicit vertical center (SVG coordinates, y downward)."""
        return self._explicit('y')

    @property
    def explicit_left(self) -> Optional[ExactDecimal]:
        return self._explicit('left')

    @property
    def explicit_right(self) -> Optional[ExactDecimal]:
        return self._explicit('right')

    @property
    def explicit_top(self) -> Optional[ExactDecimal]:
        return self._explicit('top')

    @property
    def explicit_bottom(self) -> Optional[ExactDecimal]:
        return self._explicit('bottom')

    # ------------------------------------------------------------------
    # Ports
    # ------------------------------------------------------------------

    def port(self, side: Union[PortSide, str]) -> Port:
        """Lazy port on the given side, for use as a line endpoint."""
        return Port(self, PortSide.parse(side))

    def _port_point(self, side: PortSide) -> Optional[Point]:
        geometry = self.explicit_geometry
        return None if geometry is None else geometry.port(side)

    @property
    def left_port(self) -> Optional[Point]:
        return self._port_point(PortSide.LEFT)

    @property
    def right_port(self) -> Optional[Point]:
        return self._port_point(PortSide.RIGHT)

    @property
    def top_port(self) -> Optional[Point]:
        return self._port_point(PortSide.TOP)

    @property
    def bottom_port(self) -> Optional[Point]:
        return self._port_point(PortSide.BOTTOM)

    # ------------------------------------------------------------------
    # Label
    # ------------------------------------------------------------------

    @property
    def text(self) -> Optional['Text']:
        """Label drawn centered in this shape, if any."""
        return self._text

    def add_text(self, text: Union['Text', str]) -> 'Text':
        """Attach a label centered in this shape; replaces any earlier label.

        Args:
            text: Text shape or plain string

        Returns:
            The attached Text
        """
        from relative_drawing.shapes.text import Text

        if isinstance(text, str):
            text = Text(text)
        if text is self:
            raise UnsupportedOperationError("A shape cannot be its own label")
        previous = text.parent
        if previous is not None and previous is not self and previous._text is text:
            previous._text = None
        if self._text is not None and self._text is not text:
            self._text._parent_ref = None
        text._parent_ref = weakref.ref(self)
        self._text = text
        return text

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def _style_attributes(self) -> Dict[str, str]:
        attributes = {}
        if self.fill is not None:
            attributes['fill'] = self.fill
        if self.stroke is not None:
            attributes['stroke'] = self.stroke
        return attributes

    def _svg_body(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        return []

    def svg_elements(self, factory: Any, resolution: 'Resolution') -> List[Any]:
        """svgwrite elements for this shape and its label.

        Args:
            factory: svgwrite.Drawing used as an element factory
            resolution: Resolved layout of the drawing being rendered
        """
        elements = self._svg_body(factory, resolution)
        if self._text is not None:
            elements.extend(self._text.svg_elements(factory, resolution))
        return elements

    def marker_geometries(self) -> list:
        """Marker definitions this shape references (lines only)."""
        return []
