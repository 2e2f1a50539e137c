"""
Closed-form marker figures.

Closed figures have area 16 at scale 1:

    triangle       base b = (4096/15)^(1/4), length 32/b
    square         side 4
    disk           radius 4/sqrt(pi)
    turned square  the square rotated 45 degrees (diagonal 4*sqrt(2))
    rhombus        60/120 degree angles, height sqrt(32)/3^(1/4)
    rectangle      2:1, height 2*sqrt(2)

The remaining figures (bar, stealth, kite, bracket, ellipse) use fixed small
sizes. A figure is computed in its own box with the origin at the top-left
corner; build_marker() pads the box, formats coordinates and produces an
immutable MarkerGeometry.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from relative_drawing.drawing.markers.types import Canonical, GeometryKind
from relative_drawing.numeric.exact_decimal import ExactDecimal

# ---------------------------------------------------------------------------
# Figure constants (scale 1)
# ---------------------------------------------------------------------------

TRIANGLE_BASE = (4096.0 / 15.0) ** 0.25
TRIANGLE_LENGTH = 32.0 / TRIANGLE_BASE

SQUARE_SIDE = 4.0

DISK_RADIUS = 4.0 / math.sqrt(math.pi)

RHOMBUS_HEIGHT = math.sqrt(32.0) / 3.0 ** 0.25
RHOMBUS_WIDTH = math.sqrt(3.0) * RHOMBUS_HEIGHT

RECTANGLE_HEIGHT = 2.0 * math.sqrt(2.0)
RECTANGLE_WIDTH = 2.0 * RECTANGLE_HEIGHT

BAR_WIDTH = 1.0
BAR_HEIGHT = 6.0

STEALTH_SIZE = 6.0
KITE_SIZE = 6.0

BRACKET_WIDTH = 3.0
BRACKET_HEIGHT = 6.0

ELLIPSE_RX = 3.0
ELLIPSE_RY = 2.0


@dataclass(frozen=True)
class MarkerPrimitive:
    """SVG element drawn inside a marker.

    Attributes:
        tag: 'path', 'circle' or 'ellipse'
        attributes: Geometry attributes, already formatted, in output order
    """
    tag: str
    attributes: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class MarkerGeometry:
    """Everything needed to emit one <marker> definition.

    Attributes:
        type_name: Canonical type name
        marker_id: Id referenced by marker-start / marker-end
        view_box: (width, height) of the padded figure box
        ref: Reference point (the point placed on the line end)
        primitive: Figure element
        fill: Fill color, or None to omit
        stroke: Stroke color, or None to omit
        fill_opacity: Fill opacity, or None to omit
    """
    type_name: str
    marker_id: str
    view_box: Tuple[str, str]
    ref: Tuple[str, str]
    primitive: MarkerPrimitive
    fill: Optional[str] = None
    stroke: Optional[str] = None
    fill_opacity: Optional[str] = None

    @property
    def marker_width(self) -> str:
        return self.view_box[0]

    @property
    def marker_height(self) -> str:
        return self.view_box[1]


@dataclass(frozen=True)
class Figure:
    """Figure in its own box, origin at the top-left corner.

    Exactly one of `outline` (polygon or polyline vertices) and `radii`
    (ellipse radii) is set.
    """
    width: float
    height: float
    outline: Optional[np.ndarray] = None
    closed: bool = True
    radii: Optional[Tuple[float, float]] = None
    ref_x: Optional[float] = None


def rotation_matrix(angle: float) -> np.ndarray:
    """2x2 counter-clockwise rotation matrix."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s], [s, c]])


def _box_outline(width: float, height: float) -> np.ndarray:
    return np.array([[0.0, 0.0], [0.0, height], [width, height], [width, 0.0]])


def triangle(sx: float, sy: float) -> Figure:
    w, h = TRIANGLE_LENGTH * sx, TRIANGLE_BASE * sy
    return Figure(w, h, np.array([[0.0, 0.0], [0.0, h], [w, h / 2]]))


def reverse_triangle(sx: float, sy: float) -> Figure:
    w, h = TRIANGLE_LENGTH * sx, TRIANGLE_BASE * sy
    return Figure(w, h, np.array([[0.0, h / 2], [w, h], [w, 0.0]]))


def square(sx: float, sy: float) -> Figure:
    w, h = SQUARE_SIDE * sx, SQUARE_SIDE * sy
    return Figure(w, h, _box_outline(w, h))


def turned_square(sx: float, sy: float) -> Figure:
    """Square rotated 45 degrees; vertices top, right, bottom, left."""
    half = SQUARE_SIDE / 2
    corners = np.array([[-half, -half], [half, -half], [half, half], [-half, half]])
    rotated = corners @ rotation_matrix(np.pi / 4).T
    diagonal = SQUARE_SIDE * math.sqrt(2.0)
    scaled = rotated * np.array([sx, sy])
    shifted = scaled + np.array([diagonal * sx / 2, diagonal * sy / 2])
    return Figure(diagonal * sx, diagonal * sy, shifted)


def rhombus(sx: float, sy: float) -> Figure:
    w, h = RHOMBUS_WIDTH * sx, RHOMBUS_HEIGHT * sy
    return Figure(w, h, np.array([[0.0, h / 2], [w / 2, h], [w, h / 2], [w / 2, 0.0]]))


def disk(sx: float, sy: float) -> Figure:
    rx, ry = DISK_RADIUS * sx, DISK_RADIUS * sy
    return Figure(2 * rx, 2 * ry, radii=(rx, ry))


def bar(sx: float, sy: float) -> Figure:
    w, h = BAR_WIDTH * sx, BAR_HEIGHT * sy
    return Figure(w, h, _box_outline(w, h))


def rectangle(sx: float, sy: float) -> Figure:
    w, h = RECTANGLE_WIDTH * sx, RECTANGLE_HEIGHT * sy
    return Figure(w, h, _box_outline(w, h))


def stealth(sx: float, sy: float) -> Figure:
    w, h = STEALTH_SIZE * sx, STEALTH_SIZE * sy
    return Figure(w, h, np.array([[0.0, 0.0], [w / 2, h / 2], [0.0, h], [w, h / 2]]))


def kite(sx: float, sy: float) -> Figure:
    w, h = KITE_SIZE * sx, KITE_SIZE * sy
    return Figure(w, h, np.array([[0.0, h / 2], [w / 3, h], [w, h / 2], [w / 3, 0.0]]))


def bracket(sx: float, sy: float) -> Figure:
    w, h = BRACKET_WIDTH * sx, BRACKET_HEIGHT * sy
    outline = np.array([[0.0, 0.0], [w, 0.0], [w, h], [0.0, h]])
    return Figure(w, h, outline, closed=False, ref_x=w)


def ellipse(sx: float, sy: float) -> Figure:
    rx, ry = ELLIPSE_RX * sx, ELLIPSE_RY * sy
    return Figure(2 * rx, 2 * ry, radii=(rx, ry))


FIGURES: Dict[GeometryKind, Callable[[float, float], Figure]] = {
    GeometryKind.TRIANGLE: triangle,
    GeometryKind.REVERSE_TRIANGLE: reverse_triangle,
    GeometryKind.SQUARE: square,
    GeometryKind.TURNED_SQUARE: turned_square,
    GeometryKind.RHOMBUS: rhombus,
    GeometryKind.DISK: disk,
    GeometryKind.BAR: bar,
    GeometryKind.RECTANGLE: rectangle,
    GeometryKind.STEALTH: stealth,
    GeometryKind.KITE: kite,
    GeometryKind.BRACKET: bracket,
    GeometryKind.ELLIPSE: ellipse,
}


def format_number(value: float, places: int) -> str:
    """Plain decimal, rounded to `places`, integral values without a point."""
    return ExactDecimal.create(float(value)).to_svg(places)


def path_data(points: np.ndarray, closed: bool, places: int) -> str:
    """SVG path data 'Mx,y Lx,y ... z' for a polygon or polyline."""
    commands = []
    for index, (x, y) in enumerate(points):
        op = "M" if index == 0 else "L"
        commands.append(f"{op}{format_number(x, places)},{format_number(y, places)}")
    if closed:
        commands.append("z")
    return " ".join(commands)


def build_marker(
    canonical: Canonical,
    marker_id: str,
    scale: Tuple[float, float],
    padding: float,
    fill: Optional[str],
    stroke: Optional[str],
    places: int,
) -> MarkerGeometry:
    """Compute the marker definition of one decoration.

    Args:
        canonical: Canonical type (selects the figure)
        marker_id: Id for the <marker> element
        scale: (width, height) scale factors
        padding: Space added around the figure on each side
        fill: Fill color (None to omit)
        stroke: Stroke color (None to omit)
        places: Decimal places of formatted coordinates

    Returns:
        MarkerGeometry ready for serialization
    """
    figure = FIGURES[canonical.kind](float(scale[0]), float(scale[1]))

    def fmt(value: float) -> str:
        return format_number(value, places)

    if figure.radii is not None:
        rx, ry = figure.radii
        cx, cy = rx + padding, ry + padding
        if math.isclose(rx, ry):
            primitive = MarkerPrimitive(
                "circle", (("cx", fmt(cx)), ("cy", fmt(cy)), ("r", fmt(rx))),
            )
        else:
            primitive = MarkerPrimitive(
                "ellipse",
                (("cx", fmt(cx)), ("cy", fmt(cy)), ("rx", fmt(rx)), ("ry", fmt(ry))),
            )
    else:
        padded = figure.outline + padding
        primitive = MarkerPrimitive("path", (("d", path_data(padded, figure.closed, places)),))

    ref_x = figure.width / 2 if figure.ref_x is None else figure.ref_x
    return MarkerGeometry(
        type_name=canonical.name,
        marker_id=marker_id,
        view_box=(fmt(figure.width + 2 * padding), fmt(figure.height + 2 * padding)),
        ref=(fmt(ref_x + padding), fmt(figure.height / 2 + padding)),
        primitive=primitive,
        fill=fill,
        stroke=stroke,
        fill_opacity="0" if canonical.transparent else None,
    )
