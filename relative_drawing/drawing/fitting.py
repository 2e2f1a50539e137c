"""
Scale fitting: from implicit layout to explicit pixels.

Per axis every space-occupying shape contributes a span [low, high] of
AxisOffsets (implicit units plus unscaled explicit pixels). Under a ratio r
the content extent is

    max(high.implicit * r + high.explicit) - min(low.implicit * r + low.explicit)

and the largest r for which it fits the available size W is the minimum over
span pairs (hi, lo) with positive slope hi.implicit - lo.implicit of

    (W - (hi.explicit - lo.explicit)) / (hi.implicit - lo.implicit)

Without explicit gaps this reduces to W / implicit extent. The drawing ratio
is the smaller of the horizontal and vertical ratios over the dimensions that
are set; contents are then centered in the leftover whitespace.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from relative_drawing import config
from relative_drawing.geometry.box import ShapeGeometry
from relative_drawing.graph.adjacency import Axis, AxisOffset
from relative_drawing.numeric.exact_decimal import ExactDecimal, HALF, ONE, ZERO

if TYPE_CHECKING:
    from relative_drawing.shapes.shape import Shape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """Extent of one shape along one axis."""
    low: AxisOffset
    high: AxisOffset

    @classmethod
    def around(cls, center: AxisOffset, half: ExactDecimal) -> 'Span':
        offset = AxisOffset(half, ZERO)
        return cls(center - offset, center + offset)


def shape_spans(shapes: Iterable['Shape'], axis: Axis) -> List[Span]:
    """Spans of the space-occupying shapes along `axis`."""
    spans = []
    for shape in shapes:
        graph = shape.graph
        node = graph.node(shape.handle)
        if not node.occupies_space:
            continue
        center = graph.positions(axis)[shape.handle]
        spans.append(Span.around(center, node.half_extent(axis)))
    return spans


def implicit_extent(spans: List[Span]) -> ExactDecimal:
    """Implicit bounding-box extent; 1 when there is nothing to measure."""
    if not spans:
        return ONE
    high = max(span.high.implicit for span in spans)
    low = min(span.low.implicit for span in spans)
    return high - low


def _has_explicit_offsets(spans: List[Span]) -> bool:
    return any(
        not span.low.explicit.is_zero() or not span.high.explicit.is_zero()
        for span in spans
    )


def fit_ratio(
    spans: List[Span],
    available: ExactDecimal,
    precision: int,
) -> Optional[ExactDecimal]:
    """Largest ratio at which `spans` fit in `available` explicit units.

    Args:
        spans: Spans along one axis
        available: Explicit size of the drawing along that axis
        precision: Significant digits of the division

    Returns:
        The ratio, or None if the axis does not constrain it (every span has
        zero implicit extent)
    """
    if not spans:
        return available.div(ONE, precision)

    if not _has_explicit_offsets(spans):
        extent = implicit_extent(spans)
        if extent.is_zero():
            return None
        return available.div(extent, precision)

    best: Optional[ExactDecimal] = None
    for upper in spans:
        for lower in spans:
            slope = upper.high.implicit - lower.low.implicit
            if slope <= 0:
                continue
            intercept = upper.high.explicit - lower.low.explicit
            candidate = (available - intercept).div(slope, precision)
            if best is None or candidate < best:
                best = candidate
    return best


def content_bounds(spans: List[Span], ratio: ExactDecimal) -> Tuple[ExactDecimal, ExactDecimal]:
    """(low, high) explicit extent of the spans under `ratio`."""
    if not spans:
        return ZERO, ZERO
    low = min(span.low.at(ratio) for span in spans)
    high = max(span.high.at(ratio) for span in spans)
    return low, high


@dataclass(frozen=True)
class AxisFrame:
    """Maps unshifted explicit coordinates of one axis into the canvas.

    Attributes:
        origin: Content edge mapped to `margin` (low edge, or high edge when
            the axis is flipped)
        margin: Whitespace before the content
        flipped: True for the vertical axis (implicit y up, SVG y down)
    """
    origin: ExactDecimal
    margin: ExactDecimal
    flipped: bool = False

    def place(self, value: ExactDecimal) -> ExactDecimal:
        if self.flipped:
            return self.origin - value + self.margin
        return value - self.origin + self.margin


def axis_frame(
    spans: List[Span],
    ratio: ExactDecimal,
    requested: Optional[ExactDecimal],
    flipped: bool,
) -> Tuple[AxisFrame, ExactDecimal]:
    """Frame for one axis and the explicit size of the canvas along it.

    A requested size centers the content in the leftover whitespace; without
    one the canvas is exactly the content extent.
    """
    low, high = content_bounds(spans, ratio)
    extent = high - low
    size = extent if requested is None else requested
    margin = (size - extent) * HALF
    origin = high if flipped else low
    return AxisFrame(origin, margin, flipped), size


class Resolution:
    """Explicit layout of one drawing state.

    Geometry is computed per shape on first request and memoized; a new
    Resolution is built whenever the drawing's cache token changes.

    Attributes:
        ratio: Explicit units per implicit unit
        width: Explicit canvas width
        height: Explicit canvas height
        natural: True for natural-size rendering (no explicit dimensions)
    """

    def __init__(
        self,
        ratio: ExactDecimal,
        width: ExactDecimal,
        height: ExactDecimal,
        x_frame: AxisFrame,
        y_frame: AxisFrame,
        natural: bool = False,
    ):
        self.ratio = ratio
        self.width = width
        self.height = height
        self.x_frame = x_frame
        self.y_frame = y_frame
        self.natural = natural
        self._geometry: Dict[int, ShapeGeometry] = {}

    def __repr__(self) -> str:
        return (
            f"Resolution(ratio={self.ratio}, width={self.width}, "
            f"height={self.height}, natural={self.natural})"
        )

    def box(self, shape: 'Shape') -> ShapeGeometry:
        """Bounding box of a shape from its resolved graph position."""
        graph = shape.graph
        node = graph.node(shape.handle)
        cx = graph.positions(Axis.HORIZONTAL)[shape.handle]
        cy = graph.positions(Axis.VERTICAL)[shape.handle]
        return ShapeGeometry(
            x=self.x_frame.place(cx.at(self.ratio)),
            y=self.y_frame.place(cy.at(self.ratio)),
            width=node.width * self.ratio,
            height=node.height * self.ratio,
        )

    def geometry(self, shape: 'Shape') -> ShapeGeometry:
        """Explicit geometry of a shape (memoized)."""
        cached = self._geometry.get(shape.handle)
        if cached is None:
            cached = shape._resolve_geometry(self)
            self._geometry[shape.handle] = cached
        return cached

    @staticmethod
    def format(value: ExactDecimal) -> str:
        return ExactDecimal.create(value).to_svg(config.OUTPUT_DECIMAL_PLACES)


def resolve_layout(
    shapes: List['Shape'],
    width: Optional[ExactDecimal],
    height: Optional[ExactDecimal],
    natural: bool = False,
) -> Resolution:
    """Fit `shapes` into the requested dimensions.

    Args:
        shapes: Top-level shapes of a drawing
        width: Requested explicit width (None: not constraining)
        height: Requested explicit height (None: not constraining)
        natural: Use the configured natural unit as ratio and ignore the
            requested dimensions

    Returns:
        Resolution for the current constraints
    """
    x_spans = shape_spans(shapes, Axis.HORIZONTAL)
    y_spans = shape_spans(shapes, Axis.VERTICAL)

    if natural:
        ratio = ExactDecimal.create(config.NATURAL_UNIT)
        width = height = None
    else:
        precision = config.DIVISION_PRECISION
        candidates = []
        if width is not None:
            candidates.append(fit_ratio(x_spans, width, precision))
        if height is not None:
            candidates.append(fit_ratio(y_spans, height, precision))
        candidates = [ratio for ratio in candidates if ratio is not None]
        if candidates:
            ratio = min(candidates)
        else:
            logger.debug("No axis constrains the ratio; using 1")
            ratio = ONE
        if ratio < 0:
            logger.warning(
                "Explicit gaps exceed the requested size; clamping ratio %s to 0", ratio,
            )
            ratio = ZERO

    x_frame, canvas_width = axis_frame(x_spans, ratio, width, flipped=False)
    y_frame, canvas_height = axis_frame(y_spans, ratio, height, flipped=True)
    logger.debug(
        "Resolved layout: ratio=%s canvas=%sx%s (%d shapes)",
        ratio, canvas_width, canvas_height, len(shapes),
    )
    return Resolution(ratio, canvas_width, canvas_height, x_frame, y_frame, natural)
