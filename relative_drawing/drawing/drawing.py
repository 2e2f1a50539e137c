"""
Drawing: the top-level container that resolves and renders shapes.

    drawing = Drawing()
    a, b = Circle(), Circle()
    b.set_right_of(a)
    drawing.add(a)
    drawing.add(b)
    svg = drawing.render(100, 100)

Layout is resolved lazily. The result is cached behind a token built from the
drawing's own generation (bumped by add() and dimension changes) and the
generation of every constraint graph its shapes belong to (bumped by edge and
size changes), so reads never see stale geometry.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple, Union

from relative_drawing.drawing.fitting import (
    Resolution,
    implicit_extent,
    resolve_layout,
    shape_spans,
)
from relative_drawing.drawing.svg_renderer import render_svg
from relative_drawing.geometry.box import ShapeGeometry
from relative_drawing.graph.adjacency import Axis
from relative_drawing.logging_config import log_timing
from relative_drawing.numeric.exact_decimal import ExactDecimal, Number

if TYPE_CHECKING:
    from relative_drawing.shapes.shape import Shape

logger = logging.getLogger(__name__)

Dimension = Optional[Number]


def _dimension(value: Dimension, name: str) -> Optional[ExactDecimal]:
    if value is None:
        return None
    dimension = ExactDecimal.create(value)
    if dimension < 0:
        raise ValueError(f"Explicit {name} must be non-negative, got {dimension}")
    return dimension


class Drawing:
    """Insertion-ordered collection of top-level shapes with optional explicit size."""

    def __init__(self, width: Dimension = None, height: Dimension = None):
        self._contents: List['Shape'] = []
        self._members: Set[int] = set()
        self._explicit_width = _dimension(width, "width")
        self._explicit_height = _dimension(height, "height")
        self._generation = 0
        self._cache: Dict[bool, Tuple[tuple, Resolution]] = {}

    def __repr__(self) -> str:
        return (
            f"Drawing({len(self._contents)} shapes, "
            f"width={self._explicit_width}, height={self._explicit_height})"
        )

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    def add(self, shape: 'Shape') -> 'Shape':
        """Add a shape; adding the same shape again is a no-op."""
        if shape.handle in self._members:
            return shape
        self._contents.append(shape)
        self._members.add(shape.handle)
        shape._attach(self)
        self._generation += 1
        return shape

    @property
    def contents(self) -> Tuple['Shape', ...]:
        return tuple(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def __iter__(self) -> Iterator['Shape']:
        return iter(self._contents)

    def __contains__(self, shape: object) -> bool:
        return getattr(shape, 'handle', None) in self._members

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    def set_explicit_width(self, width: Number) -> None:
        self._explicit_width = _dimension(width, "width")
        self._generation += 1

    def set_explicit_height(self, height: Number) -> None:
        self._explicit_height = _dimension(height, "height")
        self._generation += 1

    def set_explicit_dimensions(self, width: Number, height: Number) -> None:
        """Set both explicit dimensions at once."""
        self._explicit_width = _dimension(width, "width")
        self._explicit_height = _dimension(height, "height")
        self._generation += 1

    @property
    def has_explicit_dimensions(self) -> bool:
        return self._explicit_width is not None or self._explicit_height is not None

    @property
    def explicit_width(self) -> Optional[ExactDecimal]:
        """Requested width, or the fitted content width when only the height is set."""
        if self._explicit_width is not None:
            return self._explicit_width
        if self._explicit_height is None:
            return None
        return self._resolve().width

    @property
    def explicit_height(self) -> Optional[ExactDecimal]:
        """Requested height, or the fitted content height when only the width is set."""
        if self._explicit_height is not None:
            return self._explicit_height
        if self._explicit_width is None:
            return None
        return self._resolve().height

    @property
    def ratio(self) -> Optional[ExactDecimal]:
        """Explicit units per implicit unit; None without explicit dimensions."""
        if not self.has_explicit_dimensions:
            return None
        return self._resolve().ratio

    @property
    def implicit_width(self) -> ExactDecimal:
        return implicit_extent(shape_spans(self._contents, Axis.HORIZONTAL))

    @property
    def implicit_height(self) -> ExactDecimal:
        return implicit_extent(shape_spans(self._contents, Axis.VERTICAL))

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _token(self) -> tuple:
        graphs = {}
        for shape in self._contents:
            graph = shape.graph
            graphs[id(graph)] = graph.token
        return (self._generation, tuple(graphs[key] for key in sorted(graphs)))

    def _resolve(self, natural: bool = False) -> Resolution:
        token = self._token()
        cached = self._cache.get(natural)
        if cached is not None and cached[0] == token:
            return cached[1]
        resolution = resolve_layout(
            self._contents, self._explicit_width, self._explicit_height, natural=natural,
        )
        self._cache[natural] = (token, resolution)
        return resolution

    def geometry_of(self, shape: 'Shape') -> Optional[ShapeGeometry]:
        """Explicit geometry of a shape, or None without explicit dimensions."""
        if not self.has_explicit_dimensions:
            return None
        return self._resolve().geometry(shape)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self, width: Dimension = None, height: Dimension = None) -> str:
        """Serialize the drawing as SVG.

        With `width`/`height` the explicit dimensions are set first. Without
        any explicit dimension the drawing renders at natural size (ratio
        NATURAL_UNIT) and its dimensions stay unset.

        Raises:
            UnsupportedOperationError: If a non-empty Text is rendered at
                natural size
        """
        if width is not None and height is not None:
            self.set_explicit_dimensions(width, height)
        elif width is not None:
            self.set_explicit_width(width)
        elif height is not None:
            self.set_explicit_height(height)

        natural = not self.has_explicit_dimensions
        with log_timing(logger, "Rendering drawing", level=logging.DEBUG,
                        shapes=len(self._contents), natural=natural):
            return render_svg(self._contents, self._resolve(natural))

    def write_to_file(
        self,
        path: Union[str, Path],
        width: Dimension = None,
        height: Dimension = None,
    ) -> Path:
        """Render and write the SVG as UTF-8.

        Returns:
            Path written
        """
        path = Path(path)
        svg = self.render(width, height)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding='utf-8')
        logger.info("Wrote %s (%d bytes)", path, len(svg.encode('utf-8')))
        return path
