"""
Line decorations: LineEnding and the legacy Arrowhead.

Every decoration takes a process-unique number when created. LineEnding
marker ids are "<CANONICAL>-<n>"; the legacy Arrowhead keeps the bare
canonical name. Each instance emits its own <marker> definition, even when
another instance has identical geometry.
"""

import itertools
import logging
from typing import FrozenSet, Optional, Union

from relative_drawing import config
from relative_drawing.drawing.markers.geometry import MarkerGeometry, build_marker
from relative_drawing.drawing.markers.types import (
    Canonical,
    GeometryKind,
    LineEndingType,
    canonicalize,
    parse_type,
)
from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.numeric.exact_decimal import Number

logger = logging.getLogger(__name__)

_decoration_ids = itertools.count()


def next_decoration_id() -> int:
    """Allocate the next process-unique decoration number."""
    return next(_decoration_ids)


class LineEnding:
    """Marker drawn at one end of a line.

    Args:
        type_: Decoration type (enum member or name, aliases accepted)
        width: Horizontal scale factor of the figure
        height: Vertical scale factor of the figure

    Attributes:
        fill: Fill color; None uses the type default (black, or white for
            hollow types)
        stroke: Stroke color; None uses the default (black), "" omits it

    Raises:
        UnsupportedOperationError: If the type is unknown
    """

    padding = 1.0

    def __init__(
        self,
        type_: Union[LineEndingType, str] = LineEndingType.TRIANGLE,
        width: Number = 1.0,
        height: Number = 1.0,
    ):
        self.type = parse_type(type_)
        self._canonical = self._check_supported(canonicalize(self.type))
        self.width = float(width)
        self.height = float(height)
        self.fill: Optional[str] = None
        self.stroke: Optional[str] = None
        self.unique_id = next_decoration_id()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type.name}, id={self.unique_id})"

    def _check_supported(self, canonical: Canonical) -> Canonical:
        return canonical

    @property
    def canonical_name(self) -> str:
        return self._canonical.name

    @property
    def is_hollow(self) -> bool:
        return self._canonical.hollow

    @property
    def marker_id(self) -> str:
        return f"{self._canonical.name}-{self.unique_id}"

    def set_size(self, size: Number) -> None:
        """Scale the figure uniformly."""
        self.width = float(size)
        self.height = float(size)

    def default_fill(self) -> str:
        return config.LINE_ENDING_OPEN_FILL if self.is_hollow else config.LINE_ENDING_FILL

    def default_stroke(self) -> Optional[str]:
        return config.LINE_ENDING_STROKE

    def geometry(self) -> MarkerGeometry:
        """Marker definition for the current type, size and colors."""
        fill = self.fill if self.fill is not None else self.default_fill()
        stroke = self.stroke if self.stroke is not None else self.default_stroke()
        return build_marker(
            self._canonical,
            self.marker_id,
            scale=(self.width, self.height),
            padding=self.padding,
            fill=fill or None,
            stroke=stroke or None,
            places=config.MARKER_DECIMAL_PLACES,
        )


class Arrowhead(LineEnding):
    """Legacy decoration: unpadded, red, limited to four figures.

    Only the TRIANGLE, BOX, DIAMOND and DOT groups (and their aliases) are
    available; any other type raises UnsupportedOperationError.
    """

    padding = 0.0

    SUPPORTED_KINDS: FrozenSet[GeometryKind] = frozenset({
        GeometryKind.TRIANGLE,
        GeometryKind.SQUARE,
        GeometryKind.TURNED_SQUARE,
        GeometryKind.DISK,
    })

    def _check_supported(self, canonical: Canonical) -> Canonical:
        if canonical.kind not in self.SUPPORTED_KINDS or canonical.hollow:
            raise UnsupportedOperationError(f"unsupported decoration type: {self.type.name}")
        return canonical

    @property
    def marker_id(self) -> str:
        return self._canonical.name

    def default_fill(self) -> str:
        return config.ARROWHEAD_FILL

    def default_stroke(self) -> Optional[str]:
        return None
