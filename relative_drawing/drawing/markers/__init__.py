"""Line decoration markers: types, figure geometry and the decoration classes."""

from relative_drawing.drawing.markers.geometry import (
    MarkerGeometry,
    MarkerPrimitive,
    build_marker,
)
from relative_drawing.drawing.markers.line_ending import (
    Arrowhead,
    LineEnding,
    next_decoration_id,
)
from relative_drawing.drawing.markers.types import (
    Canonical,
    GeometryKind,
    LineEndingType,
    canonicalize,
)

__all__ = [
    "Arrowhead",
    "Canonical",
    "GeometryKind",
    "LineEnding",
    "LineEndingType",
    "MarkerGeometry",
    "MarkerPrimitive",
    "build_marker",
    "canonicalize",
    "next_decoration_id",
]
