"""Constraint graph: arena of shape records, adjacency edges and the resolver."""

from relative_drawing.graph.adjacency import (
    Axis,
    AxisOffset,
    ConstraintGraph,
    Direction,
    Edge,
    NodeRecord,
    merge,
    next_handle,
)
from relative_drawing.graph.resolver import resolve_axis

__all__ = [
    "Axis",
    "AxisOffset",
    "ConstraintGraph",
    "Direction",
    "Edge",
    "NodeRecord",
    "merge",
    "next_handle",
    "resolve_axis",
]
