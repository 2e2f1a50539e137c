"""
Arena storage for the relative-position constraint graph.

Shapes are referred to by integer handles. A ConstraintGraph owns one
NodeRecord (implicit size) per handle and at most one Edge per handle and
axis; it never holds strong references to Shape objects, so graph logic can
be exercised with bare handles:

    graph = ConstraintGraph()
    graph.add_node(1, ONE, ONE)
    graph.add_node(2, ONE, ONE)
    graph.connect(2, Direction.RIGHT_OF, 1)
    graph.positions(Axis.HORIZONTAL)[2].implicit   # ExactDecimal('1')

Shapes start in a graph of their own. Connecting shapes from different
graphs merges the smaller graph into the larger; the absorbed graph forwards
to the survivor (see find()).

Every mutation bumps the generation carried in `token`, which drawings use as
a cache key.
"""

import itertools
import logging
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from relative_drawing.errors import UnsupportedOperationError
from relative_drawing.numeric.exact_decimal import ExactDecimal, HALF
from relative_drawing.numeric.measure import Measure

logger = logging.getLogger(__name__)

_handles = itertools.count(1)


def next_handle() -> int:
    """Allocate a process-unique node handle."""
    return next(_handles)


class Axis(Enum):
    """Layout axes."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def other(self) -> 'Axis':
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


class Direction(Enum):
    """Edge labels: where the source shape sits relative to its target.

    Implicit space has y growing upward, so ABOVE adds to y.
    """
    RIGHT_OF = ("right_of", Axis.HORIZONTAL, 1)
    LEFT_OF = ("left_of", Axis.HORIZONTAL, -1)
    ABOVE = ("above", Axis.VERTICAL, 1)
    BELOW = ("below", Axis.VERTICAL, -1)

    def __init__(self, label: str, axis: Axis, sign: int):
        self.label = label
        self.axis = axis
        self.sign = sign


@dataclass
class NodeRecord:
    """Implicit size of one shape.

    Attributes:
        width: Implicit width
        height: Implicit height
        occupies_space: False for shapes that never contribute to a drawing's
            extent (lines between ports or fixed points)
    """
    width: ExactDecimal
    height: ExactDecimal
    occupies_space: bool = True

    def half_extent(self, axis: Axis) -> ExactDecimal:
        size = self.width if axis is Axis.HORIZONTAL else self.height
        return size * HALF


@dataclass(frozen=True)
class Edge:
    """Directed adjacency: `source` is `direction` of `target`, `gap` apart."""
    source: int
    direction: Direction
    target: int
    gap: Measure

    @property
    def axis(self) -> Axis:
        return self.direction.axis


@dataclass(frozen=True)
class AxisOffset:
    """Position along one axis: implicit units plus unscaled explicit pixels.

    The explicit coordinate under a ratio r is `implicit * r + explicit`.
    """
    implicit: ExactDecimal
    explicit: ExactDecimal

    def __add__(self, other: 'AxisOffset') -> 'AxisOffset':
        return AxisOffset(self.implicit + other.implicit, self.explicit + other.explicit)

    def __sub__(self, other: 'AxisOffset') -> 'AxisOffset':
        return AxisOffset(self.implicit - other.implicit, self.explicit - other.explicit)

    def __neg__(self) -> 'AxisOffset':
        return AxisOffset(-self.implicit, -self.explicit)

    def at(self, ratio: ExactDecimal) -> ExactDecimal:
        return self.implicit * ratio + self.explicit

    @classmethod
    def zero(cls) -> 'AxisOffset':
        return cls(ExactDecimal(0), ExactDecimal(0))

    @classmethod
    def of(cls, measure: Measure) -> 'AxisOffset':
        if measure.is_explicit:
            return cls(ExactDecimal(0), measure.value)
        return cls(measure.value, ExactDecimal(0))


class ConstraintGraph:
    """Nodes and adjacency edges keyed by integer handles."""

    def __init__(self):
        self._nodes: Dict[int, NodeRecord] = {}
        self._edges: Dict[int, Dict[Axis, Edge]] = {}
        self._shapes: 'weakref.WeakValueDictionary[int, Any]' = weakref.WeakValueDictionary()
        self._generation = 0
        self._merged_into: Optional['ConstraintGraph'] = None
        self._positions: Dict[Axis, Dict[int, AxisOffset]] = {}
        self._positions_generation = -1

    # ------------------------------------------------------------------
    # Identity and versioning
    # ------------------------------------------------------------------

    def find(self) -> 'ConstraintGraph':
        """Return the graph currently holding this graph's nodes."""
        root = self
        while root._merged_into is not None:
            root = root._merged_into
        node = self
        while node._merged_into is not None and node._merged_into is not root:
            node._merged_into, node = root, node._merged_into
        return root

    @property
    def token(self) -> tuple:
        """Cache token identifying this graph's current state."""
        return (id(self), self._generation)

    def _touch(self) -> None:
        self._generation += 1

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(
        self,
        handle: int,
        width: ExactDecimal,
        height: ExactDecimal,
        occupies_space: bool = True,
        owner: Any = None,
    ) -> NodeRecord:
        """Register a node; `owner` (usually the Shape) is held weakly."""
        if handle in self._nodes:
            raise ValueError(f"Handle {handle} is already registered")
        record = NodeRecord(ExactDecimal.create(width), ExactDecimal.create(height), occupies_space)
        self._nodes[handle] = record
        if owner is not None:
            self._shapes[handle] = owner
        self._touch()
        return record

    def node(self, handle: int) -> NodeRecord:
        try:
            return self._nodes[handle]
        except KeyError:
            raise KeyError(f"Handle {handle} is not in this graph") from None

    def owner(self, handle: int) -> Optional[Any]:
        """Object registered for a handle, if it is still alive."""
        return self._shapes.get(handle)

    def set_size(
        self,
        handle: int,
        width: Optional[ExactDecimal] = None,
        height: Optional[ExactDecimal] = None,
    ) -> None:
        record = self.node(handle)
        if width is not None:
            record.width = ExactDecimal.create(width)
        if height is not None:
            record.height = ExactDecimal.create(height)
        self._touch()

    def set_occupies_space(self, handle: int, occupies_space: bool) -> None:
        self.node(handle).occupies_space = occupies_space
        self._touch()

    def handles(self) -> List[int]:
        """All node handles in ascending (creation) order."""
        return sorted(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return handle in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def connect(
        self,
        source: int,
        direction: Direction,
        target: int,
        gap: Optional[Measure] = None,
    ) -> Edge:
        """Record `source` as `direction` of `target`.

        Replaces any earlier edge of `source` on the same axis.

        Raises:
            UnsupportedOperationError: If source and target are the same node
            KeyError: If either handle is not in this graph
        """
        if source == target:
            raise UnsupportedOperationError("A shape cannot be adjacent to itself")
        self.node(source)
        self.node(target)
        edge = Edge(source, direction, target, Measure.coerce(gap))
        slots = self._edges.setdefault(source, {})
        previous = slots.get(direction.axis)
        if previous is not None and previous != edge:
            logger.debug(
                "Replacing %s edge %d -> %d with %s -> %d",
                previous.direction.label, source, previous.target,
                direction.label, target,
            )
        slots[direction.axis] = edge
        self._touch()
        return edge

    def edge(self, source: int, axis: Axis) -> Optional[Edge]:
        return self._edges.get(source, {}).get(axis)

    def edges(self, axis: Optional[Axis] = None) -> Iterator[Edge]:
        """Iterate edges in source-handle order, optionally for one axis."""
        for source in sorted(self._edges):
            for edge_axis in (Axis.HORIZONTAL, Axis.VERTICAL):
                if axis is not None and edge_axis is not axis:
                    continue
                edge = self._edges[source].get(edge_axis)
                if edge is not None:
                    yield edge

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def absorb(self, other: 'ConstraintGraph') -> None:
        """Move every node and edge of `other` into this graph."""
        if other is self:
            return
        if other._merged_into is not None:
            raise ValueError("Cannot absorb a graph that was already merged")
        overlap = set(self._nodes) & set(other._nodes)
        if overlap:
            raise ValueError(f"Graphs share handles: {sorted(overlap)}")
        self._nodes.update(other._nodes)
        self._edges.update(other._edges)
        for handle, owner in list(other._shapes.items()):
            self._shapes[handle] = owner
        other._nodes = {}
        other._edges = {}
        other._shapes = weakref.WeakValueDictionary()
        other._positions = {}
        other._merged_into = self
        other._touch()
        self._touch()
        logger.debug("Merged constraint graph: %d nodes", len(self._nodes))

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def positions(self, axis: Axis) -> Dict[int, AxisOffset]:
        """Implicit center of every node along `axis` (memoized per generation)."""
        if self._positions_generation != self._generation:
            self._positions = {}
            self._positions_generation = self._generation
        if axis not in self._positions:
            from relative_drawing.graph.resolver import resolve_axis
            self._positions[axis] = resolve_axis(self, axis)
        return self._positions[axis]


def merge(first: ConstraintGraph, second: ConstraintGraph) -> ConstraintGraph:
    """Merge two graphs (smaller into larger) and return the survivor."""
    first = first.find()
    second = second.find()
    if first is second:
        return first
    if len(second) > len(first):
        first, second = second, first
    first.absorb(second)
    return first
