"""
Implicit position resolution for a constraint graph.

For one axis:

1. Edges on that axis are relative offsets between two centers:
   source = target + sign * (half(source) + half(target) + gap).
   They are followed in both directions, so `a.set_right_of(b)` and
   `b.set_left_of(a)` describe the same constraint.
2. Each connected component of those edges is laid out breadth-first from
   its lowest handle, which sits at the origin.
3. Components are then aligned through edges of the other axis: a shape
   placed right of another shares its vertical center unless a vertical edge
   says otherwise.

An edge that contradicts positions already assigned inside a component is
ignored and logged.
"""

import logging
from collections import deque
from typing import Dict, List, Tuple

from relative_drawing.graph.adjacency import Axis, AxisOffset, ConstraintGraph
from relative_drawing.numeric.exact_decimal import ZERO

logger = logging.getLogger(__name__)

Adjacency = Dict[int, List[Tuple[int, AxisOffset]]]


def edge_offsets(graph: ConstraintGraph, axis: Axis) -> Adjacency:
    """Undirected offset lists: neighbour handle and neighbour - node offset."""
    adjacency: Adjacency = {handle: [] for handle in graph.handles()}
    for edge in graph.edges(axis):
        source = graph.node(edge.source)
        target = graph.node(edge.target)
        halves = source.half_extent(axis) + target.half_extent(axis)
        spacing = AxisOffset(halves, ZERO) + AxisOffset.of(edge.gap)
        delta = spacing if edge.direction.sign > 0 else -spacing
        adjacency[edge.target].append((edge.source, delta))
        adjacency[edge.source].append((edge.target, -delta))
    for neighbours in adjacency.values():
        neighbours.sort(key=lambda item: item[0])
    return adjacency


def alignment_links(graph: ConstraintGraph, axis: Axis) -> Dict[int, List[int]]:
    """Undirected links from edges on the other axis (centers aligned)."""
    links: Dict[int, List[int]] = {handle: [] for handle in graph.handles()}
    for edge in graph.edges(axis.other):
        links[edge.target].append(edge.source)
        links[edge.source].append(edge.target)
    for neighbours in links.values():
        neighbours.sort()
    return links


def _layout_components(
    handles: List[int],
    adjacency: Adjacency,
) -> Tuple[Dict[int, AxisOffset], Dict[int, int]]:
    """Breadth-first placement of each component relative to its root."""
    positions: Dict[int, AxisOffset] = {}
    component_of: Dict[int, int] = {}
    for root in handles:
        if root in positions:
            continue
        positions[root] = AxisOffset.zero()
        component_of[root] = root
        queue = deque([root])
        while queue:
            current = queue.popleft()
            for neighbour, delta in adjacency[current]:
                expected = positions[current] + delta
                if neighbour not in positions:
                    positions[neighbour] = expected
                    component_of[neighbour] = root
                    queue.append(neighbour)
                elif neighbour > current and positions[neighbour] != expected:
                    logger.warning(
                        "Ignoring conflicting constraint between shapes %d and %d",
                        current, neighbour,
                    )
    return positions, component_of


def _align_components(
    handles: List[int],
    positions: Dict[int, AxisOffset],
    component_of: Dict[int, int],
    links: Dict[int, List[int]],
) -> Dict[int, AxisOffset]:
    """Shift whole components so cross-axis neighbours share a center."""
    members: Dict[int, List[int]] = {}
    for handle in handles:
        members.setdefault(component_of[handle], []).append(handle)

    shift: Dict[int, AxisOffset] = {}
    for start in sorted(members):
        if start in shift:
            continue
        shift[start] = AxisOffset.zero()
        queue = deque([start])
        while queue:
            component = queue.popleft()
            for member in members[component]:
                for linked in links[member]:
                    other = component_of[linked]
                    if other in shift:
                        continue
                    # linked center + shift(other) == member center + shift(component)
                    shift[other] = positions[member] + shift[component] - positions[linked]
                    queue.append(other)

    return {
        handle: positions[handle] + shift[component_of[handle]]
        for handle in handles
    }


def resolve_axis(graph: ConstraintGraph, axis: Axis) -> Dict[int, AxisOffset]:
    """Implicit center of every node of `graph` along `axis`.

    Args:
        graph: Constraint graph (not a forwarded one)
        axis: Axis to resolve

    Returns:
        Mapping handle -> AxisOffset of the node center
    """
    handles = graph.handles()
    positions, component_of = _layout_components(handles, edge_offsets(graph, axis))
    resolved = _align_components(handles, positions, component_of, alignment_links(graph, axis))
    logger.debug(
        "Resolved %s positions: %d nodes, %d components",
        axis.value, len(resolved), len(set(component_of.values())),
    )
    return resolved
