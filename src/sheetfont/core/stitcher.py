"""Reassembly of boundary edges into closed loops.

The boundary set of a region is an undirected graph in which every vertex has
even degree. Walking unused edges from a seed edge until the walk returns to
its start yields one loop; repeating until every edge is used yields all of
the region's loops (the outer perimeter and one per hole).

Where a region touches itself diagonally, a lattice point has degree four and
a walk can pass it twice. The walk remembers where it visited each point and
splits the loop off at the second visit, so no emitted path is a figure-eight.
"""

from collections import defaultdict
from collections.abc import Iterable

from sheetfont.domain import Edge, LatticePoint, Path
from sheetfont.exceptions import MalformedBoundaryError

Adjacency = dict[LatticePoint, list[LatticePoint]]


def build_adjacency(edges: Iterable[Edge]) -> Adjacency:
    """Map every lattice point to its neighbours, in edge order."""
    adjacency: Adjacency = defaultdict(list)
    for edge in edges:
        adjacency[edge.start].append(edge.end)
        adjacency[edge.end].append(edge.start)
    return dict(adjacency)


def _take_edge(current: LatticePoint, adjacency: Adjacency, used: set[Edge]) -> LatticePoint | None:
    """Consume the first unused edge at ``current`` and return its far end."""
    for neighbour in adjacency.get(current, ()):
        edge = Edge.between(current, neighbour)
        if edge not in used:
            used.add(edge)
            return neighbour
    return None


def _walk(seed: Edge, adjacency: Adjacency, used: set[Edge], strict: bool) -> list[Path]:
    """Walk from a seed edge until the loop closes or the edges run out.

    Returns:
        Loops split off at revisited points, followed by the walk itself
    """
    start = seed.start
    current = seed.end
    points: list[LatticePoint] = [start]
    visits: dict[LatticePoint, int] = {start: 0}
    loops: list[Path] = []
    closed = False

    while True:
        if current == start:
            closed = True
            break

        revisit = visits.get(current)
        if revisit is None:
            visits[current] = len(points)
            points.append(current)
        else:
            sub_loop = points[revisit:] + [current]
            for point in points[revisit + 1 :]:
                del visits[point]
            del points[revisit + 1 :]
            if len(sub_loop) - 1 > 2:
                loops.append(Path(points=tuple(reversed(sub_loop))))

        following = _take_edge(current, adjacency, used)
        if following is None:
            break
        current = following

    if closed:
        if len(points) > 2:
            loops.append(Path(points=(*points, start)))
        return loops

    if strict:
        raise MalformedBoundaryError(start.to_tuple(), len(points))
    if len(points) > 2:
        loops.append(Path(points=(*points, start), forced=True))
    return loops


def stitch(edges: Iterable[Edge], strict: bool = False) -> list[Path]:
    """Stitch a region's boundary edges into closed paths.

    Edges are visited in sorted order so the result does not depend on set
    iteration order.

    Args:
        edges: Normalized boundary edges of one region
        strict: Raise on a walk that cannot return to its start instead of
            force-closing it

    Returns:
        Closed paths with more than two points. Force-closed paths are
        marked with ``forced=True``.

    Raises:
        MalformedBoundaryError: If ``strict`` and a walk does not close
    """
    ordered = sorted(set(edges))
    adjacency = build_adjacency(ordered)
    used: set[Edge] = set()
    paths: list[Path] = []

    for seed in ordered:
        if seed in used:
            continue
        used.add(seed)
        paths.extend(_walk(seed, adjacency, used, strict))

    return paths
