"""Lattice geometry types for traced outlines.

This module defines the types produced by the tracing pipeline:
- LatticePoint: An integer point on pixel boundaries
- Edge: A normalized unit edge between two lattice points
- Path: A closed loop of lattice points
- GlyphOutline: All resolved paths of one glyph cell

Coordinates are in the cell's grid space: x grows to the right, y grows
downward, and the lattice is one unit larger than the pixel grid in each axis.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True, order=True)
class LatticePoint:
    """A point on the pixel-boundary lattice.

    Ordered lexicographically by (x, y), which is the order used to
    normalize edges.
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass(frozen=True, slots=True, order=True)
class Edge:
    """An axis-aligned unit edge with ``start < end``.

    Use ``Edge.between`` to create edges; it normalizes endpoint order so
    that an edge emitted from either side compares equal.
    """

    start: LatticePoint
    end: LatticePoint

    @classmethod
    def between(cls, a: LatticePoint, b: LatticePoint) -> "Edge":
        """Create the canonical edge joining two adjacent lattice points.

        Raises:
            ValueError: If the points are not one unit apart along one axis
        """
        if abs(a.x - b.x) + abs(a.y - b.y) != 1:
            raise ValueError(f"{a} and {b} are not unit-distance lattice neighbours")
        if b < a:
            a, b = b, a
        return cls(a, b)


@dataclass(frozen=True, slots=True)
class Path:
    """A closed polygonal loop of lattice points.

    ``points[0] == points[-1]`` always holds, so a unit square is stored as
    five points. Signed area follows the shoelace formula with y measured
    downward: outer contours are negative and holes are positive once
    winding has been resolved.

    Attributes:
        points: Closed sequence of lattice points
        forced: True if the stitcher had to close this loop itself
    """

    points: tuple[LatticePoint, ...]
    forced: bool = field(default=False)

    def __post_init__(self) -> None:
        if len(self.points) <= 2:
            raise ValueError(f"A path needs more than 2 points, got {len(self.points)}")
        if self.points[0] != self.points[-1]:
            raise ValueError("A path must end at its first point")

    @property
    def vertices(self) -> tuple[LatticePoint, ...]:
        """Points without the repeated closing point."""
        return self.points[:-1]

    @property
    def point_count(self) -> int:
        """Number of distinct vertices."""
        return len(self.points) - 1

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Returns:
            Signed area; 0.0 for degenerate loops
        """
        vertices = self.vertices
        n = len(vertices)
        if n < 3:
            return 0.0

        area = 0
        for i in range(n):
            j = (i + 1) % n
            area += vertices[i].x * vertices[j].y
            area -= vertices[j].x * vertices[i].y

        return area / 2.0

    def sample_point(self) -> tuple[float, float]:
        """Representative point used for nesting tests.

        The midpoint of the first edge. Unlike a vertex, an edge midpoint
        can never lie on another loop of the same cell.
        """
        a, b = self.points[0], self.points[1]
        return ((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)

    def reversed(self) -> "Path":
        """Return the same loop traversed in the opposite direction."""
        return Path(points=tuple(reversed(self.points)), forced=self.forced)

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Bounding box as (min_x, min_y, max_x, max_y)."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_tuples(self) -> list[tuple[int, int]]:
        """Points as plain (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"points": self.to_tuples(), "forced": self.forced}

    @classmethod
    def from_tuples(cls, points: list[tuple[int, int]], forced: bool = False) -> "Path":
        """Build a path from (x, y) tuples."""
        return cls(points=tuple(LatticePoint(x, y) for x, y in points), forced=forced)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary."""
        return cls.from_tuples([tuple(p) for p in data["points"]], forced=data.get("forced", False))


@dataclass(frozen=True, slots=True)
class GlyphOutline:
    """The resolved outline of one glyph cell.

    Attributes:
        paths: Closed loops with winding already resolved
    """

    paths: tuple[Path, ...] = ()

    def is_empty(self) -> bool:
        """True when the cell produced no path."""
        return len(self.paths) == 0

    @property
    def contour_count(self) -> int:
        """Number of contours."""
        return len(self.paths)

    @property
    def point_count(self) -> int:
        """Total number of distinct vertices over all contours."""
        return sum(path.point_count for path in self.paths)

    @property
    def forced_closures(self) -> int:
        """Number of paths the stitcher had to force closed."""
        return sum(1 for path in self.paths if path.forced)

    def outer_paths(self) -> list[Path]:
        """Paths with negative signed area (outer contours)."""
        return [path for path in self.paths if path.signed_area() < 0]

    def hole_paths(self) -> list[Path]:
        """Paths with positive signed area (holes)."""
        return [path for path in self.paths if path.signed_area() > 0]
