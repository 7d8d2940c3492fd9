"""Geometric operations on lattice loops.

This module provides:
- Point-in-polygon testing (ray casting algorithm)
- Collinear vertex merging for traced loops

All functions are pure and stateless.
"""

from collections.abc import Sequence

from sheetfont.domain import LatticePoint, Path


def point_in_polygon(x: float, y: float, polygon: Sequence[LatticePoint]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts the polygon
    edges that straddle the point's y coordinate with an intersection to the
    right of x. Odd number of crossings = inside, even = outside. A repeated
    closing vertex contributes a zero-length edge and is harmless.

    Args:
        x: X coordinate of the point to test
        y: Y coordinate of the point to test
        polygon: Vertices of the polygon

    Returns:
        True if the point is inside the polygon, False otherwise

    Examples:
        >>> square = [LatticePoint(0, 0), LatticePoint(2, 0), LatticePoint(2, 2), LatticePoint(0, 2)]
        >>> point_in_polygon(1.0, 1.0, square)
        True
        >>> point_in_polygon(3.0, 1.0, square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def _is_collinear(a: LatticePoint, b: LatticePoint, c: LatticePoint) -> bool:
    return (b.x - a.x) * (c.y - b.y) == (b.y - a.y) * (c.x - b.x)


def merge_collinear(path: Path) -> Path:
    """Drop vertices that sit in the middle of a straight run.

    The traced loops have a vertex at every lattice point they pass; this
    keeps only the corners. Area, orientation and closure are unchanged. The
    loop is rotated to start at a corner when its first vertex is dropped.

    Args:
        path: Closed loop to simplify

    Returns:
        Equivalent loop containing only corner vertices
    """
    vertices = path.vertices
    n = len(vertices)
    corners = [
        vertices[i]
        for i in range(n)
        if not _is_collinear(vertices[i - 1], vertices[i], vertices[(i + 1) % n])
    ]
    if len(corners) < 3 or len(corners) == n:
        return path
    return Path(points=(*corners, corners[0]), forced=path.forced)
