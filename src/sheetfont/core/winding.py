"""Winding resolution for the loops of one glyph cell.

Every loop's nesting depth is the number of other loops of the same cell
that contain it. Even depth means the loop bounds ink (outer contour), odd
depth means it bounds a hole. Measured with the shoelace formula in grid
coordinates (y grows downward), outer contours must have negative signed
area and holes positive signed area; loops with the wrong sign are reversed.
"""

from collections.abc import Sequence

from sheetfont.core.geometry import point_in_polygon
from sheetfont.domain import Path


def nesting_depth(index: int, paths: Sequence[Path]) -> int:
    """Count the other paths whose interior contains ``paths[index]``.

    The test point is the path's sample point (first edge midpoint), which
    never lies on another loop of the cell.
    """
    x, y = paths[index].sample_point()
    depth = 0
    for other_index, other in enumerate(paths):
        if other_index == index or not other.points:
            continue
        if point_in_polygon(x, y, other.vertices):
            depth += 1
    return depth


def is_hole(depth: int) -> bool:
    """A path nested an odd number of times bounds a hole."""
    return depth % 2 == 1


def resolve_winding(paths: Sequence[Path]) -> list[Path]:
    """Orient every path according to its nesting parity.

    Depths are computed for all paths before any path is reversed. Resolving
    an already resolved set returns equal paths.

    Args:
        paths: All loops of one glyph cell, across regions

    Returns:
        New list with the same loops, reversed where needed
    """
    depths = [nesting_depth(i, paths) for i in range(len(paths))]
    resolved: list[Path] = []

    for path, depth in zip(paths, depths, strict=True):
        area = path.signed_area()
        if is_hole(depth):
            needs_reverse = area <= 0
        else:
            needs_reverse = area >= 0
        resolved.append(path.reversed() if needs_reverse else path)

    return resolved
