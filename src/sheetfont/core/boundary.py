"""Boundary extraction for connected regions.

Every foreground cell contributes the unit edges of its four sides that face
background or the outside of the grid. Edges are normalized so a side seen
from two cells collapses to one entry. Outer perimeters and hole perimeters
are emitted the same way; winding resolution tells them apart later.
"""

from collections.abc import Iterable

from sheetfont.domain import Edge, Grid, LatticePoint


def cell_boundary(grid: Grid, x: int, y: int) -> list[Edge]:
    """Unit edges of cell (x, y) that separate it from background.

    Args:
        grid: Cell weight grid
        x: Cell column
        y: Cell row

    Returns:
        Up to four normalized edges (top, bottom, left, right)
    """
    edges: list[Edge] = []

    # top
    if y == 0 or grid.weight(x, y - 1) <= 0:
        edges.append(Edge.between(LatticePoint(x, y), LatticePoint(x + 1, y)))
    # bottom
    if y == grid.height - 1 or grid.weight(x, y + 1) <= 0:
        edges.append(Edge.between(LatticePoint(x, y + 1), LatticePoint(x + 1, y + 1)))
    # left
    if x == 0 or grid.weight(x - 1, y) <= 0:
        edges.append(Edge.between(LatticePoint(x, y), LatticePoint(x, y + 1)))
    # right
    if x == grid.width - 1 or grid.weight(x + 1, y) <= 0:
        edges.append(Edge.between(LatticePoint(x + 1, y), LatticePoint(x + 1, y + 1)))

    return edges


def extract_boundary(grid: Grid, cells: Iterable[int]) -> frozenset[Edge]:
    """Compute the perimeter of one region.

    Args:
        grid: Cell weight grid
        cells: Row-major indices of the region's cells

    Returns:
        Set of unique edges on the region's outer and inner perimeters
    """
    edges: set[Edge] = set()
    for index in cells:
        x, y = grid.position(index)
        edges.update(cell_boundary(grid, x, y))
    return frozenset(edges)


def boundary_edges(grid: Grid, regions: dict[int, tuple[int, ...]]) -> dict[int, frozenset[Edge]]:
    """Extract the boundary set of every region.

    Args:
        grid: Cell weight grid
        regions: Output of ``group_regions``

    Returns:
        Mapping of region id to boundary set, in region id order
    """
    return {region_id: extract_boundary(grid, cells) for region_id, cells in regions.items()}
