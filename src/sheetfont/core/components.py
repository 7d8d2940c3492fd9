"""Connected-component grouping of foreground cells.

Foreground cells are partitioned into maximal 4-connected regions with a
disjoint-set forest. Region ids are assigned in first-encounter order of a
row-major scan so that the output is reproducible.
"""

from sheetfont.domain import Grid


class UnionFind:
    """Disjoint-set forest over ``size`` integer elements.

    Parents are stored in a flat list; ``find`` compresses paths iteratively
    and ``union`` links by rank.
    """

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, element: int) -> int:
        """Return the root representative of ``element``."""
        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        # Second pass: point every node on the way directly at the root
        while self._parent[element] != root:
            self._parent[element], element = root, self._parent[element]

        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets containing ``a`` and ``b``.

        Returns:
            True if two distinct sets were merged, False if already joined
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self._rank[root_a] < self._rank[root_b]:
            self._parent[root_a] = root_b
        elif self._rank[root_a] > self._rank[root_b]:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] += 1
        return True

    def connected(self, a: int, b: int) -> bool:
        """Check whether ``a`` and ``b`` are in the same set."""
        return self.find(a) == self.find(b)


def group_regions(grid: Grid) -> dict[int, tuple[int, ...]]:
    """Group foreground cells into 4-connected regions.

    Each foreground cell is joined with its right and bottom foreground
    neighbours; union-find symmetry yields full 4-connectivity. Cells that
    only touch diagonally stay in separate regions.

    Args:
        grid: Cell weight grid

    Returns:
        Mapping of region id to the sorted row-major indices of its cells.
        Ids start at 0 in first-encounter order. Empty if the grid has no
        foreground cell.
    """
    width, height = grid.width, grid.height
    if width == 0 or height == 0:
        return {}

    weights = grid.weights
    forest = UnionFind(width * height)

    for y in range(height):
        for x in range(width):
            index = y * width + x
            if weights[index] <= 0:
                continue
            if x + 1 < width and weights[index + 1] > 0:
                forest.union(index, index + 1)
            if y + 1 < height and weights[index + width] > 0:
                forest.union(index, index + width)

    root_to_id: dict[int, int] = {}
    members: list[list[int]] = []
    for index, weight in enumerate(weights):
        if weight <= 0:
            continue
        root = forest.find(index)
        region_id = root_to_id.get(root)
        if region_id is None:
            region_id = len(members)
            root_to_id[root] = region_id
            members.append([])
        members[region_id].append(index)

    return {region_id: tuple(cells) for region_id, cells in enumerate(members)}
