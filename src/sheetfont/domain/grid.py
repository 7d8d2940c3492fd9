"""Weight grid for a single glyph cell.

The grid is the boundary between the sheet decoder and the tracing core: a
rectangular, immutable array of non-negative weights where a cell is
foreground iff its weight is strictly positive.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable row-major weight grid.

    Attributes:
        width: Number of columns
        height: Number of rows
        weights: Row-major weights, ``len(weights) == width * height``
    """

    width: int
    height: int
    weights: tuple[float, ...]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {self.width}x{self.height}")
        if len(self.weights) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} weights, got {len(self.weights)}"
            )

    @property
    def cell_count(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def index(self, x: int, y: int) -> int:
        """Row-major index of cell (x, y)."""
        return y * self.width + x

    def position(self, index: int) -> tuple[int, int]:
        """Inverse of ``index``: (x, y) of a cell index."""
        return index % self.width, index // self.width

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a cell of the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def weight(self, x: int, y: int) -> float:
        """Weight at (x, y); cells outside the grid have weight 0."""
        if not self.in_bounds(x, y):
            return 0.0
        return self.weights[y * self.width + x]

    def is_foreground(self, x: int, y: int) -> bool:
        """Check whether (x, y) is a foreground cell."""
        return self.weight(x, y) > 0

    def is_empty(self) -> bool:
        """Check whether the grid has no foreground cell."""
        return not any(w > 0 for w in self.weights)

    def column_extent(self) -> tuple[int, int] | None:
        """Leftmost and rightmost foreground columns.

        Returns:
            (min_x, max_x), or None when the grid has no foreground cell
        """
        columns = [
            x
            for y in range(self.height)
            for x in range(self.width)
            if self.weights[y * self.width + x] > 0
        ]
        if not columns:
            return None
        return min(columns), max(columns)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Grid":
        """Build a grid from a list of equally long rows.

        Raises:
            ValueError: If rows have different lengths
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        weights: list[float] = []
        for row in rows:
            if len(row) != width:
                raise ValueError("All rows must have the same length")
            weights.extend(float(w) for w in row)
        return cls(width=width, height=height, weights=tuple(weights))

    @classmethod
    def from_ascii(cls, text: str, foreground: str = "#") -> "Grid":
        """Build a grid from a picture like ``"-#-\\n###"``.

        Blank lines and surrounding whitespace are ignored. Characters in
        ``foreground`` become weight 1.0, everything else 0.0.
        """
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        rows: list[list[float]] = [
            [1.0 if ch in foreground else 0.0 for ch in line] for line in lines
        ]
        return cls.from_rows(rows)

    @classmethod
    def from_alpha(cls, alpha: Any, x0: int, y0: int, width: int, height: int) -> "Grid":
        """Sample one cell out of a sheet-sized alpha channel.

        Args:
            alpha: 2-D uint8 array (rows x columns) of alpha values
            x0: Left pixel of the cell on the sheet
            y0: Top pixel of the cell on the sheet
            width: Cell width
            height: Cell height

        Returns:
            Grid with weights ``alpha / 255``; pixels beyond the sheet are 0
        """
        sheet_height, sheet_width = alpha.shape[:2]
        weights: list[float] = []
        for y in range(y0, y0 + height):
            for x in range(x0, x0 + width):
                if 0 <= x < sheet_width and 0 <= y < sheet_height:
                    weights.append(int(alpha[y, x]) / 255.0)
                else:
                    weights.append(0.0)
        return cls(width=width, height=height, weights=tuple(weights))

    def rows(self) -> Iterable[tuple[float, ...]]:
        """Iterate the grid row by row."""
        for y in range(self.height):
            yield self.weights[y * self.width : (y + 1) * self.width]
