"""Glyph and sheet layer representations.

A ``SheetLayer`` is one named alpha plane of the decoded sprite sheet; a
``TracedGlyph`` is the outline traced from one of its cells together with the
bookkeeping needed to place it in the font.
"""

from dataclasses import dataclass
from typing import Any

from sheetfont.domain.outline import GlyphOutline


def glyph_name_for(codepoint: int) -> str:
    """Production glyph name for a codepoint (``uni0041``, ``u1F600``)."""
    if codepoint <= 0xFFFF:
        return f"uni{codepoint:04X}"
    return f"u{codepoint:05X}"


@dataclass(frozen=True)
class SheetLayer:
    """A single named layer of a sprite sheet.

    Attributes:
        name: Layer name as stored in the sheet
        alpha: 2-D uint8 array (sheet height x sheet width) of alpha values
    """

    name: str
    alpha: Any

    @property
    def width(self) -> int:
        """Layer width in pixels."""
        return int(self.alpha.shape[1])

    @property
    def height(self) -> int:
        """Layer height in pixels."""
        return int(self.alpha.shape[0])


@dataclass
class TracedGlyph:
    """A glyph traced from one sheet cell.

    Attributes:
        codepoint: Unicode code point the glyph is mapped to
        layer: Name of the layer the cell came from
        row: Cell row within the layer
        col: Cell column within the layer
        outline: Resolved outline contours in cell lattice coordinates
        column_extent: Leftmost and rightmost inked column of the cell
    """

    codepoint: int
    layer: str
    row: int
    col: int
    outline: GlyphOutline
    column_extent: tuple[int, int] | None

    @property
    def name(self) -> str:
        """Glyph name used in the font's glyph order."""
        return glyph_name_for(self.codepoint)

    @property
    def point_count(self) -> int:
        """Total number of outline points."""
        return self.outline.point_count

    @property
    def contour_count(self) -> int:
        """Number of outline contours."""
        return self.outline.contour_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for reporting."""
        return {
            "codepoint": self.codepoint,
            "name": self.name,
            "layer": self.layer,
            "row": self.row,
            "col": self.col,
            "contours": self.contour_count,
            "points": self.point_count,
        }
