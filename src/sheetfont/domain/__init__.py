"""Domain models for sheetfont.

This module contains the core domain models representing glyph cells, traced
outlines and sheet layers. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of fontTools and image decoding details

Key classes:
- Grid: Weight grid of one glyph cell
- LatticePoint: Integer point on pixel boundaries
- Edge: Normalized unit edge
- Path: Closed loop of lattice points
- GlyphOutline: Resolved paths of one cell
- SheetLayer: Named alpha plane of a sprite sheet
- TracedGlyph: Traced cell ready for font assembly
"""

from sheetfont.domain.glyph import SheetLayer, TracedGlyph, glyph_name_for
from sheetfont.domain.grid import Grid
from sheetfont.domain.outline import Edge, GlyphOutline, LatticePoint, Path

__all__: list[str] = [
    "Edge",
    "GlyphOutline",
    "Grid",
    "LatticePoint",
    "Path",
    "SheetLayer",
    "TracedGlyph",
    "glyph_name_for",
]
