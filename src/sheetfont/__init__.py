"""Sheetfont - Convert pixel-art sprite sheets to TrueType fonts.

Sheetfont is a CLI tool that slices every ``U+XXXX`` layer of a sprite sheet
into fixed-size cells, traces each cell's alpha mask into pixel-exact outline
contours (holes included) and assembles the result into a TrueType font.

Example:
    $ sheetfont glyphs.aseprite --glyph-width=8 --glyph-height=8

This will create glyphs.ttf with one glyph per non-empty cell.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
