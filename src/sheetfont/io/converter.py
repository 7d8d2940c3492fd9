"""Converters between traced outlines and fontTools glyphs.

Traced paths live in the cell's lattice space (y grows downward, one unit per
pixel). Font space has y growing upward from the baseline and ``scale`` units
per pixel. Flipping y mirrors every loop, so contours are drawn in reverse
vertex order: the negative-area outer loops of the winding resolver become the
clockwise outer contours TrueType expects and holes become counter-clockwise.
"""

from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib.tables._g_l_y_f import Glyph as TTGlyph

from sheetfont.config import GlyphConfig
from sheetfont.domain import GlyphOutline, LatticePoint, TracedGlyph


def lattice_to_font(point: LatticePoint, config: GlyphConfig, x_shift: int = 0) -> tuple[int, int]:
    """Map a lattice point of a cell to font units.

    Args:
        point: Point in cell lattice coordinates
        config: Glyph configuration (cell height, baseline, scale)
        x_shift: Columns to move the outline left by (horizontal trimming)

    Returns:
        (x, y) in font units, y measured up from the baseline
    """
    x = (point.x - x_shift) * config.scale
    y = (config.height - point.y) * config.scale - config.baseline * config.scale
    return x, y


def outline_to_ttglyph(outline: GlyphOutline, config: GlyphConfig, x_shift: int = 0) -> TTGlyph:
    """Draw a traced outline as a TrueType glyph.

    Each path becomes one contour of straight segments, starting at the
    path's first point and walking it backwards; the repeated closing point is
    left to ``closePath``.

    Args:
        outline: Resolved outline of one cell
        config: Glyph configuration
        x_shift: Columns to move the outline left by

    Returns:
        fontTools glyf-table glyph
    """
    pen = TTGlyphPen(None)

    for path in outline.paths:
        vertices = (path.vertices[0], *reversed(path.vertices[1:]))
        pen.moveTo(lattice_to_font(vertices[0], config, x_shift))
        for vertex in vertices[1:]:
            pen.lineTo(lattice_to_font(vertex, config, x_shift))
        pen.closePath()

    return pen.glyph()


def horizontal_layout(glyph: TracedGlyph, config: GlyphConfig) -> tuple[int, int]:
    """Advance width and outline shift of a traced glyph.

    Without trimming every glyph advances by the full cell width. With
    trimming the outline is shifted so its first inked column sits at x=0
    and the advance covers the inked columns plus ``trim_pad``.

    Args:
        glyph: Traced glyph with its column extent
        config: Glyph configuration

    Returns:
        (advance_width in font units, x_shift in columns)
    """
    if not config.trim:
        return config.width * config.scale, 0

    if glyph.column_extent is None:
        return 0, 0

    min_x, max_x = glyph.column_extent
    trimmed_width = max_x - min_x + 1 + config.trim_pad
    scaled_width = round(trimmed_width * (config.size // config.width))
    return scaled_width * config.scale, min_x


def left_side_bearing(glyph: TracedGlyph, config: GlyphConfig, x_shift: int) -> int:
    """xMin of the glyph in font units (0 for an empty outline)."""
    if glyph.outline.is_empty():
        return 0
    min_x = min(path.bounding_box()[0] for path in glyph.outline.paths)
    return (min_x - x_shift) * config.scale
