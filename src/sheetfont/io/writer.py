"""Font writer for assembling traced glyphs into a TrueType font.

This module provides the FontWriter class, which builds every table of the
output font with fontTools' FontBuilder and saves it.
"""

from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from sheetfont.config import SheetFontSettings
from sheetfont.domain import TracedGlyph
from sheetfont.exceptions import FontSaveError
from sheetfont.io.converter import horizontal_layout, left_side_bearing, outline_to_ttglyph

NOTDEF = ".notdef"
NULL = ".null"
SPACE = "space"

# head.flags: baseline at y=0, lsb at x=0, integer ppem scaling
HEAD_FLAGS = 0b0000_0000_0000_1011


def unique_glyph_names(glyphs: list[TracedGlyph]) -> list[str]:
    """Glyph names for ``glyphs``, suffixed ``.1``, ``.2`` ... when repeated."""
    seen: dict[str, int] = {}
    names: list[str] = []
    for glyph in glyphs:
        base = glyph.name
        count = seen.get(base, 0)
        names.append(base if count == 0 else f"{base}.{count}")
        seen[base] = count + 1
    return names


class FontWriter:
    """Builds and saves TrueType fonts from traced glyphs.

    Glyph ids follow the order of the glyph list after the three reserved
    glyphs (.notdef, .null, space). When two glyphs share a codepoint the
    later one is mapped.

    Example:
        writer = FontWriter(settings, family="MyPixels")
        font = writer.build(glyphs)
        writer.save(font, Path("MyPixels.ttf"))
    """

    RESERVED_GLYPHS = (NOTDEF, NULL, SPACE)

    def __init__(self, settings: SheetFontSettings, family: str) -> None:
        """Initialize the font writer.

        Args:
            settings: Application settings (glyph and font info sections)
            family: Family name used when settings do not provide one
        """
        self._glyph = settings.glyph
        self._info = settings.font
        self._family = settings.font.family or family

    @property
    def family(self) -> str:
        """Resolved family name."""
        return self._family

    def build(self, glyphs: list[TracedGlyph]) -> TTFont:
        """Assemble all font tables.

        Args:
            glyphs: Traced glyphs in glyph-id order

        Returns:
            In-memory TTFont ready to be saved
        """
        config = self._glyph
        scale = config.scale
        names = unique_glyph_names(glyphs)

        glyph_order = [*self.RESERVED_GLYPHS, *names]
        empty = TTGlyphPen(None).glyph
        glyph_table = {name: empty() for name in self.RESERVED_GLYPHS}
        cell_advance = config.width * scale
        metrics = {name: (cell_advance, 0) for name in self.RESERVED_GLYPHS}
        cmap = {0x0000: NULL, 0x0020: SPACE}

        max_points = 0
        max_contours = 0
        for glyph, name in zip(glyphs, names, strict=True):
            advance, x_shift = horizontal_layout(glyph, config)
            glyph_table[name] = outline_to_ttglyph(glyph.outline, config, x_shift)
            metrics[name] = (advance, left_side_bearing(glyph, config, x_shift))
            cmap[glyph.codepoint] = name
            max_points = max(max_points, glyph.point_count)
            max_contours = max(max_contours, glyph.contour_count)

        builder = FontBuilder(unitsPerEm=config.units_per_em, isTTF=True)
        builder.updateHead(
            flags=HEAD_FLAGS,
            lowestRecPPEM=8,
        )
        builder.setupGlyphOrder(glyph_order)
        builder.setupCharacterMap(cmap)
        builder.setupGlyf(glyph_table)
        builder.setupHorizontalMetrics(metrics)
        builder.setupHorizontalHeader(
            ascent=(config.size - config.baseline) * scale,
            descent=-config.baseline * scale,
            lineGap=self._info.line_gap * scale,
        )
        builder.setupNameTable(self._name_strings())
        builder.setupOS2(**self._os2_values())
        builder.setupPost(
            underlinePosition=self._info.underline_position * scale,
            underlineThickness=self._info.underline_thickness * scale,
            isFixedPitch=0 if config.trim else 1,
        )
        builder.setupMaxp()

        maxp = builder.font["maxp"]
        maxp.maxPoints = max_points
        maxp.maxContours = max_contours
        maxp.maxStackElements = config.width * config.height

        return builder.font

    def _name_strings(self) -> dict[str, str]:
        """Name table records."""
        info = self._info
        family = self._family
        style = info.style_name()

        names = {
            "familyName": f"{family} {info.subfamily}" if info.subfamily else family,
            "styleName": style,
            "uniqueFontIdentifier": f"sheetfont: {family}",
            "fullName": family,
            "version": info.version,
            "psName": family.replace(" ", "-"),
            "typographicFamily": family,
            "typographicSubfamily": style,
        }
        if info.copyright:
            names["copyright"] = info.copyright
        return names

    def _os2_values(self) -> dict[str, int]:
        """OS/2 table fields derived from the cell geometry."""
        config = self._glyph
        scale = config.scale
        ascender = (config.height - config.baseline) * scale
        descender = -config.baseline * scale
        half_width = config.width * scale // 2
        half_height = config.height * scale // 2

        return {
            "xAvgCharWidth": config.width * scale,
            "usWeightClass": self._info.weight_class(),
            "usWidthClass": 5,
            "fsType": 0,
            "ySubscriptXSize": half_width,
            "ySubscriptYSize": half_height,
            "ySubscriptXOffset": 0,
            "ySubscriptYOffset": half_height,
            "ySuperscriptXSize": half_width,
            "ySuperscriptYSize": half_height,
            "ySuperscriptXOffset": 0,
            "ySuperscriptYOffset": half_height,
            "yStrikeoutSize": scale,
            "yStrikeoutPosition": half_height,
            "sTypoAscender": ascender,
            "sTypoDescender": descender,
            "sTypoLineGap": 0,
            "usWinAscent": max(ascender, 0),
            "usWinDescent": max(-descender, 0),
        }

    @staticmethod
    def save(font: TTFont, output_path: Path) -> None:
        """Save a built font.

        Raises:
            FontSaveError: If the file cannot be written
        """
        try:
            font.save(str(output_path))
        except OSError as e:
            raise FontSaveError(str(output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Default output path: the sheet's path with a ``.ttf`` suffix.

        Converts: glyphs.aseprite -> glyphs.ttf
        """
        return input_path.with_suffix(".ttf")
