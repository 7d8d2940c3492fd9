"""End-to-end test that converts sprite sheets and verifies the font output."""

import tempfile
from pathlib import Path

import numpy as np
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont

from builders import ascii_alpha, encode_aseprite
from sheetfont.config import GlyphConfig, SheetFontSettings, TracingConfig
from sheetfont.core.processor import SheetProcessor
from sheetfont.io.aseprite import DEPTH_GRAYSCALE

# 8x8 cells: A (one hole), a ring touching itself at a corner, a bowtie, B (two holes)
GLYPHS = {
    "A": """
        --####--
        -##--##-
        -##--##-
        -######-
        -##--##-
        -##--##-
        -##--##-
        --------
        """,
    "ring": """
        --------
        -####---
        -#--#---
        -#--#---
        -###----
        --------
        --------
        --------
        """,
    "bowtie": """
        ##------
        ##------
        --##----
        --##----
        --------
        --------
        --------
        --------
        """,
    "B": """
        #####---
        ##--##--
        #####---
        ##--##--
        ##--##--
        #####---
        --------
        --------
        """,
}


def build_sheet() -> np.ndarray:
    """16x16 sheet holding the four test glyphs in 8x8 cells."""
    sheet = np.zeros((16, 16), dtype=np.uint8)
    for i, picture in enumerate(GLYPHS.values()):
        row, col = divmod(i, 2)
        sheet[row * 8 : row * 8 + 8, col * 8 : col * 8 + 8] = ascii_alpha(picture)
    return sheet


def analyze_glyph_from_font(font: TTFont, glyph_name: str):
    """Analyze a glyph directly from fontTools TTFont."""
    glyf_table = font["glyf"]
    glyph = glyf_table[glyph_name]

    if glyph.numberOfContours <= 0:
        return None, None, None

    coords, end_pts, _ = glyph.getCoordinates(glyf_table)

    contours = []
    start = 0
    for end in end_pts:
        contours.append(list(coords[start : end + 1]))
        start = end + 1

    # Calculate areas
    outer_area = 0
    hole_area = 0
    for contour in contours:
        n = len(contour)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += contour[i][0] * contour[j][1]
            area -= contour[j][0] * contour[i][1]
        area /= 2.0

        if area < 0:
            outer_area += abs(area)
        else:
            hole_area += area

    return len(contours), outer_area, hole_area


def convert(settings: SheetFontSettings, sheet: bytes, tmpdir: str) -> TTFont:
    sheet_path = Path(tmpdir) / "TestPixels.aseprite"
    sheet_path.write_bytes(sheet)
    output_path = Path(tmpdir) / "TestPixels.ttf"
    SheetProcessor(settings, quiet=True).process(sheet_path=sheet_path, output_path=output_path)
    return TTFont(output_path)


class TestEndToEndOutput:
    """Test that converted fonts have correct outlines in the output file."""

    settings = SheetFontSettings(glyph=GlyphConfig(width=8, height=8, baseline=1))

    def test_convert_and_verify_outlines(self):
        """Convert a sheet and verify every glyph's contours and areas."""
        sheet = encode_aseprite(16, 16, [("U+0041 test glyphs", build_sheet())])

        with tempfile.TemporaryDirectory() as tmpdir:
            font = convert(self.settings, sheet, tmpdir)

            cmap = font.getBestCmap()
            assert [cmap[cp] for cp in range(0x41, 0x45)] == [
                "uni0041",
                "uni0042",
                "uni0043",
                "uni0044",
            ]
            assert font["head"].unitsPerEm == 80

            # A: 30 px of ink around a 4 px hole, in 10-unit pixels
            contours, outer, hole = analyze_glyph_from_font(font, "uni0041")
            assert contours == 2
            assert outer == 34 * 100
            assert hole == 4 * 100

            # Ring pinched at one corner: still exactly one outer and one hole
            contours, outer, hole = analyze_glyph_from_font(font, "uni0042")
            assert contours == 2
            assert outer == 15 * 100
            assert hole == 4 * 100

            # Bowtie: two separate blocks, no hole
            contours, outer, hole = analyze_glyph_from_font(font, "uni0043")
            assert contours == 2
            assert outer == 8 * 100
            assert hole == 0

            # B: one outer, two holes
            contours, outer, hole = analyze_glyph_from_font(font, "uni0044")
            assert contours == 3
            assert hole == 6 * 100

    def test_glyph_placement(self):
        """Verify the baseline offset and the bounds of a drawn glyph."""
        sheet = encode_aseprite(16, 16, [("U+0041", build_sheet())])

        with tempfile.TemporaryDirectory() as tmpdir:
            font = convert(self.settings, sheet, tmpdir)

            glyph_set = font.getGlyphSet()
            pen = RecordingPen()
            glyph_set["uni0041"].draw(pen)
            points = [args[0] for op, args in pen.value if op in ("moveTo", "lineTo")]
            xs = [x for x, _ in points]
            ys = [y for _, y in points]

            # Ink spans columns 1..6 and rows 0..6; baseline is one pixel up
            assert (min(xs), max(xs)) == (10, 70)
            assert (min(ys), max(ys)) == (0, 70)
            assert font["hmtx"]["uni0041"] == (80, 10)

    def test_grayscale_sheet_with_merged_outlines(self):
        """Convert a grayscale sheet with collinear merging enabled."""
        settings = SheetFontSettings(
            glyph=GlyphConfig(width=8, height=8, baseline=1),
            tracing=TracingConfig(merge_collinear=True),
        )
        sheet = encode_aseprite(
            16, 16, [("U+0030", build_sheet())], color_depth=DEPTH_GRAYSCALE, compressed=False
        )

        with tempfile.TemporaryDirectory() as tmpdir:
            font = convert(settings, sheet, tmpdir)

            contours, outer, hole = analyze_glyph_from_font(font, "uni0030")
            assert contours == 2
            assert outer == 34 * 100
            assert hole == 4 * 100
            # Merged outlines keep only corner points
            assert font["maxp"].maxPoints < 30
