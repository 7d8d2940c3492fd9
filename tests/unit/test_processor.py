"""Unit tests for sheet processing orchestration."""

from unittest.mock import patch

import numpy as np
import pytest
from fontTools.ttLib import TTFont

from builders import ascii_alpha
from sheetfont.config import GlyphConfig, SheetFontSettings
from sheetfont.core.processor import SheetProcessor, parse_layer_codepoint
from sheetfont.domain import GlyphOutline, Path, SheetLayer
from sheetfont.exceptions import InvalidDimensionsError, NoGlyphsProducedError

SHEET = ascii_alpha(
    """
    ----#---
    ----##--
    ----###-
    --------
    ##------
    ##------
    ----####
    ----####
    """
)


@pytest.fixture
def processor(small_settings: SheetFontSettings) -> SheetProcessor:
    return SheetProcessor(small_settings, quiet=True)


class TestParseLayerCodepoint:
    """Tests for parse_layer_codepoint."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("U+0041", 0x41),
            ("u+0041", 0x41),
            ("U+41", 0x41),
            ("U+0041 uppercase", 0x41),
            ("U+0030_digits", 0x30),
            ("U+1F600", 0x1F600),
            ("U+10FFFF", 0x10FFFF),
        ],
    )
    def test_valid_names(self, name: str, expected: int):
        """Test names that encode a codepoint."""
        assert parse_layer_codepoint(name) == expected

    @pytest.mark.parametrize(
        "name",
        ["", "Layer 1", "U+", "U+ 0041", "U+xyz", "0041", "X+0041", "U+110000"],
    )
    def test_invalid_names(self, name: str):
        """Test names that do not encode a codepoint."""
        assert parse_layer_codepoint(name) is None


class TestSheetProcessor:
    """Tests for SheetProcessor."""

    def test_init(self, small_settings: SheetFontSettings):
        """Test processor initialization."""
        processor = SheetProcessor(small_settings, quiet=True)
        assert processor.config is small_settings
        assert processor.stats.glyph_count == 0

    def test_validate_dimensions(self, processor: SheetProcessor):
        """Test cell counts of a well-sized sheet."""
        assert processor.validate_dimensions(8, 12) == (2, 3)

    @pytest.mark.parametrize(("width", "height"), [(9, 8), (8, 6), (3, 4)])
    def test_validate_dimensions_rejects_partial_cells(
        self, processor: SheetProcessor, width: int, height: int
    ):
        """Test that partial cells are rejected."""
        with pytest.raises(InvalidDimensionsError) as exc_info:
            processor.validate_dimensions(width, height)
        assert exc_info.value.glyph_width == 4

    def test_trace_layer_order_and_codepoints(self, processor: SheetProcessor):
        """Test row-major codepoint assignment and empty cell skipping."""
        glyphs = list(processor.trace_layer(SheetLayer("U+0041", SHEET), 0x41))

        assert [(g.row, g.col) for g in glyphs] == [(0, 1), (1, 0), (1, 1)]
        assert [g.codepoint for g in glyphs] == [0x42, 0x43, 0x44]
        assert processor.stats.skipped_cells == 1
        assert processor.stats.glyph_count == 3
        assert processor.stats.max_points == 12
        assert processor.stats.max_contours == 1

    def test_trace_layer_column_extent(self, processor: SheetProcessor):
        """Test that glyphs remember their inked columns."""
        glyphs = list(processor.trace_layer(SheetLayer("U+0041", SHEET), 0x41))
        assert glyphs[0].column_extent == (0, 2)

    def test_trace_sheet_skips_unparsable_layers(self, processor: SheetProcessor):
        """Test that only U+ layers are traced."""
        glyphs = processor.trace_sheet(
            [SheetLayer("background", SHEET), SheetLayer("U+0100", SHEET)]
        )
        assert [g.codepoint for g in glyphs] == [0x101, 0x102, 0x103]
        assert processor.stats.layers_skipped == 1
        assert processor.stats.layers_processed == 1
        assert processor.stats.skipped_layers[0][0] == "background"

    def test_trace_sheet_counts_duplicates(self, processor: SheetProcessor):
        """Test that overlapping layers are reported."""
        glyphs = processor.trace_sheet(
            [SheetLayer("U+0041", SHEET), SheetLayer("U+0042", SHEET)]
        )
        assert [g.codepoint for g in glyphs] == [0x42, 0x43, 0x44, 0x43, 0x44, 0x45]
        assert processor.stats.duplicate_codepoints == 2

    def test_trace_layer_invalid_size(self, processor: SheetProcessor):
        """Test that a layer not divisible into cells is rejected."""
        with pytest.raises(InvalidDimensionsError):
            list(processor.trace_layer(SheetLayer("U+0041", np.zeros((5, 8))), 0x41))

    @patch("sheetfont.core.processor.trace_grid")
    def test_forced_closures_are_counted(self, mock_trace, processor: SheetProcessor):
        """Test that force-closed paths are logged and counted."""
        forced = Path.from_tuples([(0, 0), (1, 0), (1, 1), (0, 0)], forced=True)
        mock_trace.return_value = GlyphOutline(paths=(forced,))

        glyphs = list(processor.trace_layer(SheetLayer("U+0041", np.zeros((4, 4))), 0x41))

        assert len(glyphs) == 1
        assert processor.stats.forced_closures == 1


class TestProcess:
    """Tests for SheetProcessor.process."""

    def test_process_png(self, small_settings: SheetFontSettings, png_file, tmp_path):
        """Test converting an image sheet into a font."""
        sheet = png_file("U+0041.png", SHEET)
        output = tmp_path / "out.ttf"

        stats = SheetProcessor(small_settings, quiet=True).process(sheet, output)

        assert output.exists()
        assert stats.glyph_count == 3
        assert stats.duration_seconds >= 0
        font = TTFont(output)
        assert set(font.getBestCmap()) == {0x00, 0x20, 0x42, 0x43, 0x44}
        assert font["name"].getDebugName(1) == "U+0041"

    def test_process_aseprite(self, small_settings: SheetFontSettings, aseprite_file, tmp_path):
        """Test converting a multi-layer Aseprite sheet."""
        sheet = aseprite_file(
            filename="pixels.aseprite",
            width=8,
            height=8,
            layers=[("U+0041", SHEET), ("reference", SHEET), ("U+0061", SHEET)],
        )
        output = tmp_path / "pixels.ttf"

        stats = SheetProcessor(small_settings, quiet=True).process(sheet, output)

        assert stats.glyph_count == 6
        assert stats.layers_skipped == 1
        font = TTFont(output)
        assert font.getGlyphOrder()[3:] == [
            "uni0042",
            "uni0043",
            "uni0044",
            "uni0062",
            "uni0063",
            "uni0064",
        ]

    def test_process_no_glyphs(self, small_settings: SheetFontSettings, aseprite_file, tmp_path):
        """Test that a sheet without traceable cells raises NoGlyphsProducedError."""
        sheet = aseprite_file(width=8, height=8, layers=[("Layer 1", SHEET), ("U+0041", None)])
        output = tmp_path / "out.ttf"

        with pytest.raises(NoGlyphsProducedError) as exc_info:
            SheetProcessor(small_settings, quiet=True).process(sheet, output)

        assert exc_info.value.layer_count == 2
        assert not output.exists()

    def test_process_invalid_dimensions(self, png_file, tmp_path):
        """Test that the sheet size is checked before tracing."""
        settings = SheetFontSettings(glyph=GlyphConfig(width=3, height=3))
        sheet = png_file("U+0041.png", SHEET)
        with pytest.raises(InvalidDimensionsError):
            SheetProcessor(settings, quiet=True).process(sheet, tmp_path / "out.ttf")

    def test_process_font_not_found(self, small_settings: SheetFontSettings, tmp_path):
        """Test processing a missing sheet raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SheetProcessor(small_settings, quiet=True).process(
                tmp_path / "missing.aseprite", tmp_path / "out.ttf"
            )
