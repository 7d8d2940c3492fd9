"""Sheet processing orchestration for the conversion pipeline.

This module coordinates the full workflow: read the sheet, slice every
codepoint layer into cells, trace each cell and hand the glyphs to the font
writer.

Cells are processed in layer order, then row by row, then column by column.
That order assigns glyph ids and therefore the codepoint-to-glyph mapping,
so it is kept strictly sequential.

Key components:
- parse_layer_codepoint: Read the base codepoint from a layer name
- SheetProcessor: Main orchestrator class for sheet conversion
"""

import time
from collections.abc import Iterable, Iterator
from pathlib import Path

from sheetfont.config import SheetFontSettings
from sheetfont.core.tracer import trace_grid
from sheetfont.domain import Grid, SheetLayer, TracedGlyph
from sheetfont.exceptions import InvalidDimensionsError, NoGlyphsProducedError
from sheetfont.io import FontWriter, SheetReader
from sheetfont.utils import ProcessingLogger, ProcessingStats, configure_logging

MAX_CODEPOINT = 0x10FFFF
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse_layer_codepoint(name: str) -> int | None:
    """Base codepoint encoded in a layer name.

    The name must start with ``U+`` or ``u+``; the hexadecimal digits that
    follow (up to the first non-hex character) are the codepoint, so
    ``"U+0041 uppercase"`` gives 0x41.

    Returns:
        The codepoint, or None if the name does not encode a valid one
    """
    if not name.startswith(("U+", "u+")):
        return None

    digits = []
    for ch in name[2:]:
        if ch not in HEX_DIGITS:
            break
        digits.append(ch)

    if not digits:
        return None

    codepoint = int("".join(digits), 16)
    if codepoint > MAX_CODEPOINT:
        return None
    return codepoint


class SheetProcessor:
    """Orchestrates sprite sheet to font conversion.

    Manages the complete workflow:
    1. Load the sheet and validate its size against the cell size
    2. Parse the base codepoint of every layer
    3. Trace every non-empty cell in sheet order
    4. Escalate when no glyph was produced
    5. Build and save the font

    Example:
        settings = SheetFontSettings()
        processor = SheetProcessor(settings)
        stats = processor.process(
            sheet_path=Path("glyphs.aseprite"),
            output_path=Path("glyphs.ttf"),
        )
    """

    def __init__(self, config: SheetFontSettings, quiet: bool = False) -> None:
        """Initialize sheet processor with configuration.

        Args:
            config: Sheetfont settings
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        """Statistics of the current run."""
        return self.processing_logger.stats

    def validate_dimensions(self, width: int, height: int) -> tuple[int, int]:
        """Check the sheet size against the cell size.

        Args:
            width: Sheet width in pixels
            height: Sheet height in pixels

        Returns:
            (columns, rows) of cells

        Raises:
            InvalidDimensionsError: If the sheet is not an exact multiple of
                the cell size
        """
        glyph = self.config.glyph
        if width % glyph.width != 0 or height % glyph.height != 0:
            raise InvalidDimensionsError(width, height, glyph.width, glyph.height)
        return width // glyph.width, height // glyph.height

    def trace_layer(self, layer: SheetLayer, base_codepoint: int) -> Iterator[TracedGlyph]:
        """Trace every non-empty cell of one layer.

        Args:
            layer: Sheet layer
            base_codepoint: Codepoint of the top-left cell

        Yields:
            Traced glyphs, rows outer and columns inner
        """
        glyph_config = self.config.glyph
        columns, rows = self.validate_dimensions(layer.width, layer.height)

        for row in range(rows):
            for col in range(columns):
                start_time = time.time()
                grid = Grid.from_alpha(
                    layer.alpha,
                    col * glyph_config.width,
                    row * glyph_config.height,
                    glyph_config.width,
                    glyph_config.height,
                )
                outline = trace_grid(grid, self.config.tracing)

                if outline.is_empty():
                    self.processing_logger.log_cell_skipped(layer.name, row, col)
                    continue

                codepoint = base_codepoint + row * columns + col
                if outline.forced_closures:
                    self.processing_logger.log_forced_closure(codepoint, outline.forced_closures)

                self.processing_logger.log_glyph_traced(
                    codepoint=codepoint,
                    points=outline.point_count,
                    contours=outline.contour_count,
                    duration_ms=(time.time() - start_time) * 1000,
                )
                yield TracedGlyph(
                    codepoint=codepoint,
                    layer=layer.name,
                    row=row,
                    col=col,
                    outline=outline,
                    column_extent=grid.column_extent(),
                )

    def trace_sheet(self, layers: Iterable[SheetLayer]) -> list[TracedGlyph]:
        """Trace all codepoint layers of a sheet.

        Layers whose names do not encode a codepoint are skipped.

        Args:
            layers: Sheet layers in file order

        Returns:
            Traced glyphs in glyph-id order
        """
        glyphs: list[TracedGlyph] = []
        seen: set[int] = set()

        for layer in layers:
            base_codepoint = parse_layer_codepoint(layer.name)
            if base_codepoint is None:
                self.processing_logger.log_layer_skipped(
                    layer.name, "name does not start with U+<hex codepoint>"
                )
                continue

            self.processing_logger.log_layer_start(layer.name, base_codepoint)
            for glyph in self.trace_layer(layer, base_codepoint):
                if glyph.codepoint in seen:
                    self.processing_logger.log_duplicate_codepoint(glyph.codepoint, layer.name)
                seen.add(glyph.codepoint)
                glyphs.append(glyph)

        return glyphs

    def process(self, sheet_path: Path, output_path: Path) -> ProcessingStats:
        """Convert a sprite sheet into a font file.

        Args:
            sheet_path: Input sheet (Aseprite file or raster image)
            output_path: Path of the font to write

        Returns:
            Processing statistics

        Raises:
            InvalidDimensionsError: If the sheet size does not fit the cell size
            NoGlyphsProducedError: If no cell produced an outline
            FontSaveError: If the font cannot be written
        """
        stats = self.stats
        stats.start_time = time.time()

        with SheetReader(sheet_path) as reader:
            self.validate_dimensions(reader.width, reader.height)
            self.logger.info(
                "Sheet loaded",
                path=str(sheet_path),
                format=reader.format,
                width=reader.width,
                height=reader.height,
                layers=reader.layer_count,
            )
            glyphs = self.trace_sheet(reader.iter_layers())
            layer_count = reader.layer_count

        if not glyphs:
            raise NoGlyphsProducedError(layer_count)

        writer = FontWriter(self.config, family=sheet_path.stem)
        font = writer.build(glyphs)
        writer.save(font, output_path)

        stats.end_time = time.time()
        self.logger.info(
            "Font written",
            path=str(output_path),
            glyphs=stats.glyph_count,
            max_points=stats.max_points,
            max_contours=stats.max_contours,
            forced_closures=stats.forced_closures,
            duration_s=round(stats.duration_seconds, 3),
        )
        return stats
