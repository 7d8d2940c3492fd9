"""Exception hierarchy for Sheetfont."""


class SheetFontError(Exception):
    """Base exception for all Sheetfont errors."""

    pass


class SheetError(SheetFontError):
    """Errors related to reading or validating a sprite sheet."""

    pass


class SheetLoadError(SheetError):
    """Error loading a sprite sheet file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load sheet '{path}': {reason}")


class SheetFormatError(SheetError):
    """Unsupported or corrupt sprite sheet contents."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid sheet format '{path}': {details}")


class InvalidDimensionsError(SheetError):
    """Sheet size is not an exact multiple of the glyph cell size."""

    def __init__(self, width: int, height: int, glyph_width: int, glyph_height: int) -> None:
        self.width = width
        self.height = height
        self.glyph_width = glyph_width
        self.glyph_height = glyph_height
        super().__init__(
            f"Sheet size {width}x{height} is not a multiple of the "
            f"glyph size {glyph_width}x{glyph_height}"
        )


class TracingError(SheetFontError):
    """Errors raised while tracing a glyph cell into outlines."""

    pass


class MalformedBoundaryError(TracingError):
    """A boundary walk ended without returning to its starting point."""

    def __init__(self, start: tuple[int, int], points: int) -> None:
        self.start = start
        self.points = points
        super().__init__(
            f"Boundary walk from {start} did not close after {points} points"
        )


class FontError(SheetFontError):
    """Errors related to assembling or saving the output font."""

    pass


class NoGlyphsProducedError(FontError):
    """No cell of the sheet produced a usable outline."""

    def __init__(self, layer_count: int) -> None:
        self.layer_count = layer_count
        super().__init__(
            f"No glyphs produced from {layer_count} layer(s). Parsable layer names "
            "must start with U+ followed by a hexadecimal codepoint."
        )


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")
