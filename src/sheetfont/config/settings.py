"""Configuration settings for Sheetfont."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field


class GlyphConfig(BaseModel):
    """Configuration for slicing the sheet into glyph cells.

    All pixel values are scaled by ``scale`` font units when the font is built.
    """

    width: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Glyph cell width in pixels",
    )
    height: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Glyph cell height in pixels",
    )
    baseline: int = Field(
        default=2,
        description="Pixels between the bottom of a cell and the baseline",
    )
    scale: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Font units per pixel",
    )
    trim: bool = Field(
        default=False,
        description="Trim each glyph's advance to its inked columns",
    )
    trim_pad: int = Field(
        default=1,
        ge=0,
        description="Extra columns of advance after a trimmed glyph",
    )

    @property
    def size(self) -> int:
        """Largest cell dimension, which defines the em square."""
        return max(self.width, self.height)

    @property
    def units_per_em(self) -> int:
        """Units per em of the output font."""
        return self.size * self.scale


class FontInfoConfig(BaseModel):
    """Naming and metrics of the output font."""

    WEIGHT_CLASSES: ClassVar[dict[str, int]] = {
        "thin": 100,
        "extra-light": 200,
        "extralight": 200,
        "ultra-light": 200,
        "ultralight": 200,
        "light": 300,
        "regular": 400,
        "medium": 500,
        "semibold": 600,
        "semi-bold": 600,
        "demi-bold": 600,
        "demibold": 600,
        "bold": 700,
        "extrabold": 800,
        "extra-bold": 800,
        "ultrabold": 800,
        "ultra-bold": 800,
        "black": 900,
        "heavy": 900,
    }

    family: str | None = Field(
        default=None,
        description="Family name (None = sheet file stem)",
    )
    subfamily: str | None = Field(
        default=None,
        description="Subfamily / style name (None = Regular)",
    )
    copyright: str | None = Field(
        default=None,
        description="Copyright notice",
    )
    version: str = Field(
        default="Version 1.0",
        description="Version string for the name table",
    )
    weight: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        description="OS/2 weight class (None = derived from subfamily)",
    )
    line_gap: int = Field(
        default=0,
        ge=0,
        le=255,
        description="Line gap in pixels",
    )
    underline_position: int = Field(
        default=0,
        description="Underline position in pixels",
    )
    underline_thickness: int = Field(
        default=1,
        description="Underline thickness in pixels",
    )

    def weight_class(self) -> int:
        """Resolve the OS/2 weight class.

        An explicit weight wins; otherwise the subfamily name is looked up
        case-insensitively, falling back to 400 (Regular).
        """
        if self.weight is not None:
            return self.weight
        style = (self.subfamily or "regular").lower()
        return self.WEIGHT_CLASSES.get(style, 400)

    def style_name(self) -> str:
        """Subfamily name with the Regular default applied."""
        return self.subfamily or "Regular"


class TracingConfig(BaseModel):
    """Configuration for outline tracing."""

    strict_closure: bool = Field(
        default=False,
        description="Raise instead of force-closing a boundary walk that does not close",
    )
    merge_collinear: bool = Field(
        default=False,
        description="Drop vertices that lie on a straight run of unit edges",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SheetFontSettings(BaseModel):
    """Main application settings."""

    glyph: GlyphConfig = Field(default_factory=GlyphConfig)
    font: FontInfoConfig = Field(default_factory=FontInfoConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SheetFontSettings:
    """Get default application settings."""
    return SheetFontSettings()
