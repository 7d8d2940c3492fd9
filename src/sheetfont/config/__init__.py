"""Configuration management for sheetfont.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GlyphConfig: Cell size, baseline and horizontal trimming
- FontInfoConfig: Naming and vertical metrics of the output font
- TracingConfig: Outline tracing behaviour
- LoggingConfig: Logging settings
- SheetFontSettings: Main application settings
"""

from sheetfont.config.settings import (
    FontInfoConfig,
    GlyphConfig,
    LoggingConfig,
    SheetFontSettings,
    TracingConfig,
    get_default_settings,
)

__all__ = [
    "FontInfoConfig",
    "GlyphConfig",
    "LoggingConfig",
    "SheetFontSettings",
    "TracingConfig",
    "get_default_settings",
]
