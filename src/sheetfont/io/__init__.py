"""Sheet and font I/O layer for sheetfont.

This module handles decoding sprite sheets and writing fonts with fontTools.
It provides a clean abstraction layer between file formats and the domain
models.

Key responsibilities:
- Decode Aseprite files and raster images into named alpha layers
- Convert traced outlines to fontTools glyphs
- Assemble and save the output TrueType font

Key classes:
- SheetReader: Load sheets and iterate their layers
- FontWriter: Build and save fonts
"""

from sheetfont.io.reader import SheetReader
from sheetfont.io.writer import FontWriter

__all__ = [
    "FontWriter",
    "SheetReader",
]
