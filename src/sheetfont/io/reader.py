"""Sheet reader for loading sprite sheets.

This module provides the SheetReader class for loading sprite sheets and
exposing them as named alpha layers.

Aseprite files contribute one layer per image layer (frame 0). Any other
image Pillow can open is treated as a single layer named after the file
stem, so ``U+0041.png`` starts at codepoint U+0041.
"""

from collections.abc import Iterator
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from sheetfont.domain import SheetLayer
from sheetfont.exceptions import SheetFormatError, SheetLoadError
from sheetfont.io.aseprite import AsepriteDocument, read_aseprite

ASEPRITE_SUFFIXES = (".ase", ".aseprite")


class SheetReader:
    """Loads sprite sheets and extracts their layers.

    Example:
        with SheetReader(Path("glyphs.aseprite")) as reader:
            for layer in reader.iter_layers():
                print(layer.name)
    """

    def __init__(self, sheet_path: Path) -> None:
        """Initialize the sheet reader.

        Args:
            sheet_path: Path to an Aseprite file or a raster image
        """
        self._sheet_path = sheet_path
        self._layers: list[SheetLayer] | None = None
        self._format: str | None = None
        self._size: tuple[int, int] = (0, 0)

    def load(self) -> None:
        """Load and decode the sheet.

        Raises:
            FileNotFoundError: If the sheet file does not exist
            SheetFormatError: If the file cannot be decoded
            SheetLoadError: If the file cannot be read
        """
        if not self._sheet_path.exists():
            raise FileNotFoundError(f"Sheet file not found: {self._sheet_path}")

        if self._sheet_path.suffix.lower() in ASEPRITE_SUFFIXES:
            self._load_aseprite()
        else:
            self._load_image()

    def _load_aseprite(self) -> None:
        try:
            data = self._sheet_path.read_bytes()
        except OSError as e:
            raise SheetLoadError(str(self._sheet_path), str(e)) from e

        try:
            document = read_aseprite(data)
        except ValueError as e:
            raise SheetFormatError(str(self._sheet_path), str(e)) from e

        self._format = "Aseprite"
        self._size = (document.width, document.height)
        self._layers = _document_layers(document)

    def _load_image(self) -> None:
        try:
            with Image.open(self._sheet_path) as image:
                rgba = image.convert("RGBA")
        except UnidentifiedImageError as e:
            raise SheetFormatError(str(self._sheet_path), str(e)) from e
        except OSError as e:
            raise SheetLoadError(str(self._sheet_path), str(e)) from e

        alpha = np.asarray(rgba.getchannel("A"), dtype=np.uint8)
        self._format = "Image"
        self._size = rgba.size
        self._layers = [SheetLayer(name=self._sheet_path.stem, alpha=alpha)]

    def _require_loaded(self) -> list[SheetLayer]:
        if self._layers is None:
            raise RuntimeError("Sheet not loaded. Call load() first.")
        return self._layers

    @property
    def path(self) -> Path:
        """Path of the sheet file."""
        return self._sheet_path

    @property
    def format(self) -> str:
        """Return sheet format ('Aseprite' or 'Image').

        Raises:
            RuntimeError: If sheet has not been loaded yet
        """
        self._require_loaded()
        return self._format or ""

    @property
    def width(self) -> int:
        """Sheet width in pixels."""
        self._require_loaded()
        return self._size[0]

    @property
    def height(self) -> int:
        """Sheet height in pixels."""
        self._require_loaded()
        return self._size[1]

    @property
    def layer_count(self) -> int:
        """Number of pixel layers in the sheet."""
        return len(self._require_loaded())

    def iter_layers(self) -> Iterator[SheetLayer]:
        """Iterate over the sheet's layers in file order.

        Raises:
            RuntimeError: If sheet has not been loaded yet
        """
        yield from self._require_loaded()

    def close(self) -> None:
        """Release decoded layer data."""
        self._layers = None

    def __enter__(self) -> "SheetReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def _document_layers(document: AsepriteDocument) -> list[SheetLayer]:
    """Frame-0 alpha of every image layer of an Aseprite document."""
    return [
        SheetLayer(name=layer.name, alpha=document.layer_alpha(layer.index))
        for layer in document.image_layers()
    ]
