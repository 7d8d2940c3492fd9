"""Decoder for Aseprite sprite files (.ase / .aseprite).

Only what a font sheet needs is decoded: the canvas size, the layer list and
the alpha channel of every cel. Cel images are returned as numpy arrays.

File layout (little endian):
- 128-byte header, magic 0xA5E0
- frames, each with a 16-byte header (magic 0xF1FA) followed by chunks
- chunks: DWORD size (including the 6-byte chunk header), WORD type, data

Handled chunks are layers (0x2004), cels (0x2005) and the palette (0x2019,
for the alpha of indexed sprites). Everything else is skipped.
"""

import struct
import zlib
from dataclasses import dataclass, field

import numpy as np

ASE_MAGIC = 0xA5E0
FRAME_MAGIC = 0xF1FA

HEADER = struct.Struct("<IHHHHHIHIIB3xHBBhhHH84x")
FRAME_HEADER = struct.Struct("<IHHH2xI")
CHUNK_HEADER = struct.Struct("<IH")
LAYER_HEADER = struct.Struct("<HHHHHHB3x")
CEL_HEADER = struct.Struct("<HhhBHh5x")
PALETTE_HEADER = struct.Struct("<III8x")
PALETTE_ENTRY = struct.Struct("<HBBBB")

CHUNK_LAYER = 0x2004
CHUNK_CEL = 0x2005
CHUNK_PALETTE = 0x2019

LAYER_NORMAL = 0
LAYER_GROUP = 1
LAYER_TILEMAP = 2

CEL_RAW = 0
CEL_LINKED = 1
CEL_COMPRESSED = 2
CEL_TILEMAP = 3

DEPTH_RGBA = 32
DEPTH_GRAYSCALE = 16
DEPTH_INDEXED = 8

_BYTES_PER_PIXEL = {DEPTH_RGBA: 4, DEPTH_GRAYSCALE: 2, DEPTH_INDEXED: 1}


@dataclass(frozen=True)
class AseLayer:
    """A layer record.

    Attributes:
        index: Position in the file's layer list (cels refer to it)
        name: Layer name
        layer_type: 0 normal image layer, 1 group, 2 tilemap
        child_level: Nesting level inside groups
        visible: Layer visibility flag
    """

    index: int
    name: str
    layer_type: int
    child_level: int
    visible: bool

    @property
    def is_image(self) -> bool:
        """True for ordinary pixel layers."""
        return self.layer_type == LAYER_NORMAL


@dataclass(frozen=True)
class AseCel:
    """Alpha channel of one cel and its canvas position."""

    layer_index: int
    x: int
    y: int
    alpha: np.ndarray


@dataclass
class AsepriteDocument:
    """Decoded sprite.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        color_depth: 32 (RGBA), 16 (grayscale) or 8 (indexed)
        layers: Layers in file order
        frames: Per frame, the cels keyed by layer index
    """

    width: int
    height: int
    color_depth: int
    layers: list[AseLayer] = field(default_factory=list)
    frames: list[dict[int, AseCel]] = field(default_factory=list)

    def image_layers(self) -> list[AseLayer]:
        """Layers that carry pixels (no groups or tilemaps)."""
        return [layer for layer in self.layers if layer.is_image]

    def layer_alpha(self, layer_index: int, frame: int = 0) -> np.ndarray:
        """Render one layer's alpha on a canvas-sized array.

        Args:
            layer_index: Index of the layer in ``layers``
            frame: Frame number

        Returns:
            uint8 array of shape (height, width); zero where the layer has
            no pixels
        """
        canvas = np.zeros((self.height, self.width), dtype=np.uint8)
        if frame >= len(self.frames):
            return canvas

        cel = self.frames[frame].get(layer_index)
        if cel is None:
            return canvas

        cel_height, cel_width = cel.alpha.shape
        left = max(cel.x, 0)
        top = max(cel.y, 0)
        right = min(cel.x + cel_width, self.width)
        bottom = min(cel.y + cel_height, self.height)
        if left >= right or top >= bottom:
            return canvas

        canvas[top:bottom, left:right] = cel.alpha[
            top - cel.y : bottom - cel.y, left - cel.x : right - cel.x
        ]
        return canvas


def _read_string(data: bytes, offset: int) -> tuple[str, int]:
    """Read a WORD-length-prefixed UTF-8 string."""
    (length,) = struct.unpack_from("<H", data, offset)
    start = offset + 2
    raw = data[start : start + length]
    if len(raw) != length:
        raise ValueError("Truncated string")
    return raw.decode("utf-8", errors="replace"), start + length


def _pixels_to_alpha(
    pixels: bytes,
    width: int,
    height: int,
    color_depth: int,
    palette_alpha: np.ndarray,
) -> np.ndarray:
    """Extract the alpha plane from raw cel pixels."""
    bpp = _BYTES_PER_PIXEL[color_depth]
    expected = width * height * bpp
    if len(pixels) < expected:
        raise ValueError(f"Cel pixel data too short: {len(pixels)} < {expected} bytes")

    buffer = np.frombuffer(pixels, dtype=np.uint8, count=expected)
    if color_depth == DEPTH_RGBA:
        return buffer.reshape(height, width, 4)[:, :, 3].copy()
    if color_depth == DEPTH_GRAYSCALE:
        return buffer.reshape(height, width, 2)[:, :, 1].copy()
    return palette_alpha[buffer.reshape(height, width)]


def _parse_layer(data: bytes, index: int) -> AseLayer:
    flags, layer_type, child_level, _, _, _, _ = LAYER_HEADER.unpack_from(data, 0)
    name, _ = _read_string(data, LAYER_HEADER.size)
    return AseLayer(
        index=index,
        name=name,
        layer_type=layer_type,
        child_level=child_level,
        visible=bool(flags & 1),
    )


def _parse_palette(data: bytes, palette_alpha: np.ndarray) -> None:
    _, first, last = PALETTE_HEADER.unpack_from(data, 0)
    offset = PALETTE_HEADER.size
    for entry in range(first, last + 1):
        flags, _, _, _, alpha = PALETTE_ENTRY.unpack_from(data, offset)
        offset += PALETTE_ENTRY.size
        if flags & 1:
            _, offset = _read_string(data, offset)
        if entry < len(palette_alpha):
            palette_alpha[entry] = alpha


def _parse_cel(
    data: bytes,
    color_depth: int,
    palette_alpha: np.ndarray,
    frames: list[dict[int, AseCel]],
) -> AseCel | None:
    layer_index, x, y, _, cel_type, _ = CEL_HEADER.unpack_from(data, 0)
    body = CEL_HEADER.size

    if cel_type == CEL_RAW:
        width, height = struct.unpack_from("<HH", data, body)
        alpha = _pixels_to_alpha(data[body + 4 :], width, height, color_depth, palette_alpha)
        return AseCel(layer_index=layer_index, x=x, y=y, alpha=alpha)

    if cel_type == CEL_COMPRESSED:
        width, height = struct.unpack_from("<HH", data, body)
        try:
            pixels = zlib.decompress(data[body + 4 :])
        except zlib.error as e:
            raise ValueError(f"Corrupt compressed cel: {e}") from e
        alpha = _pixels_to_alpha(pixels, width, height, color_depth, palette_alpha)
        return AseCel(layer_index=layer_index, x=x, y=y, alpha=alpha)

    if cel_type == CEL_LINKED:
        (frame_position,) = struct.unpack_from("<H", data, body)
        if frame_position >= len(frames):
            raise ValueError(f"Linked cel refers to unread frame {frame_position}")
        return frames[frame_position].get(layer_index)

    # Tilemap cels carry tile references, not pixels
    return None


def read_aseprite(data: bytes) -> AsepriteDocument:
    """Decode an Aseprite file.

    Args:
        data: Complete file contents

    Returns:
        Decoded document

    Raises:
        ValueError: If the data is not a valid Aseprite file
    """
    if len(data) < HEADER.size:
        raise ValueError("File too short for an Aseprite header")

    (
        _file_size,
        magic,
        frame_count,
        width,
        height,
        color_depth,
        _flags,
        _speed,
        _zero1,
        _zero2,
        transparent_index,
        _color_count,
        _pixel_width,
        _pixel_height,
        _grid_x,
        _grid_y,
        _grid_width,
        _grid_height,
    ) = HEADER.unpack_from(data, 0)

    if magic != ASE_MAGIC:
        raise ValueError(f"Bad magic number 0x{magic:04X}, expected 0x{ASE_MAGIC:04X}")
    if color_depth not in _BYTES_PER_PIXEL:
        raise ValueError(f"Unsupported color depth {color_depth}")

    palette_alpha = np.full(256, 255, dtype=np.uint8)
    if color_depth == DEPTH_INDEXED:
        palette_alpha[transparent_index] = 0

    document = AsepriteDocument(width=width, height=height, color_depth=color_depth)
    offset = HEADER.size

    try:
        for _ in range(frame_count):
            frame_size, frame_magic, old_chunks, _duration, new_chunks = (
                FRAME_HEADER.unpack_from(data, offset)
            )
            if frame_magic != FRAME_MAGIC:
                raise ValueError(f"Bad frame magic 0x{frame_magic:04X} at offset {offset}")

            chunk_count = new_chunks or old_chunks
            chunk_offset = offset + FRAME_HEADER.size
            cels: dict[int, AseCel] = {}

            for _ in range(chunk_count):
                chunk_size, chunk_type = CHUNK_HEADER.unpack_from(data, chunk_offset)
                if chunk_size < CHUNK_HEADER.size:
                    raise ValueError(f"Bad chunk size {chunk_size} at offset {chunk_offset}")
                chunk = data[chunk_offset + CHUNK_HEADER.size : chunk_offset + chunk_size]

                if chunk_type == CHUNK_LAYER:
                    document.layers.append(_parse_layer(chunk, len(document.layers)))
                elif chunk_type == CHUNK_PALETTE:
                    _parse_palette(chunk, palette_alpha)
                    if color_depth == DEPTH_INDEXED:
                        palette_alpha[transparent_index] = 0
                elif chunk_type == CHUNK_CEL:
                    cel = _parse_cel(chunk, color_depth, palette_alpha, document.frames)
                    if cel is not None:
                        cels[cel.layer_index] = cel

                chunk_offset += chunk_size

            document.frames.append(cels)
            offset += frame_size
    except struct.error as e:
        raise ValueError(f"Truncated Aseprite data: {e}") from e

    return document
