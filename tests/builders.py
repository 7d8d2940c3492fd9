"""Builders for synthetic sprite sheets used across the test suite."""

import struct
import zlib
from collections.abc import Sequence

import numpy as np

from sheetfont.io.aseprite import (
    ASE_MAGIC,
    CEL_COMPRESSED,
    CEL_HEADER,
    CEL_LINKED,
    CEL_RAW,
    CHUNK_CEL,
    CHUNK_HEADER,
    CHUNK_LAYER,
    CHUNK_PALETTE,
    DEPTH_GRAYSCALE,
    DEPTH_RGBA,
    FRAME_HEADER,
    FRAME_MAGIC,
    HEADER,
    LAYER_HEADER,
    LAYER_NORMAL,
    PALETTE_ENTRY,
    PALETTE_HEADER,
)


def ascii_alpha(picture: str, on: int = 255) -> np.ndarray:
    """Alpha array from a picture like ``"-#-\\n###"`` (``#`` is ink)."""
    lines = [line.strip() for line in picture.strip().splitlines() if line.strip()]
    return np.array(
        [[on if ch == "#" else 0 for ch in line] for line in lines],
        dtype=np.uint8,
    )


def _string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return struct.pack("<H", len(raw)) + raw


def _chunk(chunk_type: int, body: bytes) -> bytes:
    return CHUNK_HEADER.pack(CHUNK_HEADER.size + len(body), chunk_type) + body


def _pixel_bytes(pixels: np.ndarray, color_depth: int) -> bytes:
    if color_depth == DEPTH_RGBA:
        rgba = np.zeros((*pixels.shape, 4), dtype=np.uint8)
        rgba[:, :, 3] = pixels
        return rgba.tobytes()
    if color_depth == DEPTH_GRAYSCALE:
        gray = np.zeros((*pixels.shape, 2), dtype=np.uint8)
        gray[:, :, 0] = 128
        gray[:, :, 1] = pixels
        return gray.tobytes()
    return pixels.astype(np.uint8).tobytes()


def _frame(chunks: list[bytes]) -> bytes:
    body = b"".join(chunks)
    return (
        FRAME_HEADER.pack(FRAME_HEADER.size + len(body), FRAME_MAGIC, len(chunks), 100, len(chunks))
        + body
    )


def encode_aseprite(
    width: int,
    height: int,
    layers: Sequence[tuple[str, np.ndarray | None]],
    color_depth: int = DEPTH_RGBA,
    compressed: bool = True,
    offsets: dict[int, tuple[int, int]] | None = None,
    group_layers: Sequence[str] = (),
    palette_alpha: Sequence[int] | None = None,
    transparent_index: int = 0,
    linked_frame: bool = False,
) -> bytes:
    """Encode a minimal Aseprite file.

    Args:
        width: Canvas width
        height: Canvas height
        layers: (name, pixels) per image layer; pixels are alpha values, or
            palette indices for indexed sprites; None leaves the layer empty
        color_depth: 32, 16 or 8
        compressed: Write zlib cels instead of raw cels
        offsets: Cel position per layer index (default (0, 0))
        group_layers: Names of group layers written before the image layers
        palette_alpha: Alpha of each palette entry (writes a palette chunk)
        transparent_index: Transparent palette index for indexed sprites
        linked_frame: Append a second frame whose cels link to frame 0
    """
    offsets = offsets or {}
    chunks: list[bytes] = []

    for name in group_layers:
        chunks.append(_chunk(CHUNK_LAYER, LAYER_HEADER.pack(1, 1, 0, 0, 0, 0, 255) + _string(name)))
    first_image = len(group_layers)
    for name, _ in layers:
        chunks.append(
            _chunk(CHUNK_LAYER, LAYER_HEADER.pack(1, LAYER_NORMAL, 0, 0, 0, 0, 255) + _string(name))
        )

    if palette_alpha is not None:
        body = PALETTE_HEADER.pack(len(palette_alpha), 0, len(palette_alpha) - 1)
        body += b"".join(PALETTE_ENTRY.pack(0, 0, 0, 0, alpha) for alpha in palette_alpha)
        chunks.append(_chunk(CHUNK_PALETTE, body))

    linked: list[bytes] = []
    for i, (_, pixels) in enumerate(layers):
        if pixels is None:
            continue
        layer_index = first_image + i
        x, y = offsets.get(i, (0, 0))
        cel_height, cel_width = pixels.shape
        raw = _pixel_bytes(pixels, color_depth)
        cel_type = CEL_COMPRESSED if compressed else CEL_RAW
        data = zlib.compress(raw) if compressed else raw
        body = CEL_HEADER.pack(layer_index, x, y, 255, cel_type, 0)
        body += struct.pack("<HH", cel_width, cel_height) + data
        chunks.append(_chunk(CHUNK_CEL, body))
        linked.append(
            _chunk(
                CHUNK_CEL,
                CEL_HEADER.pack(layer_index, x, y, 255, CEL_LINKED, 0) + struct.pack("<H", 0),
            )
        )

    frames = _frame(chunks)
    frame_count = 1
    if linked_frame:
        frames += _frame(linked)
        frame_count = 2

    header = HEADER.pack(
        HEADER.size + len(frames),
        ASE_MAGIC,
        frame_count,
        width,
        height,
        color_depth,
        1,
        100,
        0,
        0,
        transparent_index,
        len(palette_alpha) if palette_alpha is not None else 0,
        1,
        1,
        0,
        0,
        16,
        16,
    )
    return header + frames
