"""Shared fixtures for building synthetic sprite sheets."""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from builders import ascii_alpha, encode_aseprite
from sheetfont.config import GlyphConfig, SheetFontSettings


@pytest.fixture
def aseprite_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an encoded Aseprite file into ``tmp_path``."""

    def _write(filename: str = "sheet.aseprite", **kwargs) -> Path:
        path = tmp_path / filename
        path.write_bytes(encode_aseprite(**kwargs))
        return path

    return _write


@pytest.fixture
def png_file(tmp_path: Path) -> Callable[[str, np.ndarray], Path]:
    """Factory writing an RGBA PNG whose alpha channel is ``alpha``."""

    def _write(filename: str, alpha: np.ndarray) -> Path:
        rgba = np.zeros((*alpha.shape, 4), dtype=np.uint8)
        rgba[:, :, 3] = alpha
        path = tmp_path / filename
        Image.fromarray(rgba).save(path)
        return path

    return _write


@pytest.fixture
def small_settings() -> SheetFontSettings:
    """Settings for 4x4 glyph cells with a one-pixel baseline."""
    return SheetFontSettings(glyph=GlyphConfig(width=4, height=4, baseline=1))


@pytest.fixture
def two_glyph_sheet() -> np.ndarray:
    """8x4 sheet with a solid block and a hollow square side by side."""
    return ascii_alpha(
        """
        ##--####
        ##--#--#
        ----#--#
        ----####
        """
    )
