"""Render the framebuffer to PIL images."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Tuple, Union

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from ..emulator import Chip8Emulator

Color = Tuple[int, int, int]

DEFAULT_ON_COLOR: Color = (0, 0x64, 0)
DEFAULT_OFF_COLOR: Color = (0, 0, 0)


def render_image(
    pixels: np.ndarray,
    zoom: int = 1,
    on_color: Color = DEFAULT_ON_COLOR,
    off_color: Color = DEFAULT_OFF_COLOR,
) -> Image.Image:
    """Convert a ``[y, x]`` boolean grid into an RGB image.

    Args:
        pixels: 2D boolean array, one entry per display pixel
        zoom: Integer scale factor (nearest neighbour, no smoothing)
        on_color: RGB for lit pixels
        off_color: RGB for dark pixels

    Returns:
        PIL Image in RGB mode of size ``(width * zoom, height * zoom)``
    """
    if zoom < 1:
        raise ValueError(f"zoom must be >= 1, got {zoom}")

    grid = np.asarray(pixels, dtype=bool)
    rgb = np.empty(grid.shape + (3,), dtype=np.uint8)
    rgb[...] = np.asarray(off_color, dtype=np.uint8)
    rgb[grid] = np.asarray(on_color, dtype=np.uint8)

    image = Image.fromarray(rgb)
    if zoom != 1:
        height, width = grid.shape
        image = image.resize((width * zoom, height * zoom), Image.Resampling.NEAREST)
    return image


def save_screenshot(
    emulator: "Chip8Emulator",
    path: Union[str, Path],
    zoom: int = 1,
    on_color: Color = DEFAULT_ON_COLOR,
    off_color: Color = DEFAULT_OFF_COLOR,
) -> Path:
    """Write the emulator's current screen to ``path`` (format from suffix)."""

    out = Path(path)
    render_image(emulator.display.snapshot(), zoom, on_color, off_color).save(out)
    return out


__all__ = ["render_image", "save_screenshot", "DEFAULT_ON_COLOR", "DEFAULT_OFF_COLOR"]
