"""Tests for framebuffer image rendering."""

import numpy as np
import pytest
from PIL import Image

from . import DEFAULT_OFF_COLOR, DEFAULT_ON_COLOR, render_image, save_screenshot
from ..emulator import Chip8Emulator


def test_render_colors_and_size() -> None:
    pixels = np.zeros((32, 64), dtype=bool)
    pixels[0, 0] = True
    image = render_image(pixels)
    assert isinstance(image, Image.Image)
    assert image.size == (64, 32)
    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == DEFAULT_ON_COLOR
    assert image.getpixel((1, 0)) == DEFAULT_OFF_COLOR


def test_render_zoom_is_nearest_neighbour() -> None:
    pixels = np.zeros((32, 64), dtype=bool)
    pixels[1, 2] = True
    image = render_image(pixels, zoom=4, on_color=(255, 255, 255))
    assert image.size == (256, 128)
    assert image.getpixel((8, 4)) == (255, 255, 255)
    assert image.getpixel((11, 7)) == (255, 255, 255)
    assert image.getpixel((12, 7)) == (0, 0, 0)


def test_render_rejects_bad_zoom() -> None:
    with pytest.raises(ValueError):
        render_image(np.zeros((32, 64), dtype=bool), zoom=0)


def test_save_screenshot(tmp_path) -> None:
    emu = Chip8Emulator()
    emu.load_rom(bytes([0xD0, 0x05]))  # glyph "0" at (0, 0)
    emu.cycle()

    path = save_screenshot(emu, tmp_path / "screen.png", zoom=2)
    with Image.open(path) as image:
        assert image.size == (128, 64)
        assert image.convert("RGB").getpixel((0, 0)) == DEFAULT_ON_COLOR
