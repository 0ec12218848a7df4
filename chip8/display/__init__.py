"""Display subsystem for the CHIP-8 interpreter."""

from .framebuffer import Framebuffer
from .render import (
    DEFAULT_OFF_COLOR,
    DEFAULT_ON_COLOR,
    render_image,
    save_screenshot,
)

__all__ = [
    "Framebuffer",
    "render_image",
    "save_screenshot",
    "DEFAULT_ON_COLOR",
    "DEFAULT_OFF_COLOR",
]
