"""Monochrome framebuffer with XOR sprite drawing and deferred clears."""

from __future__ import annotations

import numpy as np

from ..constants import SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH


class Framebuffer:
    """64x32 one-bit display owned by the execution thread.

    Pixels are stored row-major as ``pixels[y, x]``. Pixels erased by a draw
    are not turned off immediately: they are recorded in a pending-clear grid
    and applied by the flush that starts the next draw. This batches visual
    clears with the following frame instead of flickering clear-then-redraw.

    ``needs_redraw`` is edge-triggered; the render side clears it through
    :meth:`consume_redraw` once it has painted.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width), dtype=bool)
        self._pending_clear = np.zeros((height, width), dtype=bool)
        self.needs_redraw = True

    def reset(self) -> None:
        self._pixels[:] = False
        self._pending_clear[:] = False
        self.needs_redraw = True

    # ------------------------------------------------------------------ #
    # Read side
    # ------------------------------------------------------------------ #

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the visible grid."""

        view = self._pixels.view()
        view.flags.writeable = False
        return view

    @property
    def pending_clear(self) -> np.ndarray:
        view = self._pending_clear.view()
        view.flags.writeable = False
        return view

    def pixel(self, x: int, y: int) -> bool:
        return bool(self._pixels[y, x])

    def snapshot(self) -> np.ndarray:
        """Independent copy of the visible grid."""

        return self._pixels.copy()

    def consume_redraw(self) -> bool:
        """Return the redraw flag and clear it."""

        redraw = self.needs_redraw
        self.needs_redraw = False
        return redraw

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def clear(self) -> None:
        changed = bool(self._pixels.any())
        self._pixels[:] = False
        self._pending_clear[:] = False
        if changed:
            self.needs_redraw = True

    def flush(self) -> None:
        """Apply every pending clear."""

        pending = self._pending_clear
        if not pending.any():
            return
        if (self._pixels & pending).any():
            self.needs_redraw = True
        self._pixels[pending] = False
        pending[:] = False

    def draw_sprite(self, start_x: int, start_y: int, sprite: bytes) -> bool:
        """XOR ``sprite`` (one byte per row, MSB leftmost) onto the grid.

        Coordinates wrap around both edges. Returns True if any pixel went
        from on to off.
        """

        self.flush()

        rows = len(sprite)
        if rows == 0:
            return False
        bits = np.unpackbits(np.frombuffer(bytes(sprite), dtype=np.uint8))
        bits = bits.reshape(rows, SPRITE_WIDTH).astype(bool)

        ys = (start_y + np.arange(rows)) % self.height
        xs = (start_x + np.arange(SPRITE_WIDTH)) % self.width
        region = np.ix_(ys, xs)

        old = self._pixels[region]
        new = old ^ bits

        if (old != new).any():
            self.needs_redraw = True

        # Newly lit pixels show now; erased pixels stay lit until the next flush.
        self._pixels[region] = old | new
        self._pending_clear[region] |= ~new

        return bool((old & ~new).any())


__all__ = ["Framebuffer"]
