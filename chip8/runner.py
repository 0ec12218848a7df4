"""Paced driver loop decoupling instruction rate from the 60 Hz timer."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

import numpy as np

from .config import MachineConfig
from .emulator import Chip8Emulator, MachineState

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


class Chip8Runner:
    """Drive an emulator at ``cycles_per_second`` with a separate timer rate.

    Each frame executes ``config.cycles_per_frame`` cycles followed by one
    ``tick_60hz()``. When the redraw flag was raised during the frame the
    frame callback receives a copy of the framebuffer taken under the runner
    lock, so renderers never observe a half-drawn frame.
    """

    def __init__(
        self,
        emulator: Chip8Emulator,
        config: Optional[MachineConfig] = None,
        *,
        on_frame: Optional[FrameCallback] = None,
    ) -> None:
        self.emulator = emulator
        self.config = config or emulator.config
        self.on_frame = on_frame
        self.frame_count = 0
        self._lock = threading.RLock()
        self._shutdown = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------ #
    # Synchronous stepping
    # ------------------------------------------------------------------ #

    def run_frame(self) -> bool:
        """Run one timer period worth of cycles. Returns True if redrawn."""

        with self._lock:
            emu = self.emulator
            for _ in range(self.config.cycles_per_frame):
                if emu.state is MachineState.HALTED:
                    break
                emu.cycle()
            emu.tick_60hz()
            self.frame_count += 1

            if not emu.consume_redraw():
                return False
            frame = emu.display.snapshot()

        if self.on_frame is not None:
            self.on_frame(frame)
        return True

    def run_frames(self, count: int) -> int:
        """Run ``count`` frames back to back; returns how many redrew."""

        redraws = 0
        for _ in range(count):
            if self.run_frame():
                redraws += 1
        return redraws

    def snapshot_frame(self) -> np.ndarray:
        with self._lock:
            return self.emulator.display.snapshot()

    # ------------------------------------------------------------------ #
    # Input forwarding (safe from any thread)
    # ------------------------------------------------------------------ #

    def press_key(self, code: int) -> None:
        self.emulator.keypad.post(code, True)

    def release_key(self, code: int) -> None:
        self.emulator.keypad.post(code, False)

    # ------------------------------------------------------------------ #
    # Background loop
    # ------------------------------------------------------------------ #

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Run frames on a daemon thread at ``config.timer_hz``."""

        if self.running:
            return
        self._shutdown.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name="Chip8Runner", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._shutdown.set()
        if self._thread is None:
            return
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            # Handle stays set while the loop is alive.
            logger.warning("runner thread did not stop within %.2fs", timeout)
            return
        self._thread = None

    def run_for(self, seconds: float) -> None:
        """Run in real time on the calling thread for ``seconds``."""

        deadline = time.perf_counter() + seconds
        self._shutdown.clear()
        self._paced_loop(deadline)

    def _run_loop(self) -> None:
        logger.debug("runner thread started")
        self._paced_loop(None)
        logger.debug("runner thread stopped")

    def _paced_loop(self, deadline: Optional[float]) -> None:
        period = 1.0 / self.config.timer_hz
        next_frame = time.perf_counter()
        while not self._shutdown.is_set():
            now = time.perf_counter()
            if deadline is not None and now >= deadline:
                break
            if now < next_frame:
                self._shutdown.wait(next_frame - now)
                continue
            self.run_frame()
            next_frame += period
            # Resynchronize when more than four frames behind.
            if time.perf_counter() - next_frame > period * 4:
                next_frame = time.perf_counter()


__all__ = ["Chip8Runner", "FrameCallback"]
