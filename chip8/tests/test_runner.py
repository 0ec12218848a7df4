"""Tests for the paced runner."""

from __future__ import annotations

import threading
import time
from typing import List

import numpy as np

from chip8.config import MachineConfig
from chip8.emulator import Chip8Emulator
from chip8.runner import Chip8Runner

# Draw glyph "0", then spin.
DRAW_AND_LOOP = bytes([0xD0, 0x05, 0x12, 0x02])


def _emulator(rom: bytes = DRAW_AND_LOOP, **config) -> Chip8Emulator:
    emu = Chip8Emulator(MachineConfig(**config))
    assert emu.load_rom(rom)
    return emu


def test_frame_runs_cycles_then_ticks() -> None:
    emu = _emulator(bytes([0x60, 0x05, 0xF0, 0x15, 0x12, 0x04]), cycles_per_second=120)
    runner = Chip8Runner(emu)
    runner.run_frame()
    assert emu.instruction_count == 2
    assert emu.delay_timer.value == 4
    runner.run_frames(3)
    assert emu.delay_timer.value == 1
    assert runner.frame_count == 4


def test_frame_callback_only_on_redraw() -> None:
    frames: List[np.ndarray] = []
    runner = Chip8Runner(_emulator(), on_frame=frames.append)

    assert runner.run_frames(5) == 1
    assert len(frames) == 1
    assert frames[0][0, 0]
    assert not runner.emulator.needs_redraw


def test_snapshot_is_a_copy() -> None:
    runner = Chip8Runner(_emulator())
    runner.run_frame()
    snap = runner.snapshot_frame()
    snap[:] = False
    assert runner.emulator.display.pixel(0, 0)


def test_keys_posted_through_runner() -> None:
    emu = _emulator(bytes([0xF3, 0x0A, 0x12, 0x02]))
    runner = Chip8Runner(emu)
    runner.run_frame()
    assert emu.regs.pc == 0x200

    runner.press_key(0xC)
    runner.run_frame()
    assert emu.regs[3] == 0xC
    runner.release_key(0xC)
    runner.run_frame()
    assert not emu.is_key_down(0xC)


def test_halted_machine_stops_cycling() -> None:
    emu = _emulator(bytes([0x01, 0x23]), fault_policy="halt")
    runner = Chip8Runner(emu)
    runner.run_frames(3)
    assert emu.fault_count == 1


def test_background_thread_start_stop() -> None:
    runner = Chip8Runner(_emulator())
    runner.start()
    try:
        deadline = time.monotonic() + 2.0
        while runner.frame_count < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        runner.stop()
    assert runner.frame_count >= 3
    assert not runner.running


def test_run_for_paces_frames() -> None:
    runner = Chip8Runner(_emulator())
    runner.run_for(0.1)
    assert 1 <= runner.frame_count <= 12


def test_stop_timeout_keeps_live_thread() -> None:
    release = threading.Event()
    entered = threading.Event()

    def on_frame(frame: np.ndarray) -> None:
        entered.set()
        release.wait(2.0)

    runner = Chip8Runner(_emulator(), on_frame=on_frame)
    runner.start()
    try:
        assert entered.wait(2.0)
        thread = runner._thread
        runner.stop(timeout=0.01)
        assert runner.running

        runner.start()
        assert runner._thread is thread
    finally:
        release.set()
        runner.stop()
    assert not runner.running
