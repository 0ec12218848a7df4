"""Immutable machine state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

import numpy as np

from .emulator import Chip8Emulator


@dataclass(frozen=True)
class CPUState:
    """Registers, call stack and execution state."""

    v: Tuple[int, ...]
    i: int
    pc: int
    stack: Tuple[int, ...]
    state: str
    instruction_count: int


@dataclass(frozen=True)
class TimerState:
    delay: int


@dataclass(frozen=True)
class DisplayState:
    """Visible and pending-clear grids packed one bit per pixel."""

    pixels: bytes
    pending_clear: bytes
    needs_redraw: bool


@dataclass(frozen=True)
class KeypadState:
    pressed_keys: Tuple[int, ...]


@dataclass(frozen=True)
class MachineSnapshot:
    """Composite immutable snapshot of the machine."""

    cpu: CPUState
    memory: bytes
    timers: TimerState
    display: DisplayState
    keypad: KeypadState


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two snapshots."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    keypad: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory_changed: Tuple[int, ...] = field(default_factory=tuple)
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.timers
            and not self.keypad
            and not self.memory_changed
            and not self.display_changed
        )


def capture_state(emu: Chip8Emulator) -> MachineSnapshot:
    """Capture the observable state of ``emu``."""

    return MachineSnapshot(
        cpu=CPUState(
            v=emu.regs.v,
            i=emu.regs.i,
            pc=emu.regs.pc,
            stack=tuple(emu.stack),
            state=emu.state.value,
            instruction_count=emu.instruction_count,
        ),
        memory=emu.memory.dump(),
        timers=TimerState(delay=emu.delay_timer.value),
        display=DisplayState(
            pixels=np.packbits(emu.display.pixels).tobytes(),
            pending_clear=np.packbits(emu.display.pending_clear).tobytes(),
            needs_redraw=emu.display.needs_redraw,
        ),
        keypad=KeypadState(pressed_keys=emu.keypad.pressed_keys()),
    )


def _diff_fields(prefix: str, before: object, after: object) -> Tuple[FieldDiff, ...]:
    diffs = []
    for f in fields(before):  # type: ignore[arg-type]
        old = getattr(before, f.name)
        new = getattr(after, f.name)
        if old != new:
            diffs.append(FieldDiff(f"{prefix}.{f.name}", old, new))
    return tuple(diffs)


def diff_states(
    before: MachineSnapshot,
    after: MachineSnapshot,
    *,
    memory_limit: Optional[int] = None,
) -> StateDiff:
    """Compare two snapshots.

    ``memory_changed`` lists differing addresses, truncated to
    ``memory_limit`` entries when given.
    """

    changed = [
        addr
        for addr, (old, new) in enumerate(zip(before.memory, after.memory))
        if old != new
    ]
    if memory_limit is not None:
        changed = changed[:memory_limit]

    return StateDiff(
        cpu=_diff_fields("cpu", before.cpu, after.cpu),
        timers=_diff_fields("timers", before.timers, after.timers),
        keypad=_diff_fields("keypad", before.keypad, after.keypad),
        memory_changed=tuple(changed),
        display_changed=before.display != after.display,
    )


__all__ = [
    "CPUState",
    "TimerState",
    "DisplayState",
    "KeypadState",
    "MachineSnapshot",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
]
