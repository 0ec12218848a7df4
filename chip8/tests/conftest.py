"""Shared pytest fixtures for CHIP-8 core tests."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

import pytest

from chip8.config import MachineConfig
from chip8.emulator import Chip8Emulator


class SequenceRandom:
    """Deterministic stand-in for ``random.Random`` yielding fixed bytes."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)
        self._index = 0

    def randrange(self, stop: int) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value % stop


def program_bytes(*opcodes: int) -> bytes:
    return b"".join(op.to_bytes(2, "big") for op in opcodes)


@pytest.fixture
def make_emu() -> Callable[..., Chip8Emulator]:
    """Build an emulator with the given opcodes loaded at 0x200."""

    def _make(
        *opcodes: int,
        config: Optional[MachineConfig] = None,
        random_bytes: Iterable[int] = (0xA5,),
    ) -> Chip8Emulator:
        emu = Chip8Emulator(config, rng=SequenceRandom(random_bytes))
        assert emu.load_rom(program_bytes(*opcodes))
        return emu

    return _make
