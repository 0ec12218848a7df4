"""CHIP-8 register file: V0..VF, the index register and the program counter."""

from __future__ import annotations

from typing import Tuple

from .constants import (
    BYTE_MASK,
    FLAG_REGISTER,
    NUM_REGISTERS,
    PROGRAM_START,
    WORD_MASK,
)


class RegisterFile:
    """General registers plus ``I`` and ``PC``.

    ``VF`` doubles as the carry/borrow/collision output and is reached through
    :attr:`flag` by opcodes that define a flag outcome.
    """

    def __init__(self) -> None:
        self._v = [0] * NUM_REGISTERS
        self._i = 0
        self._pc = PROGRAM_START

    def reset(self) -> None:
        self._v = [0] * NUM_REGISTERS
        self._i = 0
        self._pc = PROGRAM_START

    def __getitem__(self, index: int) -> int:
        return self._v[index]

    def __setitem__(self, index: int, value: int) -> None:
        if not 0 <= index < NUM_REGISTERS:
            raise IndexError(f"register V{index:X} does not exist")
        self._v[index] = value & BYTE_MASK

    @property
    def v(self) -> Tuple[int, ...]:
        return tuple(self._v)

    @property
    def flag(self) -> int:
        return self._v[FLAG_REGISTER]

    @flag.setter
    def flag(self, value: int) -> None:
        self._v[FLAG_REGISTER] = 1 if value else 0

    @property
    def i(self) -> int:
        return self._i

    @i.setter
    def i(self, value: int) -> None:
        self._i = value & WORD_MASK

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int) -> None:
        self._pc = value & WORD_MASK

    def advance(self) -> None:
        """Step PC over one 2-byte instruction."""

        self.pc = self._pc + 2

    def rewind(self) -> None:
        """Step PC back one instruction so it is fetched again."""

        self.pc = self._pc - 2

    def __repr__(self) -> str:
        regs = " ".join(f"V{idx:X}={val:02X}" for idx, val in enumerate(self._v))
        return f"RegisterFile({regs} I={self._i:04X} PC={self._pc:04X})"


__all__ = ["RegisterFile"]
