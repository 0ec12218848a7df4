"""Instruction decoding for 16-bit CHIP-8 opcodes."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import WORD_MASK


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode split into its addressing-mode fields.

    For an opcode written as nibbles ``F X Y N``: ``nnn`` is ``XYN``,
    ``nn`` is ``YN`` and ``n`` is ``N``. ``first_nibble`` is the dispatch key; ``x`` and ``y`` select registers.
    """

    opcode: int
    first_nibble: int
    nnn: int
    nn: int
    n: int
    x: int
    y: int

    def __str__(self) -> str:
        return f"0x{self.opcode:04X}"


def decode(opcode: int) -> Instruction:
    """Decode ``opcode`` into an :class:`Instruction`. Total over all ints."""

    opcode &= WORD_MASK
    return Instruction(
        opcode=opcode,
        first_nibble=opcode >> 12,
        nnn=opcode & 0x0FFF,
        nn=opcode & 0x00FF,
        n=opcode & 0x000F,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
    )


__all__ = ["Instruction", "decode"]
