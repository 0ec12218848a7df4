"""Fault taxonomy for the CHIP-8 core.

Every fault is recoverable at cycle granularity: components raise, and the
emulator catches :class:`Chip8Fault` at the cycle boundary and applies the
configured fault policy.
"""

from __future__ import annotations

from typing import Optional


class Chip8Fault(Exception):
    """Base class for every fault raised by the interpreter core."""

    def __init__(self, message: str, *, pc: Optional[int] = None) -> None:
        super().__init__(message)
        self.pc = pc

    def __str__(self) -> str:
        base = super().__str__()
        if self.pc is None:
            return base
        return f"{base} (pc=0x{self.pc:04X})"


class RomTooLarge(Chip8Fault):
    """ROM does not fit between the program start and the end of memory."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"ROM is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit


class MemoryOutOfBounds(Chip8Fault):
    """Memory access outside the addressable space."""

    def __init__(self, address: int, count: int = 1) -> None:
        if count == 1:
            message = f"memory access out of bounds at 0x{address:04X}"
        else:
            message = (
                f"memory access out of bounds: 0x{address:04X}+{count} bytes"
            )
        super().__init__(message)
        self.address = address
        self.count = count


class FetchOutOfBounds(Chip8Fault):
    """The program counter points past the last fetchable instruction slot."""

    def __init__(self, pc: int) -> None:
        super().__init__("instruction fetch past end of memory", pc=pc)


class UnmappedOpcode(Chip8Fault):
    """No handler exists for the decoded instruction."""

    def __init__(self, opcode: int, pc: Optional[int] = None) -> None:
        super().__init__(f"unmapped opcode 0x{opcode:04X}", pc=pc)
        self.opcode = opcode


class StackFault(Chip8Fault):
    """Call stack pushed past its depth or popped while empty."""


class StackOverflow(StackFault):
    def __init__(self, depth: int) -> None:
        super().__init__(f"call stack overflow (depth {depth})")
        self.depth = depth


class StackUnderflow(StackFault):
    def __init__(self) -> None:
        super().__init__("return with empty call stack")


__all__ = [
    "Chip8Fault",
    "RomTooLarge",
    "MemoryOutOfBounds",
    "FetchOutOfBounds",
    "UnmappedOpcode",
    "StackFault",
    "StackOverflow",
    "StackUnderflow",
]
