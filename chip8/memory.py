"""Bounds-checked 4 KiB memory with font and ROM placement."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

from .constants import (
    BYTE_MASK,
    FONT_SET,
    FONT_START,
    MAX_ROM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
)
from .errors import MemoryOutOfBounds, RomTooLarge

logger = logging.getLogger(__name__)


class Chip8Memory:
    """Flat byte-addressable memory; every access is range-checked."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        self.size = size
        self._data = bytearray(size)

    def __len__(self) -> int:
        return self.size

    # ------------------------------------------------------------------ #
    # Access
    # ------------------------------------------------------------------ #

    def check_range(self, address: int, count: int = 1) -> None:
        """Raise :class:`MemoryOutOfBounds` unless ``[address, address+count)`` is valid."""

        if address < 0 or count < 0 or address + count > self.size:
            raise MemoryOutOfBounds(address, count)

    def read_byte(self, address: int) -> int:
        self.check_range(address)
        return self._data[address]

    def write_byte(self, address: int, value: int) -> None:
        self.check_range(address)
        self._data[address] = value & BYTE_MASK

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit word."""

        self.check_range(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, count: int) -> bytes:
        self.check_range(address, count)
        return bytes(self._data[address : address + count])

    def write_block(self, address: int, data: Iterable[int]) -> None:
        payload = bytes(value & BYTE_MASK for value in data)
        self.check_range(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def dump(self) -> bytes:
        """Return a copy of the full address space."""

        return bytes(self._data)

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def reset(self) -> None:
        self._data = bytearray(self.size)

    def load_font(self, font: bytes = FONT_SET) -> None:
        self.write_block(FONT_START, font)

    def load_rom(self, rom: bytes) -> None:
        """Zero memory, then place the font and ``rom`` at the program start.

        Oversized ROMs are rejected before anything is touched.
        """

        limit = min(MAX_ROM_SIZE, self.size - PROGRAM_START)
        if len(rom) > limit:
            raise RomTooLarge(len(rom), limit)
        self.reset()
        self.write_block(PROGRAM_START, rom)
        self.load_font()
        logger.debug("Copied %d ROM bytes to 0x%03X", len(rom), PROGRAM_START)


def read_rom_file(path: Union[str, Path]) -> bytes:
    """Read a ROM image from disk."""

    with open(path, "rb") as fh:
        return fh.read()


__all__ = ["Chip8Memory", "read_rom_file"]
