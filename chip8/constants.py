"""Shared machine constants for the CHIP-8 interpreter.

Centralizes the address-space layout, display geometry and the built-in
font so the memory, display and dispatch modules agree on them.
"""

# Total addressable memory. Valid addresses are [0, MEMORY_SIZE - 1].
MEMORY_SIZE = 0x1000  # 4096 bytes
MAX_ADDRESS = MEMORY_SIZE - 1

# Programs are loaded (and execution starts) at 0x200. The region below it
# historically held the interpreter itself; only the font lives there now.
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

FONT_START = 0x000
FONT_GLYPH_SIZE = 5

# Register file
NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF

STACK_DEPTH = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8

# Keypad codes are single hex digits.
NUM_KEYS = 16

TIMER_HZ = 60

# 4x5 glyphs for 0-F, one byte per row, high nibble used.
FONT_SET = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)
