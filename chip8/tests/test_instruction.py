"""Tests for opcode decoding."""

import dataclasses

import pytest
from hypothesis import given, strategies as st

from chip8.instruction import Instruction, decode


def test_decode_load_index() -> None:
    instr = decode(0xA2F0)
    assert instr.first_nibble == 0xA
    assert instr.nnn == 0x2F0
    assert instr.nn == 0xF0
    assert instr.n == 0x0
    assert instr.x == 0x2
    assert instr.y == 0xF


def test_decode_register_fields() -> None:
    instr = decode(0x8AB4)
    assert instr.first_nibble == 0x8
    assert instr.x == 0xA
    assert instr.y == 0xB
    assert instr.n == 0x4


def test_decode_masks_to_16_bits() -> None:
    assert decode(0x1_D123) == decode(0xD123)


def test_instruction_is_immutable_and_printable() -> None:
    instr = decode(0x00E0)
    assert str(instr) == "0x00E0"
    with pytest.raises(dataclasses.FrozenInstanceError):
        instr.nn = 0  # type: ignore[misc]


@given(st.integers(min_value=0, max_value=0xFFFF))
def test_decode_is_total_and_exact(opcode: int) -> None:
    instr = decode(opcode)
    assert isinstance(instr, Instruction)
    assert instr.opcode == opcode
    assert instr.first_nibble == (opcode >> 12) & 0xF
    assert instr.nnn == opcode & 0xFFF
    assert instr.nn == opcode & 0xFF
    assert instr.n == opcode & 0xF
    assert instr.x == (opcode >> 8) & 0xF
    assert instr.y == (opcode >> 4) & 0xF
    # Fields recompose the input word.
    assert (instr.first_nibble << 12) | (instr.x << 8) | (instr.y << 4) | instr.n == opcode
    assert decode(opcode) == instr
