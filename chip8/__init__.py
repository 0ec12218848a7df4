"""CHIP-8 interpreter package."""

from .config import FaultPolicy, MachineConfig
from .emulator import Chip8Emulator, MachineState
from .errors import (
    Chip8Fault,
    FetchOutOfBounds,
    MemoryOutOfBounds,
    RomTooLarge,
    StackFault,
    StackOverflow,
    StackUnderflow,
    UnmappedOpcode,
)
from .instruction import Instruction, decode
from .keypad import Keypad
from .runner import Chip8Runner
from .state_model import (
    MachineSnapshot,
    StateDiff,
    capture_state,
    diff_states,
)

__all__ = [
    "Chip8Emulator",
    "Chip8Runner",
    "MachineState",
    "MachineConfig",
    "FaultPolicy",
    "Instruction",
    "decode",
    "Keypad",
    "Chip8Fault",
    "RomTooLarge",
    "FetchOutOfBounds",
    "UnmappedOpcode",
    "MemoryOutOfBounds",
    "StackFault",
    "StackOverflow",
    "StackUnderflow",
    "MachineSnapshot",
    "StateDiff",
    "capture_state",
    "diff_states",
]
