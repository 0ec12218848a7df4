"""CHIP-8 emulator: fetch/decode/execute loop, fault policy and timers."""

from __future__ import annotations

import logging
import random
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from .config import FaultPolicy, MachineConfig
from .constants import FONT_GLYPH_SIZE, FONT_START, MAX_ADDRESS, PROGRAM_START
from .display import Framebuffer
from .errors import Chip8Fault, FetchOutOfBounds, RomTooLarge, UnmappedOpcode
from .instruction import Instruction, decode
from .keypad import Keypad
from .memory import Chip8Memory, read_rom_file
from .registers import RegisterFile
from .stack import CallStack
from .timers import DelayTimer

logger = logging.getLogger(__name__)

FaultListener = Callable[[Chip8Fault], None]


class MachineState(Enum):
    RUNNING = "running"
    WAIT_KEY = "wait_key"  # blocked on FX0A, re-polling every cycle
    HALTED = "halted"


class Chip8Emulator:
    """Single CHIP-8 machine.

    The driver calls :meth:`cycle` once per instruction and :meth:`tick_60hz`
    at 60 Hz; the two rates are independent. Key events arrive through
    :meth:`set_key` (or ``keypad.post`` from another thread) and the render
    side reads :attr:`pixels` and :attr:`needs_redraw`.

    Faults raised while executing an instruction are caught here, reported to
    fault listeners, and resolved by ``config.fault_policy``. Handlers check
    every memory range and stack bound before mutating, so a fault never
    leaves a half-executed instruction behind.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        keypad: Optional[Keypad] = None,
    ):
        self.config = config or MachineConfig()
        self._rng = rng if rng is not None else random.Random()

        self.memory = Chip8Memory()
        self.regs = RegisterFile()
        self.stack = CallStack()
        self.display = Framebuffer()
        self.keypad = keypad if keypad is not None else Keypad()
        self.delay_timer = DelayTimer()

        self.state = MachineState.RUNNING
        self.rom_loaded = False
        self.instruction_count = 0
        self.fault_count = 0
        self.last_fault: Optional[Chip8Fault] = None
        self.last_instruction: Optional[Instruction] = None
        self._fault_listeners: List[FaultListener] = []
        self._last_logged_fault: Optional[Tuple[type, Optional[int]]] = None

        self.memory.load_font()

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def load_rom(self, rom: bytes) -> bool:
        """Reset the machine and load ``rom`` at 0x200.

        Returns False (after reporting :class:`RomTooLarge`) when the ROM does
        not fit; in that case nothing is modified.
        """
        try:
            self.memory.load_rom(bytes(rom))
        except RomTooLarge as exc:
            self._report_fault(exc)
            return False

        self.regs.reset()
        self.stack.clear()
        self.delay_timer.reset()
        self.display.reset()
        self.state = MachineState.RUNNING
        self.rom_loaded = True
        self.instruction_count = 0
        self.fault_count = 0
        self.last_fault = None
        self.last_instruction = None
        self._last_logged_fault = None

        logger.info("Loaded %d-byte ROM at 0x%03X", len(rom), PROGRAM_START)
        return True

    def load_rom_file(self, path: Union[str, Path]) -> bool:
        logger.info("Loading ROM from %s", path)
        try:
            rom = read_rom_file(path)
        except OSError as exc:
            logger.error("Cannot read ROM %s: %s", path, exc)
            return False
        return self.load_rom(rom)

    # ------------------------------------------------------------------ #
    # Observers
    # ------------------------------------------------------------------ #

    def add_fault_listener(self, listener: FaultListener) -> None:
        self._fault_listeners.append(listener)

    def remove_fault_listener(self, listener: FaultListener) -> None:
        self._fault_listeners.remove(listener)

    def _report_fault(self, fault: Chip8Fault) -> None:
        self.fault_count += 1
        self.last_fault = fault

        # A frozen machine repeats the same fault every cycle; log it once.
        key = (type(fault), fault.pc)
        if key != self._last_logged_fault:
            logger.warning("%s", fault)
            self._last_logged_fault = key
        else:
            logger.debug("%s (repeated)", fault)

        for listener in list(self._fault_listeners):
            listener(fault)

    def _handle_fault(self, fault: Chip8Fault, pc: int, *, fetch: bool = False) -> None:
        if fault.pc is None:
            fault.pc = pc

        # PC and state settle before listeners run.
        policy = self.config.fault_policy
        if policy is FaultPolicy.SKIP and not fetch:
            self.regs.pc = pc + 2
        else:
            self.regs.pc = pc
        if policy is FaultPolicy.HALT:
            self.state = MachineState.HALTED
            logger.error("Machine halted at 0x%04X", pc)

        self._report_fault(fault)

    # ------------------------------------------------------------------ #
    # Driver contract
    # ------------------------------------------------------------------ #

    def cycle(self) -> Optional[Instruction]:
        """Fetch, decode and execute one instruction.

        Returns the decoded instruction, or None when nothing was fetched.
        """
        self.keypad.apply_pending()

        if self.state is MachineState.HALTED:
            return None

        pc = self.regs.pc
        if pc + 1 > MAX_ADDRESS:
            self._handle_fault(FetchOutOfBounds(pc), pc, fetch=True)
            return None

        instr = decode(self.memory.read_word(pc))
        self.regs.advance()
        self.last_instruction = instr

        try:
            self._execute(instr)
        except Chip8Fault as fault:
            self._handle_fault(fault, pc)
        else:
            self.instruction_count += 1
        return instr

    def tick_60hz(self) -> None:
        self.delay_timer.tick()

    def set_key(self, code: int, is_down: bool) -> bool:
        return self.keypad.set_key(code, is_down)

    def is_key_down(self, code: int) -> bool:
        return self.keypad.is_key_down(code)

    @property
    def pixels(self) -> np.ndarray:
        return self.display.pixels

    @property
    def needs_redraw(self) -> bool:
        return self.display.needs_redraw

    @needs_redraw.setter
    def needs_redraw(self, value: bool) -> None:
        self.display.needs_redraw = bool(value)

    def consume_redraw(self) -> bool:
        return self.display.consume_redraw()

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def _random_byte(self) -> int:
        return self._rng.randrange(256) & 0xFF

    def _execute(self, i: Instruction) -> None:
        regs = self.regs

        match i.first_nibble:
            case 0x0:
                match i.nn:
                    case 0xE0:
                        self.display.clear()
                    case 0xEE:
                        regs.pc = self.stack.pop()
                    case _:
                        raise UnmappedOpcode(i.opcode)
            case 0x1:
                regs.pc = i.nnn
            case 0x2:
                self.stack.push(regs.pc)
                regs.pc = i.nnn
            case 0x3:
                if regs[i.x] == i.nn:
                    regs.advance()
            case 0x4:
                if regs[i.x] != i.nn:
                    regs.advance()
            case 0x5:
                if regs[i.x] == regs[i.y]:
                    regs.advance()
            case 0x6:
                regs[i.x] = i.nn
            case 0x7:
                regs[i.x] = regs[i.x] + i.nn
            case 0x8:
                self._arithmetic(i)
            case 0x9:
                if regs[i.x] != regs[i.y]:
                    regs.advance()
            case 0xA:
                regs.i = i.nnn
            case 0xB:
                regs.pc = i.nnn + regs[0]
            case 0xC:
                regs[i.x] = self._random_byte() & i.nn
            case 0xD:
                self._draw_sprite(i)
            case 0xE:
                match i.nn:
                    case 0x9E:
                        if self.keypad.is_key_down(regs[i.x]):
                            regs.advance()
                    case 0xA1:
                        if not self.keypad.is_key_down(regs[i.x]):
                            regs.advance()
                    case _:
                        raise UnmappedOpcode(i.opcode)
            case 0xF:
                self._misc(i)

    def _arithmetic(self, i: Instruction) -> None:
        """8XYN register arithmetic. Results land before VF so the flag wins."""
        regs = self.regs
        vx = regs[i.x]
        vy = regs[i.y]

        match i.n:
            case 0x0:
                regs[i.x] = vy
            case 0x1:
                regs[i.x] = vx | vy
            case 0x2:
                regs[i.x] = vx & vy
            case 0x3:
                regs[i.x] = vx ^ vy
            case 0x4:
                total = vx + vy
                regs[i.x] = total
                regs.flag = total > 0xFF
            case 0x5:
                regs[i.x] = vx - vy
                regs.flag = vx >= vy
            case 0x6:
                source = vy if self.config.shift_uses_vy else vx
                regs[i.x] = source >> 1
                regs.flag = source & 0x1
            case 0x7:
                regs[i.y] = vy - vx
                regs.flag = vy >= vx
            case 0xE:
                source = vy if self.config.shift_uses_vy else vx
                regs[i.x] = source << 1
                regs.flag = source >> 7
            case _:
                raise UnmappedOpcode(i.opcode)

    def _draw_sprite(self, i: Instruction) -> None:
        sprite = self.memory.read_block(self.regs.i, i.n)
        collided = self.display.draw_sprite(self.regs[i.x], self.regs[i.y], sprite)
        self.regs.flag = collided

    def _misc(self, i: Instruction) -> None:
        regs = self.regs

        match i.nn:
            case 0x07:
                regs[i.x] = self.delay_timer.value
            case 0x0A:
                key = self.keypad.last_pressed_key()
                if key is None:
                    regs.rewind()
                    self.state = MachineState.WAIT_KEY
                else:
                    regs[i.x] = key
                    self.state = MachineState.RUNNING
            case 0x15:
                self.delay_timer.set(regs[i.x])
            case 0x18:
                pass  # sound timer is not emulated
            case 0x1E:
                regs.i = regs.i + regs[i.x]
            case 0x29:
                regs.i = FONT_START + regs[i.x] * FONT_GLYPH_SIZE
            case 0x33:
                value = regs[i.x]
                self.memory.write_block(
                    regs.i, (value // 100 % 10, value // 10 % 10, value % 10)
                )
            case 0x55:
                self.memory.write_block(regs.i, regs.v[: i.x + 1])
            case 0x65:
                for index, value in enumerate(self.memory.read_block(regs.i, i.x + 1)):
                    regs[index] = value
            case _:
                raise UnmappedOpcode(i.opcode)


__all__ = ["Chip8Emulator", "MachineState", "FaultListener"]
