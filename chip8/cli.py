#!/usr/bin/env python3
"""Headless command-line runner for CHIP-8 ROMs."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import FaultPolicy, MachineConfig
from .display import save_screenshot
from .emulator import Chip8Emulator
from .runner import Chip8Runner

logger = logging.getLogger(__name__)


def _hex_key(text: str) -> int:
    try:
        code = int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex key: {text!r}") from None
    if not 0 <= code <= 0xF:
        raise argparse.ArgumentTypeError(f"key must be 0-F, got {text!r}")
    return code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a CHIP-8 ROM headless")
    parser.add_argument("rom", type=str, help="Path to the ROM image")
    parser.add_argument(
        "--config", type=str, help="JSON machine configuration to start from"
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Number of 60 Hz frames to run (default: 600, ten seconds)",
    )
    parser.add_argument(
        "--cycles-per-second", type=int, help="Instructions executed per second"
    )
    parser.add_argument(
        "--fault-policy",
        choices=[policy.value for policy in FaultPolicy],
        help="What to do after a fault (default: freeze)",
    )
    parser.add_argument(
        "--legacy-shift",
        action="store_true",
        help="8XY6/8XYE shift Vy into Vx (COSMAC VIP behaviour)",
    )
    parser.add_argument(
        "--hold-key",
        type=_hex_key,
        action="append",
        default=[],
        metavar="HEX",
        help="Hold a keypad key down for the whole run (repeatable)",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace frames at wall-clock speed instead of running flat out",
    )
    parser.add_argument(
        "--screenshot", type=str, help="Save the final screen to this image file"
    )
    parser.add_argument("--zoom", type=int, help="Screenshot pixel zoom")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> MachineConfig:
    config = MachineConfig.load(args.config) if args.config else MachineConfig()
    if args.cycles_per_second is not None:
        config.cycles_per_second = args.cycles_per_second
    if args.fault_policy is not None:
        config.fault_policy = FaultPolicy(args.fault_policy)
    if args.legacy_shift:
        config.shift_uses_vy = True
    if args.zoom is not None:
        config.zoom = args.zoom
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    emu = Chip8Emulator(config)
    if not emu.load_rom_file(args.rom):
        logger.error("Failed to load ROM %s", args.rom)
        return 1

    for code in args.hold_key:
        emu.set_key(code, True)

    runner = Chip8Runner(emu)
    if args.realtime:
        runner.run_for(args.frames / config.timer_hz)
    else:
        runner.run_frames(args.frames)

    print(
        f"frames={runner.frame_count} instructions={emu.instruction_count} "
        f"faults={emu.fault_count} state={emu.state.value} pc=0x{emu.regs.pc:04X}"
    )

    if args.screenshot:
        path = save_screenshot(
            emu, args.screenshot, config.zoom, config.on_color, config.off_color
        )
        print(f"Saved screen to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
