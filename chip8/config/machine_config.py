"""Machine configuration for the CHIP-8 interpreter."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import json

from ..constants import TIMER_HZ


class FaultPolicy(Enum):
    """What the dispatch engine does with PC after a fault."""

    FREEZE = "freeze"  # re-attempt the faulting instruction every cycle
    SKIP = "skip"      # continue with the next instruction
    HALT = "halt"      # stop executing until the next ROM load


def _color(value) -> Tuple[int, int, int]:
    if isinstance(value, str):
        text = value.lstrip("#")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    r, g, b = value
    return (int(r), int(g), int(b))


@dataclass
class MachineConfig:
    """Interpreter configuration."""
    name: str = "CHIP-8"
    cycles_per_second: int = 700
    timer_hz: int = TIMER_HZ
    fault_policy: FaultPolicy = FaultPolicy.FREEZE
    # Legacy COSMAC VIP behaviour: 8XY6/8XYE shift Vy and store into Vx.
    shift_uses_vy: bool = False
    zoom: int = 15
    on_color: Tuple[int, int, int] = (0, 0x64, 0)
    off_color: Tuple[int, int, int] = (0, 0, 0)

    def __post_init__(self):
        if isinstance(self.fault_policy, str):
            self.fault_policy = FaultPolicy(self.fault_policy.lower())
        self.on_color = _color(self.on_color)
        self.off_color = _color(self.off_color)
        self.validate()

    def validate(self) -> None:
        if self.cycles_per_second <= 0:
            raise ValueError("cycles_per_second must be positive")
        if self.timer_hz <= 0:
            raise ValueError("timer_hz must be positive")
        if self.zoom < 1:
            raise ValueError("zoom must be >= 1")
        for color in (self.on_color, self.off_color):
            if any(not 0 <= c <= 0xFF for c in color):
                raise ValueError(f"invalid RGB color: {color}")

    @property
    def cycles_per_frame(self) -> int:
        """Instructions executed between two timer ticks (at least one)."""
        return max(1, round(self.cycles_per_second / self.timer_hz))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "cycles_per_second": self.cycles_per_second,
            "timer_hz": self.timer_hz,
            "fault_policy": self.fault_policy.value,
            "shift_uses_vy": self.shift_uses_vy,
            "zoom": self.zoom,
            "on_color": "#{:02X}{:02X}{:02X}".format(*self.on_color),
            "off_color": "#{:02X}{:02X}{:02X}".format(*self.off_color),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MachineConfig':
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            cycles_per_second=int(data.get("cycles_per_second", defaults.cycles_per_second)),
            timer_hz=int(data.get("timer_hz", defaults.timer_hz)),
            fault_policy=data.get("fault_policy", defaults.fault_policy),
            shift_uses_vy=bool(data.get("shift_uses_vy", defaults.shift_uses_vy)),
            zoom=int(data.get("zoom", defaults.zoom)),
            on_color=data.get("on_color", defaults.on_color),
            off_color=data.get("off_color", defaults.off_color),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'MachineConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)
