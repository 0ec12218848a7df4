"""60 Hz delay timer."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BYTE_MASK


@dataclass
class DelayTimer:
    """8-bit countdown decremented once per 60 Hz tick, never below zero."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value = int(self.value) & BYTE_MASK

    def set(self, value: int) -> None:
        self.value = int(value) & BYTE_MASK

    def tick(self) -> bool:
        """Decrement if running. Returns True when the counter changed."""

        if self.value > 0:
            self.value -= 1
            return True
        return False

    def reset(self) -> None:
        self.value = 0

    @property
    def running(self) -> bool:
        return self.value > 0


__all__ = ["DelayTimer"]
