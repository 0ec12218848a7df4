"""Hex keypad state shared between the input source and the execution loop."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Dict, Optional, Tuple

from .constants import NUM_KEYS

logger = logging.getLogger(__name__)


def _check_code(code: int) -> int:
    if not 0 <= code < NUM_KEYS:
        raise ValueError(f"key code must be in [0x0, 0x{NUM_KEYS - 1:X}], got {code!r}")
    return code


class Keypad:
    """Set of pressed keys ``0x0``-``0xF`` guarded by a single lock.

    Insertion order is kept so :meth:`last_pressed_key` can report the most
    recently pressed key still held down.

    Input threads may either call :meth:`set_key` directly or :meth:`post`
    events that the execution thread applies with :meth:`apply_pending` at a
    cycle boundary, so a key change never lands in the middle of an
    instruction.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # dict used as an insertion-ordered set
        self._pressed: Dict[int, None] = {}
        self._events: "queue.SimpleQueue[Tuple[int, bool]]" = queue.SimpleQueue()

    # ------------------------------------------------------------------ #
    # Direct state updates
    # ------------------------------------------------------------------ #

    def set_key(self, code: int, is_down: bool) -> bool:
        """Update one key. Returns True only when the state actually changed."""

        _check_code(code)
        with self._lock:
            if is_down:
                if code in self._pressed:
                    return False
                self._pressed[code] = None
            else:
                if code not in self._pressed:
                    return False
                del self._pressed[code]
        logger.debug("key 0x%X %s", code, "down" if is_down else "up")
        return True

    def release_all(self) -> None:
        with self._lock:
            self._pressed.clear()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def is_key_down(self, code: int) -> bool:
        with self._lock:
            return code in self._pressed

    def last_pressed_key(self) -> Optional[int]:
        with self._lock:
            if not self._pressed:
                return None
            return next(reversed(self._pressed))

    def pressed_keys(self) -> Tuple[int, ...]:
        with self._lock:
            return tuple(self._pressed)

    # ------------------------------------------------------------------ #
    # Message passing
    # ------------------------------------------------------------------ #

    def post(self, code: int, is_down: bool) -> None:
        """Queue a key event for the next cycle boundary."""

        self._events.put((_check_code(code), bool(is_down)))

    def apply_pending(self) -> int:
        """Drain queued events; returns how many changed the key state."""

        changed = 0
        while True:
            try:
                code, is_down = self._events.get_nowait()
            except queue.Empty:
                break
            if self.set_key(code, is_down):
                changed += 1
        return changed


__all__ = ["Keypad"]
