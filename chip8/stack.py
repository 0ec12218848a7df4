"""Bounded call stack of return addresses."""

from __future__ import annotations

from typing import Iterator, List, Optional

from .constants import STACK_DEPTH, WORD_MASK
from .errors import StackOverflow, StackUnderflow


class CallStack:
    """LIFO of 16-bit return addresses with a hard depth limit."""

    def __init__(self, max_depth: int = STACK_DEPTH) -> None:
        self.max_depth = max_depth
        self._frames: List[int] = []

    def push(self, address: int) -> None:
        if len(self._frames) >= self.max_depth:
            raise StackOverflow(len(self._frames) + 1)
        self._frames.append(address & WORD_MASK)

    def pop(self) -> int:
        if not self._frames:
            raise StackUnderflow()
        return self._frames.pop()

    def peek(self) -> Optional[int]:
        return self._frames[-1] if self._frames else None

    def clear(self) -> None:
        self._frames.clear()

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[int]:
        """Iterate bottom to top."""

        return iter(tuple(self._frames))


__all__ = ["CallStack"]
