from __future__ import annotations

import threading


class IdAllocator:
    """
    Hands out task ids.

    Every value is strictly greater than all values handed out before it, and
    concurrent callers never receive the same id. Each ListApp owns one, so a
    fresh app (or test) starts counting from `start` again.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 0:
            raise ValueError(f"Id sequence cannot start below zero: {start}")
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        with self._lock:
            return self._next

    def advance_past(self, value: int) -> None:
        """Make sure later ids are above `value`. Never moves backwards."""
        with self._lock:
            if value >= self._next:
                self._next = value + 1

    def __repr__(self) -> str:
        return f"IdAllocator(next={self.peek()})"
