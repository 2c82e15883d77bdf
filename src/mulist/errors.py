from __future__ import annotations

from pathlib import Path


class MulistError(Exception):
    """Base class for every recoverable error raised by mulist"""


class DeadlineParseError(MulistError, ValueError):
    """Deadline text could not be turned into a timestamp"""

    def __init__(self, text: str, message: str) -> None:
        super().__init__(message)
        self.text = text


class DeadlineSyntaxError(DeadlineParseError):
    """Text does not match `YYYY-MM-DD HH:MM` or names an impossible date"""


class AmbiguousDeadlineError(DeadlineParseError):
    """
    The wall-clock time does not map to exactly one instant in the zone.

    `reason` is "gap" when the time was skipped by a DST jump forward and
    "overlap" when it occurs twice because of a DST jump back.
    """

    def __init__(self, text: str, message: str, *, reason: str) -> None:
        super().__init__(text, message)
        self.reason = reason


class StorageError(MulistError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class StorageIOError(StorageError):
    """File could not be read or written"""


class StorageNotFoundError(StorageIOError):
    pass


class StorageFormatError(StorageError):
    """File content is not JSON of the expected shape"""


class IndexOutOfRangeError(MulistError, IndexError):
    def __init__(self, index: int, size: int, *, what: str) -> None:
        super().__init__(f"No {what} at index {index} (have {size}).")
        self.index = index
        self.size = size
        self.what = what
