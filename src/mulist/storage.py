"""
Reading and writing the save file.

The file is a JSON array of lists, each holding its tasks under the keys
`task`, `done_status`, `id`, `date_added` and `deadline`. UI state is never
written. Saves go through a temporary file and `os.replace`, so a failed
write leaves the previous file as it was.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from mulist.errors import StorageFormatError, StorageIOError, StorageNotFoundError
from mulist.logging_utils import logger
from mulist.models import TodoList

DEFAULT_PATH = Path("todo_lists.json")

_lists_adapter = TypeAdapter(list[TodoList])


def dump_lists(lists: list[TodoList]) -> bytes:
    return _lists_adapter.dump_json(lists, indent=2, by_alias=True)


def parse_lists(data: bytes | str, *, path: Path = DEFAULT_PATH) -> list[TodoList]:
    try:
        return _lists_adapter.validate_json(data)
    except ValidationError as exc:
        raise StorageFormatError(path, f"{path} is not a valid todo list file: {exc}") from exc


def _file_mode(path: Path) -> int:
    """Permissions for the saved file: those of the file it replaces, else the umask default"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_lists(lists: list[TodoList], path: Path | str = DEFAULT_PATH) -> None:
    path = Path(path)
    payload = dump_lists(lists)

    try:
        mode = _file_mode(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as exc:
        raise StorageIOError(path, f"Could not write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as tmp:
            os.fchmod(tmp.fileno(), mode)
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageIOError(path, f"Could not write {path}: {exc}") from exc

    logger.debug(f"Wrote {len(payload)} bytes to {path}.")


def load_lists(path: Path | str = DEFAULT_PATH) -> list[TodoList]:
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise StorageNotFoundError(path, f"No saved lists at {path}.") from exc
    except OSError as exc:
        raise StorageIOError(path, f"Could not read {path}: {exc}") from exc

    return parse_lists(data, path=path)
