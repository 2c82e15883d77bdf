from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, tzinfo
from pathlib import Path

from mulist.deadline import parse_deadline
from mulist.errors import IndexOutOfRangeError
from mulist.ids import IdAllocator
from mulist.logging_utils import logger
from mulist.models import Task, TodoList, remove_indices
from mulist.storage import DEFAULT_PATH, load_lists, save_lists


class ListApp:
    """
    Root of the in-memory state: every list, in the order it was created.

    A presentation layer holds one of these, renders it, and calls the methods
    below in response to user actions. Nothing here renders or touches disk
    except `save` and `load`.
    """

    def __init__(self, lists: list[TodoList] | None = None, *, allocator: IdAllocator | None = None) -> None:
        self.lists: list[TodoList] = lists if lists is not None else []
        self.new_list: str = ""
        self.allocator = allocator if allocator is not None else IdAllocator()
        self._sync_allocator()

    def __iter__(self) -> Iterator[TodoList]:
        return iter(self.lists)

    def __len__(self) -> int:
        return len(self.lists)

    def _sync_allocator(self) -> None:
        highest = max((task.id for task in self.all_tasks()), default=None)
        if highest is not None:
            self.allocator.advance_past(highest)

    def all_tasks(self) -> Iterator[Task]:
        for todo_list in self.lists:
            yield from todo_list.tasks

    # ---- lists ----
    def create_list(self, name: str | None = None) -> TodoList:
        todo_list = TodoList.create(self.new_list if name is None else name)
        self.lists.append(todo_list)
        self.new_list = ""
        logger.debug(f"Created list {todo_list.name!r}.")
        return todo_list

    def get_list(self, index: int) -> TodoList:
        if not 0 <= index < len(self.lists):
            raise IndexOutOfRangeError(index, len(self.lists), what="list")
        return self.lists[index]

    def find_list(self, name: str) -> TodoList | None:
        for todo_list in self.lists:
            if todo_list.name == name:
                return todo_list
        return None

    def remove_list(self, index: int) -> TodoList:
        return self.remove_lists([index])[0]

    def remove_lists(self, indices: Iterable[int]) -> list[TodoList]:
        removed = remove_indices(self.lists, indices, what="list")
        logger.debug(f"Removed lists: {[todo_list.name for todo_list in removed]}.")
        return removed

    # ---- tasks ----
    def add_task(self, todo_list: TodoList, text: str | None = None) -> Task:
        task = todo_list.add_task(self.allocator.next_id(), todo_list.new_task if text is None else text)
        logger.debug(f"Added task {task.id} to list {todo_list.name!r}.")
        return task

    def remove_task(self, todo_list: TodoList, index: int) -> Task:
        return self.remove_tasks(todo_list, [index])[0]

    def remove_tasks(self, todo_list: TodoList, indices: Iterable[int]) -> list[Task]:
        removed = todo_list.remove_tasks(indices)
        logger.debug(f"Removed tasks {[task.id for task in removed]} from list {todo_list.name!r}.")
        return removed

    def toggle_done(self, task: Task) -> bool:
        done = task.toggle_done()
        logger.debug(f"Task {task.id} marked {'done' if done else 'not done'}.")
        return done

    def rename_task(self, task: Task, text: str) -> None:
        task.rename(text)
        logger.debug(f"Task {task.id} renamed to {text!r}.")

    def set_deadline(self, task: Task, text: str, *, tz: tzinfo | None = None) -> datetime:
        deadline = parse_deadline(text, tz=tz)
        task.set_deadline(deadline)
        task.deadline_input = ""
        logger.debug(f"Task {task.id} deadline set to {deadline.isoformat()}.")
        return deadline

    def clear_deadline(self, task: Task) -> None:
        task.clear_deadline()
        logger.debug(f"Task {task.id} deadline cleared.")

    # ---- persistence ----
    def save(self, path: Path | str = DEFAULT_PATH) -> None:
        save_lists(self.lists, path)
        logger.info(f"Saved {len(self.lists)} lists to {path}.")

    def load(self, path: Path | str = DEFAULT_PATH) -> None:
        """Replace every list with the contents of `path`. On error nothing changes."""
        lists = load_lists(path)
        self.lists = lists
        self._sync_allocator()
        logger.info(f"Loaded {len(lists)} lists from {path}.")
