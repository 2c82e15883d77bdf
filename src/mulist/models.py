from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, TypeVar

from pydantic import AwareDatetime, BaseModel, Field, model_validator

from mulist.deadline import now_local
from mulist.errors import IndexOutOfRangeError

T = TypeVar("T")

# Toggle name -> TodoList attribute
DISPLAY_FIELDS = {
    "id": "display_id",
    "id_title": "display_id_title",
    "name": "display_name",
    "name_title": "display_name_title",
}


def _without(data: Any, keys: tuple[str, ...]) -> Any:
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if key not in keys}
    return data


def remove_indices(items: list[T], indices: Iterable[int], *, what: str) -> list[T]:
    """
    Remove several positions from `items` in one go and return the removed items.

    Every index is checked before anything is removed, so a bad index leaves
    `items` untouched. Removal runs from the highest index to the lowest so
    earlier removals do not shift the positions of later ones.
    """
    ordered = sorted(set(indices), reverse=True)
    for index in ordered:
        if not 0 <= index < len(items):
            raise IndexOutOfRangeError(index, len(items), what=what)
    return [items.pop(index) for index in ordered]


class Task(BaseModel):
    """A single to-do entry. Serialized with the aliases used in the save file."""

    text: str = Field(alias="task")
    done: bool = Field(default=False, alias="done_status")
    id: int = Field(ge=0, frozen=True)
    created_at: AwareDatetime = Field(alias="date_added", frozen=True)
    deadline: AwareDatetime | None = None

    # UI state, never written to disk
    show_options: bool = Field(default=False, exclude=True)
    deadline_input: str = Field(default="", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_ui_state(cls, data: Any) -> Any:
        return _without(data, ("show_options", "deadline_input"))

    @classmethod
    def create(cls, task_id: int, text: str) -> Task:
        return cls(task=text, id=task_id, date_added=now_local())

    def toggle_done(self) -> bool:
        self.done = not self.done
        return self.done

    def rename(self, text: str) -> None:
        self.text = text

    def set_deadline(self, deadline: datetime) -> None:
        self.deadline = deadline

    def clear_deadline(self) -> None:
        self.deadline = None

    def toggle_options(self) -> bool:
        self.show_options = not self.show_options
        return self.show_options


class TodoList(BaseModel):
    """Named list of tasks, kept in insertion order"""

    name: str = Field(frozen=True)
    tasks: list[Task] = []
    new_task: str = Field(default="", exclude=True)

    # Display preferences, reset to these defaults on every load
    show_options: bool = Field(default=False, exclude=True)
    display_id: bool = Field(default=True, exclude=True)
    display_id_title: bool = Field(default=True, exclude=True)
    display_name: bool = Field(default=True, exclude=True)
    display_name_title: bool = Field(default=True, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_ui_state(cls, data: Any) -> Any:
        return _without(data, ("show_options", *DISPLAY_FIELDS.values()))

    @classmethod
    def create(cls, name: str) -> TodoList:
        return cls(name=name)

    def add_task(self, task_id: int, text: str) -> Task:
        task = Task.create(task_id, text)
        self.tasks.append(task)
        self.new_task = ""
        return task

    def get_task(self, index: int) -> Task:
        if not 0 <= index < len(self.tasks):
            raise IndexOutOfRangeError(index, len(self.tasks), what="task")
        return self.tasks[index]

    def remove_task(self, index: int) -> Task:
        return self.remove_tasks([index])[0]

    def remove_tasks(self, indices: Iterable[int]) -> list[Task]:
        return remove_indices(self.tasks, indices, what="task")

    def toggle_options(self) -> bool:
        self.show_options = not self.show_options
        return self.show_options

    def toggle_display(self, field: str) -> bool:
        try:
            attr = DISPLAY_FIELDS[field]
        except KeyError:
            raise ValueError(f"Unknown display field: {field}. Use one of {', '.join(DISPLAY_FIELDS)}.") from None
        value = not getattr(self, attr)
        setattr(self, attr, value)
        return value

    def visible_fields(self, task: Task) -> list[str]:
        """Label parts for `task`. A field's title only shows when the field itself does."""
        parts = []
        if self.display_id and self.display_id_title:
            parts.append("ID:")
        if self.display_id:
            parts.append(str(task.id))
        if self.display_name and self.display_name_title:
            parts.append("Name:")
        if self.display_name:
            parts.append(task.text)
        return parts
