import pytest
from pydantic import ValidationError

from mulist.errors import IndexOutOfRangeError
from mulist.models import Task, TodoList


def _list_with(*texts: str) -> TodoList:
    todo_list = TodoList.create("Chores")
    for task_id, text in enumerate(texts, 1):
        todo_list.add_task(task_id, text)
    return todo_list


def test_new_task_defaults():
    task = Task.create(7, "")
    assert task.id == 7
    assert task.text == ""
    assert task.done is False
    assert task.deadline is None
    assert task.created_at.tzinfo is not None


def test_toggle_done_flips_back_and_forth():
    task = Task.create(1, "water plants")
    assert task.toggle_done() is True
    assert task.toggle_done() is False


def test_task_id_cannot_be_reassigned():
    task = Task.create(1, "water plants")
    with pytest.raises(ValidationError):
        task.id = 2


def test_list_name_cannot_be_reassigned():
    with pytest.raises(ValidationError):
        TodoList.create("Chores").name = "Errands"


def test_new_list_shows_id_and_name_by_default():
    todo_list = TodoList.create("Chores")
    assert todo_list.tasks == []
    assert todo_list.show_options is False
    assert todo_list.display_id and todo_list.display_id_title
    assert todo_list.display_name and todo_list.display_name_title


def test_add_task_appends_and_clears_pending_input():
    todo_list = TodoList.create("Chores")
    todo_list.new_task = "dishes"
    task = todo_list.add_task(1, todo_list.new_task)
    assert todo_list.tasks == [task]
    assert todo_list.new_task == ""


@pytest.mark.parametrize("indices", [[0, 2], [2, 0]])
def test_batch_removal_is_order_independent(indices):
    todo_list = _list_with("a", "b", "c")
    todo_list.remove_tasks(indices)
    assert [task.text for task in todo_list.tasks] == ["b"]


def test_duplicate_indices_remove_once():
    todo_list = _list_with("a", "b", "c")
    removed = todo_list.remove_tasks([1, 1])
    assert [task.text for task in removed] == ["b"]
    assert [task.text for task in todo_list.tasks] == ["a", "c"]


@pytest.mark.parametrize("index", [3, -1])
def test_out_of_range_removal_leaves_list_untouched(index):
    todo_list = _list_with("a", "b", "c")
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        todo_list.remove_task(index)
    assert isinstance(excinfo.value, IndexError)
    assert [task.text for task in todo_list.tasks] == ["a", "b", "c"]


def test_batch_with_one_bad_index_removes_nothing():
    todo_list = _list_with("a", "b", "c")
    with pytest.raises(IndexOutOfRangeError):
        todo_list.remove_tasks([0, 9])
    assert len(todo_list.tasks) == 3


def test_visible_fields_follow_display_flags():
    todo_list = _list_with("a")
    task = todo_list.tasks[0]
    assert todo_list.visible_fields(task) == ["ID:", "1", "Name:", "a"]

    todo_list.toggle_display("id_title")
    assert todo_list.visible_fields(task) == ["1", "Name:", "a"]

    todo_list.toggle_display("name")
    assert todo_list.visible_fields(task) == ["1"]


def test_unknown_display_field_is_rejected():
    with pytest.raises(ValueError):
        TodoList.create("Chores").toggle_display("deadline")


def test_dump_uses_file_keys_and_skips_ui_state():
    todo_list = _list_with("a")
    todo_list.new_task = "half typed"
    todo_list.tasks[0].toggle_options()
    dumped = todo_list.model_dump(by_alias=True)
    assert set(dumped) == {"name", "tasks"}
    assert set(dumped["tasks"][0]) == {"task", "done_status", "id", "date_added", "deadline"}


def test_toggle_options_flips_list_and_task_panels():
    todo_list = _list_with("a")
    assert todo_list.toggle_options() is True
    assert todo_list.toggle_options() is False
    assert todo_list.tasks[0].toggle_options() is True


def test_ui_state_in_input_is_ignored():
    todo_list = TodoList.model_validate(
        {
            "name": "x",
            "tasks": [
                {
                    "task": "a",
                    "done_status": False,
                    "id": 1,
                    "date_added": "2024-06-15T14:30:00+00:00",
                    "deadline": None,
                    "show_options": True,
                    "deadline_input": "2024-01-01 00:00",
                }
            ],
            "show_options": True,
            "display_id": False,
            "display_name_title": False,
        }
    )
    assert todo_list.show_options is False
    assert todo_list.display_id is True
    assert todo_list.display_name_title is True
    assert todo_list.tasks[0].show_options is False
    assert todo_list.tasks[0].deadline_input == ""


def test_only_file_keys_are_accepted_for_tasks():
    with pytest.raises(ValidationError):
        Task.model_validate({"text": "a", "done": False, "id": 1, "created_at": "2024-06-15T14:30:00+00:00"})
