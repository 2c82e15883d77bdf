import pytest

from mulist.app import ListApp
from mulist.ids import IdAllocator


@pytest.fixture
def app() -> ListApp:
    return ListApp(allocator=IdAllocator())


@pytest.fixture
def groceries(app: ListApp):
    todo_list = app.create_list("Groceries")
    for text in ("milk", "eggs", "bread"):
        app.add_task(todo_list, text)
    return todo_list
