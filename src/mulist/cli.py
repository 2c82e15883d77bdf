from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from pathlib import Path

import click
from pydantic import ValidationError

from mulist.app import ListApp
from mulist.config import Settings
from mulist.deadline import format_timestamp
from mulist.errors import DeadlineParseError, IndexOutOfRangeError, StorageError, StorageNotFoundError
from mulist.logging_utils import LOG_LEVELS, level_from_name, logger, set_level
from mulist.models import Task, TodoList


def _open_app(path: Path) -> ListApp:
    app = ListApp()
    try:
        app.load(path)
    except StorageNotFoundError:
        logger.info(f"No save file at {path}, starting with no lists.")
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc
    return app


def _save_app(app: ListApp, path: Path) -> None:
    try:
        app.save(path)
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc


def _mutating(func: Callable[..., None]) -> Callable[..., None]:
    """
    Load the save file, hand the app to the command, then save it back.

    Command line positions are 1-based, so out-of-range errors are reported
    with the number the user typed.
    """

    @wraps(func)
    @click.pass_obj
    def wrapper(path: Path, *args, **kwargs) -> None:
        app = _open_app(path)
        try:
            func(app, *args, **kwargs)
        except IndexOutOfRangeError as exc:
            raise click.ClickException(f"There is no {exc.what} #{exc.index + 1} (have {exc.size}).") from exc
        _save_app(app, path)

    return wrapper


def _task_line(todo_list: TodoList, number: int, task: Task) -> str:
    parts = [f"  {number}.", "[x]" if task.done else "[ ]"]
    if task.done:
        parts.append(click.style("Complete", fg="green"))
    parts.extend(todo_list.visible_fields(task))
    parts.append(f"Added on: {format_timestamp(task.created_at)}")
    if task.deadline is not None:
        parts.append(f"Deadline: {format_timestamp(task.deadline)}")
    else:
        parts.append("No deadline set")
    return " ".join(parts)


def render(app: ListApp) -> list[str]:
    if not app.lists:
        return ["No lists yet. Create one with `mulist new-list NAME`."]

    lines = []
    for number, todo_list in enumerate(app, 1):
        lines.append(click.style(f"{number}. {todo_list.name}", bold=True))
        if not todo_list.tasks:
            lines.append("  (no tasks)")
        for task_number, task in enumerate(todo_list.tasks, 1):
            lines.append(_task_line(todo_list, task_number, task))
    return lines


@click.group(help="Keep named to-do lists in a JSON file.", no_args_is_help=True)
@click.option(
    "-f",
    "--file",
    "data_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save file to use. Defaults to MULIST_DATA_FILE or todo_lists.json.",
)
@click.option("--log-level", type=click.Choice(list(LOG_LEVELS), case_sensitive=False), default=None)
@click.pass_context
def cli(ctx: click.Context, data_file: Path | None, log_level: str | None) -> None:
    """
    Usage:
        mulist new-list Groceries
        mulist add 1 "Buy milk"
        mulist deadline 1 1 "2024-06-15 14:30"
        mulist show

        MULIST_LOG_LEVEL=debug mulist show # Enable debug logging
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid settings: {exc}") from exc

    set_level(level_from_name(log_level or settings.LOG_LEVEL), logger=logger)
    ctx.obj = data_file if data_file is not None else settings.DATA_FILE


@cli.command(help="Print every list and its tasks.")
@click.option("--hide-id", is_flag=True, help="Do not show task ids.")
@click.option("--hide-name", is_flag=True, help="Do not show task names.")
@click.option("--no-titles", is_flag=True, help="Do not show the ID:/Name: labels.")
@click.pass_obj
def show(path: Path, hide_id: bool, hide_name: bool, no_titles: bool) -> None:
    app = _open_app(path)
    for todo_list in app:
        if hide_id:
            todo_list.toggle_display("id")
        if hide_name:
            todo_list.toggle_display("name")
        if no_titles:
            todo_list.toggle_display("id_title")
            todo_list.toggle_display("name_title")
    for line in render(app):
        click.echo(line)


@cli.command("new-list", help="Create an empty list.")
@click.argument("name")
@_mutating
def new_list(app: ListApp, name: str) -> None:
    if not name:
        raise click.BadParameter("List name cannot be empty.", param_hint="NAME")
    app.create_list(name)
    click.echo(f"Created list {name!r}.")


@cli.command("rm-list", help="Delete one or more lists by number.")
@click.argument("numbers", nargs=-1, required=True, type=click.IntRange(min=1))
@_mutating
def rm_list(app: ListApp, numbers: tuple[int, ...]) -> None:
    removed = app.remove_lists(number - 1 for number in numbers)
    for todo_list in removed:
        click.echo(f"Deleted list {todo_list.name!r}.")


@cli.command(help="Add a task to a list.")
@click.argument("list_number", type=click.IntRange(min=1))
@click.argument("text")
@_mutating
def add(app: ListApp, list_number: int, text: str) -> None:
    if not text:
        raise click.BadParameter("Task text cannot be empty.", param_hint="TEXT")
    todo_list = app.get_list(list_number - 1)
    task = app.add_task(todo_list, text)
    click.echo(f"Added task {task.id} to {todo_list.name!r}.")


@cli.command("rm-task", help="Delete one or more tasks from a list by number.")
@click.argument("list_number", type=click.IntRange(min=1))
@click.argument("numbers", nargs=-1, required=True, type=click.IntRange(min=1))
@_mutating
def rm_task(app: ListApp, list_number: int, numbers: tuple[int, ...]) -> None:
    todo_list = app.get_list(list_number - 1)
    removed = app.remove_tasks(todo_list, (number - 1 for number in numbers))
    for task in removed:
        click.echo(f"Deleted task {task.id} ({task.text!r}).")


@cli.command(help="Toggle whether a task is done.")
@click.argument("list_number", type=click.IntRange(min=1))
@click.argument("number", type=click.IntRange(min=1))
@_mutating
def done(app: ListApp, list_number: int, number: int) -> None:
    task = app.get_list(list_number - 1).get_task(number - 1)
    state = "done" if app.toggle_done(task) else "not done"
    click.echo(f"Task {task.id} is {state}.")


@cli.command(help="Change the text of a task.")
@click.argument("list_number", type=click.IntRange(min=1))
@click.argument("number", type=click.IntRange(min=1))
@click.argument("text")
@_mutating
def rename(app: ListApp, list_number: int, number: int, text: str) -> None:
    task = app.get_list(list_number - 1).get_task(number - 1)
    app.rename_task(task, text)
    click.echo(f"Task {task.id} renamed to {text!r}.")


@cli.command(help='Set a task deadline, e.g. "2024-06-15 14:30" (local time).')
@click.argument("list_number", type=click.IntRange(min=1))
@click.argument("number", type=click.IntRange(min=1))
@click.argument("when", required=False)
@click.option("--clear", is_flag=True, help="Remove the deadline instead.")
@_mutating
def deadline(app: ListApp, list_number: int, number: int, when: str | None, clear: bool) -> None:
    task = app.get_list(list_number - 1).get_task(number - 1)
    if clear:
        app.clear_deadline(task)
        click.echo(f"Task {task.id} has no deadline.")
        return
    if when is None:
        raise click.UsageError("Give a deadline as YYYY-MM-DD HH:MM, or pass --clear.")
    try:
        value = app.set_deadline(task, when)
    except DeadlineParseError as exc:
        raise click.BadParameter(str(exc), param_hint="WHEN") from exc
    click.echo(f"Task {task.id} is due {format_timestamp(value)}.")


if __name__ == "__main__":
    cli()
