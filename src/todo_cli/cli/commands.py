# src/todo_cli/cli/commands.py

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable

from ..config import Settings
from ..errors import AlreadyDoneError, InvalidIndexError, ParseError, TimeZoneError
from ..tasks.due_dates import format_due_date, parse_due_date
from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_store import TaskChange, TaskStore

CommandHandler = Callable[[TaskStore, argparse.Namespace, Settings], str]

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    TaskStatus.PENDING: " ",
    TaskStatus.DONE: "x",
}

LIST_HEADER = "\n--- Your ToDo Tasks ---"
LIST_FOOTER = "-----------------------\n"


class CommandRegistry:
    """Name -> handler table used by the CLI entrypoint (add, list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, help_text: str) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text

    def names(self) -> list[str]:
        return list(self._handlers)

    def help_for(self, name: str) -> str:
        return self._help.get(name.lower(), "")

    def handle(self, store: TaskStore, args: argparse.Namespace, settings: Settings) -> str:
        """
        Run the handler selected by args.command and return the reply text.

        Unknown names raise KeyError: the argument parser only produces
        registered commands.
        """
        name = str(args.command).lower()
        handler = self._handlers[name]
        logger.debug("Dispatching command %s", name)
        return handler(store, args, settings)


registry = CommandRegistry()


# ---- rendering ----


def format_task(task: Task) -> str:
    mark = STATUS_MARKS.get(task.status, "?")
    due = f" (Due: {format_due_date(task.due_date)})" if task.due_date is not None else ""
    return f"[{mark}] {task.id}. {task.description}{due}"


def format_task_list(tasks: Iterable[Task], app_name: str = "todo_cli") -> str:
    lines = [format_task(t) for t in tasks]
    if not lines:
        return f'No tasks found. Add one using `{app_name} add "My task"`'
    return "\n".join([LIST_HEADER, *lines, LIST_FOOTER])


def _with_save_warning(change: TaskChange, message: str) -> str:
    # The reply still goes to stdout; the flush failure is a stderr warning.
    if change.save_error is not None:
        print(f"Error saving tasks: {change.save_error}", file=sys.stderr)
    return message


def _invalid_index_message(args: argparse.Namespace, err: InvalidIndexError) -> str:
    if getattr(args, "id", None) is not None:
        return f"No task with ID: {args.id}. Use `list` to see available tasks."
    return f"Invalid task index: {err.position}. Use `list` to see available tasks."


def _resolve_position(store: TaskStore, args: argparse.Namespace) -> int:
    """Positional index by default; --id looks the task up by its id."""
    task_id = getattr(args, "id", None)
    if task_id is not None:
        return store.position_of(task_id)
    return int(args.index)


# ---- handlers ----


def cmd_add(store: TaskStore, args: argparse.Namespace, settings: Settings) -> str:
    due_date = None
    if args.due is not None:
        # Parse before touching the store: a bad date must not create a task.
        try:
            due_date = parse_due_date(args.due)
        except (ParseError, TimeZoneError) as e:
            logger.info("Rejected due date %r: %s", args.due, e)
            return str(e)

    change = store.add_task(args.description, due_date)
    return _with_save_warning(change, "Task added successfully.")


def cmd_list(store: TaskStore, args: argparse.Namespace, settings: Settings) -> str:
    return format_task_list(store.list_tasks(), settings.app_name)


def cmd_done(store: TaskStore, args: argparse.Namespace, settings: Settings) -> str:
    try:
        change = store.mark_done(_resolve_position(store, args))
    except InvalidIndexError as e:
        return _invalid_index_message(args, e)
    except AlreadyDoneError as e:
        return f"Task {e.task.id} is already done."
    return _with_save_warning(change, f"Task {change.task.id} marked as done.")


def cmd_delete(store: TaskStore, args: argparse.Namespace, settings: Settings) -> str:
    try:
        change = store.delete_task(_resolve_position(store, args))
    except InvalidIndexError as e:
        return _invalid_index_message(args, e)
    task = change.task
    return _with_save_warning(change, f'Task "{task.description}" (ID: {task.id}) deleted.')


registry.register("add", cmd_add, help_text="Add a new task")
registry.register("list", cmd_list, help_text="List all tasks")
registry.register("done", cmd_done, help_text="Mark a task as done by its index")
registry.register("delete", cmd_delete, help_text="Delete a task by its index")
