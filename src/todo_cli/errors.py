# src/todo_cli/errors.py

"""
Error kinds raised by the task store and the due-date normalizer.

Lower layers raise, the CLI layer decides what is fatal:
- StorageError at load time aborts startup; after a mutation it is only a warning.
- ParseError / TimeZoneError / InvalidIndexError / AlreadyDoneError are reported
  to the user and never fail the process.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tasks.task_models import Task


class TodoError(Exception):
    """Base class for all todo_cli errors."""


class StorageError(TodoError):
    """Backing file is unreadable, unwritable, or holds malformed records."""


class ParseError(TodoError):
    """Due-date string matches none of the accepted formats."""


class TimeZoneError(TodoError):
    """The fixed UTC+5:30 offset could not be constructed or applied."""


class InvalidIndexError(TodoError, IndexError):
    def __init__(self, position: int, length: int) -> None:
        super().__init__(f"Invalid task index: {position} (have {length} tasks)")
        self.position = position
        self.length = length


class AlreadyDoneError(TodoError):
    def __init__(self, task: Task) -> None:
        super().__init__(f"Task {task.id} is already done.")
        self.task = task
