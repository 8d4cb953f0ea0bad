# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..errors import StorageError


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values double as the on-disk tags. Pending -> Done is the only transition.
    """

    PENDING = "Pending"
    DONE = "Done"

    @classmethod
    def from_json(cls, raw: Any) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise StorageError(f"unknown task status: {raw!r}") from None


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus = TaskStatus.PENDING
    # Aware datetime in UTC+5:30; never naive.
    due_date: datetime | None = None

    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING

    def mark_done(self) -> None:
        self.status = TaskStatus.DONE

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "due_date": self.due_date.isoformat() if self.due_date is not None else None,
        }

    @classmethod
    def from_json(cls, raw: Any) -> Task:
        """
        Build a Task from one decoded JSON record.

        Strict: anything that is not a well-formed record raises StorageError,
        so a damaged file is reported at load time instead of being half-read.
        """
        if not isinstance(raw, dict):
            raise StorageError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 0:
            raise StorageError(f"task record has invalid id: {task_id!r}")

        description = raw.get("description")
        if not isinstance(description, str):
            raise StorageError(f"task {task_id} has invalid description: {description!r}")

        if "status" not in raw:
            raise StorageError(f"task {task_id} has no status")
        status = TaskStatus.from_json(raw["status"])

        return cls(
            id=task_id,
            description=description,
            status=status,
            due_date=_due_date_from_json(task_id, raw.get("due_date")),
        )


def _due_date_from_json(task_id: int, raw: Any) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise StorageError(f"task {task_id} has invalid due_date: {raw!r}")
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        raise StorageError(f"task {task_id} has invalid due_date: {raw!r}") from None
    if value.utcoffset() is None:
        raise StorageError(f"task {task_id} due_date has no UTC offset: {raw!r}")
    return value
