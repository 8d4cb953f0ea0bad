# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..errors import AlreadyDoneError, InvalidIndexError, StorageError
from .task_models import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TaskChange:
    """Outcome of a mutating store operation."""

    task: Task
    position: int
    # Set when the mutation was applied in memory but could not be flushed.
    save_error: StorageError | None = None

    @property
    def saved(self) -> bool:
        return self.save_error is None


class TaskStore:
    """
    JSON-file task store.

    Lifecycle is one load-operate-save cycle per process:
    - the whole file is read once on construction
    - every mutation rewrites the whole file (temp file + os.replace)

    Tasks are addressed by zero-based position in the current ordering, which
    is insertion order. Ids are a separate, monotonic sequence: the next id is
    max(id) + 1 after load, so ids of deleted tail tasks may be reused by a
    later process, but never within one store's lifetime.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._next_id = 0
        self.load()
        logger.info("TaskStore ready file=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def load(self) -> None:
        """
        Replace in-memory state with the file's content.

        A missing file is a first run (empty store). Anything else that cannot
        be read as a list of task records raises StorageError.
        """
        if not self._path.exists():
            logger.info("No task file at %s; starting empty.", self._path)
            self._tasks = []
            self._next_id = 0
            return

        try:
            raw = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e

        try:
            data = json.loads(raw)
        # JSONDecodeError is a ValueError; so are over-long integer literals.
        # Deep nesting surfaces as RecursionError.
        except (ValueError, RecursionError) as e:
            raise StorageError(f"Cannot parse {self._path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Cannot parse {self._path}: expected a list of tasks")

        tasks: list[Task] = []
        seen: set[int] = set()
        for record in data:
            try:
                task = Task.from_json(record)
            except StorageError as e:
                raise StorageError(f"Cannot parse {self._path}: {e}") from e
            if task.id in seen:
                raise StorageError(f"Cannot parse {self._path}: duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        self._tasks = tasks
        self._next_id = max(seen) + 1 if seen else 0
        logger.debug("Loaded %d tasks from %s (next_id=%d)", len(tasks), self._path, self._next_id)

    def save(self) -> None:
        """Overwrite the backing file with the full task list."""
        payload = json.dumps([t.to_json() for t in self._tasks], ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self._path}: {e}") from e
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    def _commit(self, task: Task, position: int) -> TaskChange:
        # In-memory change stays applied even when the flush fails.
        try:
            self.save()
        except StorageError as e:
            logger.info("Save failed, change kept in memory: %s", e)
            return TaskChange(task=task, position=position, save_error=e)
        return TaskChange(task=task, position=position)

    # ---- public API ----

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def add_task(self, description: str, due_date: datetime | None = None) -> TaskChange:
        task = Task(id=self._next_id, description=description, due_date=due_date)
        self._tasks.append(task)
        self._next_id += 1
        logger.debug("Task added id=%s due_date=%s", task.id, due_date)
        return self._commit(task, len(self._tasks) - 1)

    def mark_done(self, position: int) -> TaskChange:
        task = self._task_at(position)
        if not task.is_pending():
            raise AlreadyDoneError(task)
        task.mark_done()
        logger.debug("Task done id=%s position=%s", task.id, position)
        return self._commit(task, position)

    def delete_task(self, position: int) -> TaskChange:
        self._task_at(position)
        task = self._tasks.pop(position)
        logger.debug("Task deleted id=%s position=%s", task.id, position)
        return self._commit(task, position)

    def position_of(self, task_id: int) -> int:
        """Current position of the task with this id."""
        for position, task in enumerate(self._tasks):
            if task.id == task_id:
                return position
        raise InvalidIndexError(task_id, len(self._tasks))

    def _task_at(self, position: int) -> Task:
        if position < 0 or position >= len(self._tasks):
            raise InvalidIndexError(position, len(self._tasks))
        return self._tasks[position]
