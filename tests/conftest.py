# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todo_cli.config import Settings
from todo_cli.tasks.task_store import TaskStore


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; undo it so tests stay isolated."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def settings(tmp_path: Path, tasks_path: Path) -> Settings:
    """
    Settings built by hand rather than from the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="todo_cli",
        log_level="WARNING",
        log_file=None,
        data_dir=tmp_path,
        tasks_path=tasks_path,
    )


@pytest.fixture()
def store(tasks_path: Path) -> TaskStore:
    return TaskStore(tasks_path)
