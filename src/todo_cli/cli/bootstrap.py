# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns Settings into a ready
TaskStore. Settings are injectable so tests never read the real environment.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(*, settings: Settings | None = None) -> TaskStore:
    """
    Load the task store named by settings.tasks_path.

    StorageError propagates: a file that exists but cannot be loaded is fatal.
    """
    if settings is None:
        settings = get_settings()

    logger.debug("Opening task store at %s", settings.tasks_path)
    return TaskStore(settings.tasks_path)
