# src/todo_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per process, built once and passed explicitly.
- The task file location is configuration, not a hard-coded name.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_TASKS_FILE = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_optional_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path | None

    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo_cli").strip() or "todo_cli"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_file = _env_optional_path(_k("LOG_FILE"))

        data_dir = _env_path(_k("DATA_DIR"), Path("."))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / DEFAULT_TASKS_FILE)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file=log_file,
            data_dir=data_dir,
            tasks_path=tasks_path,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # .env never overrides variables already set in the real environment.
    load_dotenv(override=False)
    return Settings.from_env()
