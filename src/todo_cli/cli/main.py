# src/todo_cli/cli/main.py

"""
CLI entrypoint.

One process runs one command: parse argv, load the store, dispatch, print.
Exit codes: 0 for success and recoverable user errors (bad index, bad date,
already done), 1 when the task file cannot be loaded, 2 for usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ..cli.bootstrap import create_store
from ..cli.commands import registry
from ..config import Settings, get_settings
from ..errors import StorageError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _position(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {raw!r}")
    return value


def _add_target_args(parser: argparse.ArgumentParser, verb: str) -> None:
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "index",
        nargs="?",
        type=_position,
        help=f"The 0-based index of the task to {verb}",
    )
    target.add_argument(
        "--id",
        type=_position,
        help=f"{verb.capitalize()} the task with this id instead of an index",
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        description="A simple command-line ToDo app.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        help=f"Task file to use (default: {settings.tasks_path})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more to stderr (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help=registry.help_for("add"))
    add.add_argument("description", help="Description of the task")
    add.add_argument(
        "--due",
        help='Optional due date, "YYYY-MM-DD HH:MM" or "YYYY-MM-DD" (read as IST, UTC+5:30)',
    )

    subparsers.add_parser("list", help=registry.help_for("list"))

    done = subparsers.add_parser("done", help=registry.help_for("done"))
    _add_target_args(done, "mark as done")

    delete = subparsers.add_parser("delete", help=registry.help_for("delete"))
    _add_target_args(delete, "delete")

    return parser


def _console_level(settings: Settings, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return getattr(logging, settings.log_level.upper(), logging.WARNING)


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    if settings is None:
        settings = get_settings()

    args = build_parser(settings).parse_args(argv)
    if args.file is not None:
        settings = replace(settings, tasks_path=args.file)

    setup_logging(console_level=_console_level(settings, args.verbose), log_file=settings.log_file)

    try:
        store = create_store(settings=settings)
    except StorageError as e:
        logger.debug("Startup load failed.", exc_info=True)
        print(f"Error loading tasks: {e}", file=sys.stderr)
        return 1

    print(registry.handle(store, args, settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
