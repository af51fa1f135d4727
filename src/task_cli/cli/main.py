# src/task_cli/cli/main.py

"""
CLI entrypoint.

One command per process:
- configure logging,
- load the task file into a TaskStore,
- parse argv and dispatch to the matching command handler,
- print the result (stdout) or `Error: ...` (stderr) and return the exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.errors import StorageError, TaskError
from ..tasks.task_store import TaskStore
from .commands import registry
from .parser import parse_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _configure_logging(settings: Settings) -> None:
    console_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    log_file = settings.log_file if settings.log_file_enabled else None
    try:
        setup_logging(log_file=log_file, console_level=console_level)
    except OSError:
        setup_logging(log_file=None, console_level=console_level)
        logger.warning("Cannot open log file %s; logging to console only.", log_file)


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    if settings is None:
        settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]

    _configure_logging(settings)
    logger.debug("Starting %s argv=%s", settings.app_name, list(argv))

    try:
        store = TaskStore(settings.data_file, persist_on_list=settings.persist_on_list)
    except StorageError as e:
        logger.info("Task file unusable: %s", e)
        _print_error(str(e))
        return EXIT_ERROR

    if store.recovered is not None:
        _print_error(str(store.recovered))

    try:
        request = parse_args(argv)
        if request.command == "help":
            if request.unknown:
                print("Unknown command")
            print(registry.build_help())
            return EXIT_ERROR if request.unknown or store.recovered is not None else EXIT_OK

        print(registry.handle(store, request))
    except StorageError as e:
        logger.info("Task file unusable: %s", e)
        _print_error(str(e))
        return EXIT_ERROR
    except TaskError as e:
        logger.debug("Command failed: %s", e)
        _print_error(str(e))
        return EXIT_ERROR

    return EXIT_ERROR if store.recovered is not None else EXIT_OK


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
