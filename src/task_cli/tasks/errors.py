# src/task_cli/tasks/errors.py

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for errors reported to the user as `Error: <message>`."""


class ValidationError(TaskError):
    pass


class InvalidIdError(TaskError):
    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid task ID: {raw}")
        self.raw = raw


class NotFoundError(TaskError):
    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class UsageError(TaskError):
    pass


class CorruptedStoreError(TaskError):
    """
    The task file has content but it is not a JSON list of task records.

    TaskStore never raises this; it backs the file up, starts empty and
    keeps the error on `TaskStore.recovered`.
    """

    def __init__(self, path: Path, backup_path: Path) -> None:
        super().__init__(
            f"{path} contains invalid JSON. "
            f"Backed up to {backup_path} and started with an empty task list."
        )
        self.path = path
        self.backup_path = backup_path


class StorageError(TaskError):
    """Fatal I/O failure while reading or writing the task file."""

    def __init__(self, action: str, path: Path, cause: OSError) -> None:
        super().__init__(f"Error {action} {path}: {cause.strerror or cause}")
        self.path = path
