# src/task_cli/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from .errors import ValidationError


class TaskStatus(StrEnum):
    """Task lifecycle status (values are the on-disk strings)."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError(
                "Invalid status. Use 'todo', 'in-progress', or 'done'"
            ) from None


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a trailing Z, e.g. 2025-12-28T10:00:00.000Z."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: str
    updated_at: str

    def to_record(self) -> dict[str, Any]:
        # On-disk keys are createAt/updateAt; existing task files depend on them.
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createAt": self.created_at,
            "updateAt": self.updated_at,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task | None:
        """Rebuild a task from a persisted record, or None if the record is unusable."""
        if not isinstance(raw, Mapping):
            return None

        task_id = raw.get("id")
        description = raw.get("description")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id <= 0:
            return None
        if not isinstance(description, str):
            return None

        try:
            status = TaskStatus(raw.get("status", TaskStatus.TODO))
        except ValueError:
            return None

        created_at = raw.get("createAt")
        updated_at = raw.get("updateAt", created_at)
        if not isinstance(created_at, str) or not isinstance(updated_at, str):
            return None

        return cls(
            id=task_id,
            description=description,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )
