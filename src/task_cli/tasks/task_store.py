# src/task_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from .errors import CorruptedStoreError, InvalidIdError, NotFoundError, StorageError, ValidationError
from .task_models import Task, TaskStatus, iso_timestamp

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_ID_RE = re.compile(r"[+-]?[0-9]+")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def parse_task_id(raw: int | str) -> int:
    """Accept an int or a base-10 integer string; anything else is InvalidIdError."""
    if isinstance(raw, bool):
        raise InvalidIdError(raw)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    # int() alone would also take "1_0" and non-ASCII digits.
    if not _ID_RE.fullmatch(text):
        raise InvalidIdError(raw)
    return int(text, 10)


def _require_description(description: str | None) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("Task description cannot be empty")
    return text


class TaskStore:
    """
    JSON file task store.

    The whole file is read on load and rewritten after every mutation:
    - single writer per process, no locking (last writer wins)
    - writes go to a temp sibling and are moved into place with os.replace
    - an unreadable payload is backed up and replaced by an empty list
    """

    def __init__(
        self,
        path: str | Path,
        *,
        clock: Clock | None = None,
        persist_on_list: bool = False,
    ) -> None:
        self._path = Path(path)
        self._clock: Clock = clock or _utc_now
        self._persist_on_list = persist_on_list
        self._tasks: list[Task] = []
        # Highest id handed out or loaded by this instance.
        self._high_water = 0
        self.recovered: CorruptedStoreError | None = None
        self.load()
        logger.info("TaskStore ready file=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- persistence ----

    def load(self) -> None:
        self.recovered = None
        if not self._path.exists():
            self._tasks = []
            self.save()
            logger.info("Created new task file %s", self._path)
            return

        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise StorageError("reading", self._path, e) from e

        # JSON on disk must be UTF-8; undecodable bytes go down the corrupted branch.
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            self._recover_corrupted(raw)
            return

        if not text.strip():
            logger.info("Task file %s is blank; starting empty.", self._path)
            self._tasks = []
            self.save()
            return

        tasks = self._decode(text)
        if tasks is None:
            self._recover_corrupted(raw)
            return

        self._tasks = tasks
        self._high_water = max((t.id for t in tasks), default=0)
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)

    @staticmethod
    def _decode(text: str) -> list[Task] | None:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, list):
            return None

        tasks: list[Task] = []
        seen: set[int] = set()
        for item in data:
            task = Task.from_record(item)
            if task is None or task.id in seen:
                return None
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def _backup_path(self) -> Path:
        stamp = self._clock().astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")
        candidate = self._path.with_name(f"{self._path.name}.{stamp}.bak")
        n = 1
        while candidate.exists():
            candidate = self._path.with_name(f"{self._path.name}.{stamp}-{n}.bak")
            n += 1
        return candidate

    def _recover_corrupted(self, raw: bytes) -> None:
        backup = self._backup_path()
        try:
            backup.write_bytes(raw)
        except OSError as e:
            raise StorageError("backing up", self._path, e) from e

        self.recovered = CorruptedStoreError(self._path, backup)
        logger.info("Task file %s is corrupted; original saved to %s", self._path, backup)
        self._tasks = []
        self.save()

    def save(self) -> None:
        payload = json.dumps([t.to_record() for t in self._tasks], ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError("writing", self._path, e) from e
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    # ---- lookups ----

    def next_id(self) -> int:
        current = max((t.id for t in self._tasks), default=0)
        return max(current, self._high_water) + 1

    def find_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _get(self, raw_id: int | str) -> Task:
        task_id = parse_task_id(raw_id)
        task = self.find_by_id(task_id)
        if task is None:
            raise NotFoundError(raw_id)
        return task

    def _now(self) -> str:
        return iso_timestamp(self._clock())

    # ---- public API ----

    def add(self, description: str) -> Task:
        text = _require_description(description)
        now = self._now()
        task = Task(
            id=self.next_id(),
            description=text,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        self._high_water = task.id
        self.save()
        logger.info("Task added id=%s", task.id)
        return task

    def update(self, raw_id: int | str, description: str) -> Task:
        text = _require_description(description)
        task = self._get(raw_id)
        task.description = text
        task.updated_at = self._now()
        self.save()
        logger.info("Task updated id=%s", task.id)
        return task

    def delete(self, raw_id: int | str) -> Task:
        task = self._get(raw_id)
        self._tasks.remove(task)
        self.save()
        logger.info("Task deleted id=%s", task.id)
        return task

    def mark(self, raw_id: int | str, status: str | TaskStatus) -> Task:
        task = self._get(raw_id)
        new_status = TaskStatus.parse(status)
        task.status = new_status
        task.updated_at = self._now()
        self.save()
        logger.info("Task marked id=%s status=%s", task.id, new_status.value)
        return task

    def list_tasks(self, status_filter: str | TaskStatus | None = None) -> list[Task]:
        """Tasks in insertion order, optionally only those with `status_filter`."""
        if status_filter is None:
            tasks = list(self._tasks)
        else:
            wanted = TaskStatus.parse(status_filter)
            tasks = [t for t in self._tasks if t.status is wanted]

        if self._persist_on_list:
            self.save()
        return tasks
