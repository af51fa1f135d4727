# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from task_cli.config import Settings
from task_cli.tasks.task_store import TaskStore


class TickClock:
    """Deterministic clock: every call returns one second later than the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 12, 28, 10, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture()
def clock() -> TickClock:
    return TickClock()


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(data_file: Path, clock: TickClock) -> TaskStore:
    return TaskStore(data_file, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path, data_file: Path) -> Settings:
    """
    Settings pointing every path at tmp_path.

    Built directly rather than through from_env() so the developer's
    environment and .env never leak into tests.
    """
    return Settings(
        app_name="task-cli",
        log_level="WARNING",
        log_file_enabled=True,
        data_dir=tmp_path,
        data_file=data_file,
        log_file=tmp_path / "task-cli.log",
        persist_on_list=False,
    )
