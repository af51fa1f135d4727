# tests/test_commands.py

from __future__ import annotations

import pytest

from task_cli.cli.commands import CommandRegistry, format_task, registry
from task_cli.cli.parser import CommandRequest
from task_cli.tasks.errors import NotFoundError
from task_cli.tasks.task_store import TaskStore


def test_registry_routes_to_handler(store: TaskStore) -> None:
    reg = CommandRegistry()
    seen: list[CommandRequest] = []

    def handler(store, request):
        seen.append(request)
        return "ok"

    reg.register("ping", handler, "Ping")
    assert reg.handle(store, CommandRequest("ping")) == "ok"
    assert seen == [CommandRequest("ping")]

    with pytest.raises(KeyError):
        reg.handle(store, CommandRequest("pong"))


def test_help_lists_every_command() -> None:
    text = registry.build_help()
    for usage in ("add", "update <id>", "delete <id>", "mark-in-progress <id>", "mark-done <id>", "list"):
        assert usage in text


def test_add_and_list_output(store: TaskStore) -> None:
    out = registry.handle(store, CommandRequest("add", description="Buy groceries"))
    assert out == "Task added successfully (ID: 1)"

    listing = registry.handle(store, CommandRequest("list"))
    lines = listing.splitlines()
    assert lines[0] == "Tasks:"
    assert lines[1].startswith('  ID: 1 | "Buy groceries" | Status: todo | Created: ')


def test_list_empty_messages(store: TaskStore) -> None:
    assert "No tasks existed" in registry.handle(store, CommandRequest("list"))
    assert registry.handle(store, CommandRequest("list", status="done")) == "No tasks with status 'done'."


def test_mark_and_delete_output(store: TaskStore) -> None:
    store.add("x")
    assert (
        registry.handle(store, CommandRequest("mark", task_id="1", status="in-progress"))
        == "Task marked as in-progress (ID: 1)"
    )
    assert registry.handle(store, CommandRequest("delete", task_id="1")) == "Task deleted successfully (ID: 1)"
    with pytest.raises(NotFoundError):
        registry.handle(store, CommandRequest("delete", task_id="1"))


def test_format_task_keeps_unparsable_timestamps(store: TaskStore) -> None:
    task = store.add("x")
    task.updated_at = "yesterday"
    assert format_task(task).endswith("| Updated: yesterday")
