# src/task_cli/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .parser import CommandRequest

CommandHandler = Callable[[TaskStore, CommandRequest], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Maps parsed command names to store-backed handlers (add, list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: list[tuple[str, str]] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: list[str] | None = None,
    ) -> None:
        self._handlers[name] = handler
        for line in usage or [name]:
            self._usage.append((line, help_text))

    def handle(self, store: TaskStore, request: CommandRequest) -> str:
        """Run the handler for `request.command`. TaskError propagates to the caller."""
        handler = self._handlers.get(request.command)
        if handler is None:
            raise KeyError(request.command)
        logger.debug("Dispatching %s", request)
        return handler(store, request)

    def build_help(self, prog: str = "task-cli") -> str:
        lines = ["Task CLI - Task Management System", "Usage:"]
        width = max((len(u) for u, _ in self._usage), default=0)
        for usage, help_text in self._usage:
            lines.append(f"    {prog} {usage.ljust(width)}  - {help_text}")
        lines += [
            "",
            "Examples:",
            f'    {prog} add "Buy groceries"',
            f'    {prog} update 1 "Buy groceries and cook dinner"',
            f"    {prog} list done",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


def _ts_local(iso: str) -> str:
    """Render a stored ISO timestamp in local time; unparsable values are shown as stored."""
    try:
        moment = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return iso
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_task(task: Task) -> str:
    return (
        f'ID: {task.id} | "{task.description}" | Status: {task.status.value} | '
        f"Created: {_ts_local(task.created_at)} | Updated: {_ts_local(task.updated_at)}"
    )


def cmd_add(store: TaskStore, request: CommandRequest) -> str:
    task = store.add(request.description or "")
    return f"Task added successfully (ID: {task.id})"


def cmd_update(store: TaskStore, request: CommandRequest) -> str:
    task = store.update(request.task_id or "", request.description or "")
    return f"Task updated successfully (ID: {task.id})"


def cmd_delete(store: TaskStore, request: CommandRequest) -> str:
    task = store.delete(request.task_id or "")
    return f"Task deleted successfully (ID: {task.id})"


def cmd_mark(store: TaskStore, request: CommandRequest) -> str:
    task = store.mark(request.task_id or "", request.status or "")
    return f"Task marked as {task.status.value} (ID: {task.id})"


def cmd_list(store: TaskStore, request: CommandRequest) -> str:
    tasks = store.list_tasks(request.status)
    if not tasks:
        if request.status is None:
            return 'No tasks existed. You can use add "task-description" to add new task'
        return f"No tasks with status '{request.status}'."

    lines = ["Tasks:"]
    lines.extend(f"  {format_task(t)}" for t in tasks)
    return "\n".join(lines)


registry.register(
    "add",
    cmd_add,
    help_text='Add task (default status is "todo")',
    usage=['add "task-description"'],
)
registry.register("update", cmd_update, help_text="Update task description", usage=['update <id> "desc"'])
registry.register("delete", cmd_delete, help_text="Delete a task", usage=["delete <id>"])
registry.register(
    "mark",
    cmd_mark,
    help_text="Set task status",
    usage=["mark-todo <id>", "mark-in-progress <id>", "mark-done <id>"],
)
registry.register(
    "list",
    cmd_list,
    help_text="List tasks, optionally by status (todo/in-progress/done)",
    usage=["list [status]"],
)
