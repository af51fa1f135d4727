# src/task_cli/cli/parser.py

"""Turn raw argv into a CommandRequest. No store access happens here."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..tasks.errors import UsageError
from ..tasks.task_models import TaskStatus

HELP_FLAGS = ("help", "-h", "--help")

MARK_COMMANDS: dict[str, TaskStatus] = {
    "mark-todo": TaskStatus.TODO,
    "mark-in-progress": TaskStatus.IN_PROGRESS,
    "mark-done": TaskStatus.DONE,
}


@dataclass(frozen=True, slots=True)
class CommandRequest:
    command: str
    task_id: str | None = None
    description: str | None = None
    status: str | None = None
    # True when help is shown because argv was empty or not understood.
    unknown: bool = False


def _join_description(words: Sequence[str]) -> str:
    # A leading and a trailing quote are stripped independently.
    text = " ".join(words)
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def parse_args(argv: Sequence[str]) -> CommandRequest:
    if not argv:
        return CommandRequest("help", unknown=True)

    name, args = argv[0], list(argv[1:])

    if name in HELP_FLAGS:
        return CommandRequest("help")

    if name == "add":
        if not args:
            raise UsageError("Missing task description")
        return CommandRequest("add", description=_join_description(args))

    if name == "update":
        if len(args) < 2:
            raise UsageError("Missing task ID or description")
        return CommandRequest("update", task_id=args[0], description=_join_description(args[1:]))

    if name == "delete":
        if not args:
            raise UsageError("Missing task ID")
        return CommandRequest("delete", task_id=args[0])

    if name in MARK_COMMANDS:
        if not args:
            raise UsageError("Missing task ID")
        return CommandRequest("mark", task_id=args[0], status=MARK_COMMANDS[name].value)

    if name == "list":
        return CommandRequest("list", status=args[0] if args else None)

    return CommandRequest("help", unknown=True)
