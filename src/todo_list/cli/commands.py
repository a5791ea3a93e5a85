# src/todo_list/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from .render import render_task_table

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandReply:
    text: str
    # False for user-visible conditions like "not found"; printed to stderr.
    ok: bool = True


CommandHandler = Callable[[AppState, argparse.Namespace], CommandReply]


class CommandRegistry:
    """Maps subcommand names (and aliases) to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = [a.lower() for a in aliases]
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def help_for(self, name: str) -> str:
        return self._help.get(name.lower(), "")

    def aliases_for(self, name: str) -> list[str]:
        return list(self._aliases.get(name.lower(), []))

    def names(self) -> list[str]:
        return list(self._help)

    def handle(self, state: AppState, name: str, args: argparse.Namespace) -> CommandReply:
        handler = self._handlers.get(name.lower())
        if not handler:
            return CommandReply(f"Unknown command: {name}.", ok=False)
        return handler(state, args)


registry = CommandRegistry()


def _not_found(task_id: int) -> CommandReply:
    return CommandReply(f"Task with ID {task_id} not found.", ok=False)


def cmd_add(state: AppState, args: argparse.Namespace) -> CommandReply:
    due = getattr(args, "due", None)
    task = state.task_store.add(args.description, due)
    if due is not None and task.due_date is None:
        logger.warning("Unrecognized due date %r ignored (task id=%s).", due, task.id)
    return CommandReply("Task added successfully!")


def cmd_list(state: AppState, args: argparse.Namespace) -> CommandReply:
    show_all = bool(getattr(args, "all", False))
    tasks = state.task_store.list_tasks(show_all)
    return CommandReply(render_task_table(tasks, show_all=show_all))


def cmd_complete(state: AppState, args: argparse.Namespace) -> CommandReply:
    if not state.task_store.complete(args.task_id):
        return _not_found(args.task_id)
    return CommandReply("Task marked as complete!")


def cmd_delete(state: AppState, args: argparse.Namespace) -> CommandReply:
    if not state.task_store.delete(args.task_id):
        return _not_found(args.task_id)
    return CommandReply("Task deleted successfully!")


registry.register("add", cmd_add, help_text="Add a new task.")
registry.register("list", cmd_list, help_text="List tasks (incomplete only unless --all).", aliases=["ls"])
registry.register("complete", cmd_complete, help_text="Mark a task as complete.", aliases=["done"])
registry.register("delete", cmd_delete, help_text="Delete a task.", aliases=["rm"])
