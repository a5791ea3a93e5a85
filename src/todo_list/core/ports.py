# src/todo_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of the concrete CSV store,
which keeps handlers testable with an in-memory fake.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def add(self, description: str, due: str | None = None) -> Task: ...

    def complete(self, task_id: int) -> bool: ...

    def delete(self, task_id: int) -> bool: ...

    def list_tasks(self, show_all: bool = False) -> list[Task]: ...
