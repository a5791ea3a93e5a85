# src/todo_list/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# On-disk column order; the header row must match exactly.
TASK_COLUMNS: tuple[str, ...] = (
    "id",
    "description",
    "created_at",
    "completed_at",
    "due_date",
)


@dataclass(slots=True)
class Task:
    id: int
    description: str
    created_at: datetime

    completed_at: datetime | None = None
    due_date: datetime | None = None

    @property
    def is_complete(self) -> bool:
        return self.completed_at is not None
