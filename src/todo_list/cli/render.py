# src/todo_list/cli/render.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import humanize

from ..tasks.task_models import Task


def _local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _ts(value: datetime | None, missing: str, now: datetime) -> str:
    """Relative time: "3 hours ago", "2 days from now"."""
    if value is None:
        return missing
    return humanize.naturaltime(_local_naive(value), when=now)


def _row(cells: list[str], show_all: bool) -> str:
    line = f"{cells[0]:<4} {cells[1]:<50} {cells[2]:<20} {cells[3]:<20}"
    if show_all:
        line += f" {cells[4]:<20}"
    return line.rstrip()


def render_task_table(
    tasks: Iterable[Task], *, show_all: bool, now: datetime | None = None
) -> str:
    """Fixed-width table; the Completed column only appears with show_all."""
    now = datetime.now() if now is None else _local_naive(now)
    lines = [_row(["ID", "Task", "Created", "Due", "Completed"], show_all)]
    for task in tasks:
        cells = [
            str(task.id),
            task.description,
            _ts(task.created_at, "", now),
            _ts(task.due_date, "None", now),
            _ts(task.completed_at, "Incomplete", now),
        ]
        lines.append(_row(cells, show_all))
    return "\n".join(lines)
