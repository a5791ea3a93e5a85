# src/todo_list/tasks/task_codec.py

"""
CSV encoding of the task collection.

Layout:
- first row is the header (TASK_COLUMNS, exact order)
- one row per task, file order == insertion order
- timestamps are ISO 8601 with UTC offset and microseconds; empty cell == None
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import datetime
from typing import TextIO

from .task_models import TASK_COLUMNS, Task

# Descriptions are not length-checked, so fields are effectively unbounded.
csv.field_size_limit(2**31 - 1)


class DeserializationError(ValueError):
    """Malformed task file content (schema mismatch, bad id or timestamp)."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.isoformat(timespec="microseconds")


def parse_timestamp(raw: str, *, column: str, line: int) -> datetime | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        raise DeserializationError(f"bad timestamp in {column!r}: {raw!r}", line=line) from None
    if value.tzinfo is None:
        # Naive values are taken as local civil time.
        value = value.astimezone()
    return value


def _parse_id(raw: str, *, line: int) -> int:
    try:
        task_id = int(raw.strip())
    except ValueError:
        raise DeserializationError(f"non-numeric id: {raw!r}", line=line) from None
    if task_id < 1:
        raise DeserializationError(f"id must be positive: {task_id}", line=line)
    return task_id


def task_to_row(task: Task) -> list[str]:
    return [
        str(task.id),
        task.description,
        format_timestamp(task.created_at),
        format_timestamp(task.completed_at),
        format_timestamp(task.due_date),
    ]


def row_to_task(row: list[str], *, line: int) -> Task:
    if len(row) != len(TASK_COLUMNS):
        raise DeserializationError(
            f"expected {len(TASK_COLUMNS)} columns, got {len(row)}", line=line
        )

    raw_id, description, raw_created, raw_completed, raw_due = row

    created_at = parse_timestamp(raw_created, column="created_at", line=line)
    if created_at is None:
        raise DeserializationError("created_at is required", line=line)

    return Task(
        id=_parse_id(raw_id, line=line),
        description=description,
        created_at=created_at,
        completed_at=parse_timestamp(raw_completed, column="completed_at", line=line),
        due_date=parse_timestamp(raw_due, column="due_date", line=line),
    )


def read_tasks(fh: TextIO) -> list[Task]:
    """Decode a whole file. An empty file decodes to no tasks."""
    reader = csv.reader(fh, strict=True)
    try:
        header = next(reader, None)
        if header is None:
            return []
        if tuple(header) != TASK_COLUMNS:
            raise DeserializationError(
                f"unexpected header {header!r}, expected {list(TASK_COLUMNS)!r}", line=1
            )

        tasks: list[Task] = []
        for row in reader:
            if not row:
                continue
            tasks.append(row_to_task(row, line=reader.line_num))
    except csv.Error as e:
        raise DeserializationError(f"unreadable CSV: {e}", line=reader.line_num) from e
    except UnicodeDecodeError as e:
        raise DeserializationError(f"invalid UTF-8: {e.reason}") from e
    return tasks


def write_tasks(fh: TextIO, tasks: Iterable[Task]) -> None:
    writer = csv.writer(fh)
    writer.writerow(TASK_COLUMNS)
    for task in tasks:
        writer.writerow(task_to_row(task))
