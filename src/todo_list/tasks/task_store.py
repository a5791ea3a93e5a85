# src/todo_list/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from filelock import FileLock

from .due_dates import parse_due_date
from .task_codec import read_tasks, write_tasks
from .task_models import Task

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TaskStore:
    """
    CSV task store.

    The whole file is the store: every operation reads all records and every
    mutation rewrites all of them.

    Concurrency (separate processes running the CLI at once):
    - one exclusive advisory lock on a sidecar file is held across the full
      load -> mutate -> save span, so no update is lost
    - the lock is reentrant within one store, so public operations nest
    - rewrites go to a temp file in the same directory and are renamed over the
      data file, so readers never see a half-written file

    Ids are max(existing) + 1, so they stay unique even if file order and id
    order disagree. Deleting the highest-id task frees that id for the next add;
    there is no persisted counter.
    """

    def __init__(
        self,
        path: str | Path = "tasks.csv",
        *,
        lock_path: str | Path | None = None,
        lock_timeout: float = -1,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._path = Path(path)
        self._lock_path = (
            Path(lock_path) if lock_path is not None else self._path.with_name(self._path.name + ".lock")
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(self._lock_path), timeout=lock_timeout)
        self._clock = clock
        logger.debug("TaskStore ready path=%s lock=%s", self._path, self._lock_path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _tmp_path(self) -> Path:
        return self._path.with_name(self._path.name + ".tmp")

    # ---- public API ----

    def load(self) -> list[Task]:
        """Read every task in file order. Missing file -> empty list."""
        with self._lock:
            if not self._path.exists():
                return []
            with open(self._path, newline="", encoding="utf-8") as fh:
                tasks = read_tasks(fh)
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Replace the stored collection with `tasks`, atomically."""
        tasks = list(tasks)
        with self._lock:
            tmp = self._tmp_path()
            try:
                with open(tmp, "w", newline="", encoding="utf-8") as fh:
                    write_tasks(fh, tasks)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    tmp.unlink()
                raise
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    def add(self, description: str, due: str | None = None) -> Task:
        with self._lock:
            tasks = self.load()
            now = self._clock()
            task = Task(
                id=max((t.id for t in tasks), default=0) + 1,
                description=description,
                created_at=now,
                completed_at=None,
                due_date=parse_due_date(due, now=now),
            )
            tasks.append(task)
            self.save(tasks)

        logger.info("Task added id=%s due=%s", task.id, task.due_date)
        return task

    def complete(self, task_id: int) -> bool:
        """
        Mark a task complete. Completing an already-complete task refreshes
        its completion timestamp. Returns False if no task has this id.
        """
        with self._lock:
            tasks = self.load()
            task = next((t for t in tasks if t.id == task_id), None)
            if task is None:
                logger.info("complete: task id=%s not found", task_id)
                return False
            task.completed_at = self._clock()
            self.save(tasks)

        logger.info("Task completed id=%s", task_id)
        return True

    def delete(self, task_id: int) -> bool:
        with self._lock:
            tasks = self.load()
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                logger.info("delete: task id=%s not found", task_id)
                return False
            self.save(remaining)

        logger.info("Task deleted id=%s", task_id)
        return True

    def list_tasks(self, show_all: bool = False) -> list[Task]:
        """Tasks in file order; incomplete ones only unless show_all."""
        tasks = self.load()
        if show_all:
            return tasks
        return [t for t in tasks if not t.is_complete]

    def get_task(self, task_id: int) -> Task | None:
        return next((t for t in self.load() if t.id == task_id), None)

    def count_tasks(self) -> int:
        return len(self.load())
