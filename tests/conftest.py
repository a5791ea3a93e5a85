# tests/conftest.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_list.core.state import AppState
from todo_list.tasks.task_store import TaskStore

from fakes import FakeTaskRepo

TZ = timezone(timedelta(hours=2))


class StepClock:
    """Deterministic clock: each call advances by one minute."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 10, 18, 9, 0, 0, 123456, tzinfo=TZ)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; undo it between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and cli.main.

    A SimpleNamespace keeps tests isolated from the process environment.
    """
    return SimpleNamespace(
        app_name="tasks",
        log_level="WARNING",
        log_dir=None,
        tasks_path=tmp_path / "tasks.csv",
        lock_path=tmp_path / "tasks.csv.lock",
        lock_timeout=-1,
    )


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(settings: SimpleNamespace, clock: StepClock) -> TaskStore:
    return TaskStore(settings.tasks_path, lock_path=settings.lock_path, clock=clock)


@pytest.fixture()
def fake_state(settings: SimpleNamespace) -> AppState:
    return AppState(settings=settings, task_store=FakeTaskRepo())
