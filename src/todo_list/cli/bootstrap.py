# src/todo_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the CSV task store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    task_store = TaskStore(
        settings.tasks_path,
        lock_path=settings.lock_path,
        lock_timeout=settings.lock_timeout,
    )
    logger.debug("State ready tasks_path=%s", settings.tasks_path)
    return AppState(settings=settings, task_store=task_store)
