# src/taskplanner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the store (with its clock) into AppState,
- loads and saves the CSV file around a console session.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StorageError
from ..core.ports import Clock
from ..core.state import AppState
from ..storage import csv_codec
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.csv_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(settings=settings, store=TaskStore(clock=clock))

    if getattr(settings, "load_on_start", True):
        load_startup_tasks(state)
    return state


def load_startup_tasks(state: AppState) -> None:
    """
    Load the CSV file if present.

    A broken file is logged, not fatal, but it marks the state so that
    save_on_exit leaves the file alone.
    """
    path = state.settings.csv_path  # type: ignore[attr-defined]
    try:
        result = csv_codec.load(state.store, path)
    except StorageError:
        logger.exception("Failed to load tasks from %s; starting with an empty list.", path)
        state.startup_load_failed = True
        return

    if not result.found:
        logger.info("No task file at %s yet; it will be created on save.", path)


def save_on_exit(state: AppState) -> None:
    if not getattr(state.settings, "save_on_exit", True):
        return
    path = state.settings.csv_path  # type: ignore[attr-defined]
    if state.startup_load_failed:
        logger.warning("Not saving to %s: the file could not be read at startup.", path)
        return
    try:
        csv_codec.save(state.store, path)
    except StorageError:
        logger.exception("Failed to save tasks to %s", path)
