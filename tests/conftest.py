# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskplanner.core.state import AppState
from taskplanner.tasks.task_store import TaskStore

from .fakes import FixedClock


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def store(clock: FixedClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskplanner-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        csv_path=tmp_path / "tasks.csv",
        json_path=tmp_path / "tasks.json",
        load_on_start=True,
        save_on_exit=True,
        recent_limit=10,
        upcoming_days=7,
        due_soon_days=3,
        oldest_open_limit=3,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
