# src/taskplanner/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test stand-in with the same attributes).
    settings: object

    store: TaskStore

    # Set when the CSV file existed but could not be read; exit save is skipped.
    startup_load_failed: bool = False
