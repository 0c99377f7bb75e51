# src/taskplanner/core/errors.py

"""
Error taxonomy shared by the store, the query functions and the codecs.

- ValidationError / NotFoundError are raised to the caller; state is left unchanged.
- DecodeRecordError describes one malformed record; codecs collect these instead of raising.
- StorageError wraps OSError from file access.
"""

from __future__ import annotations

from pathlib import Path


class TaskPlannerError(Exception):
    """Base class for all errors raised by taskplanner."""


class ValidationError(TaskPlannerError):
    pass


class NotFoundError(TaskPlannerError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with id={task_id} not found")
        self.task_id = task_id


class DecodeRecordError(TaskPlannerError):
    def __init__(self, position: int, raw: str, reason: str) -> None:
        super().__init__(f"record #{position}: {reason}")
        self.position = position
        self.raw = raw
        self.reason = reason


class StorageError(TaskPlannerError):
    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)
