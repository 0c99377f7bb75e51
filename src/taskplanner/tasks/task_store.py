# src/taskplanner/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from typing import Any

from ..core.errors import NotFoundError, ValidationError
from ..core.ports import Clock, SystemClock
from .task_models import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def _single_line(field: str, value: str) -> str:
    # Records are one line each in the CSV file.
    if "\n" in value or "\r" in value:
        raise ValidationError(f"{field} must not contain line breaks")
    return value


class TaskStore:
    """
    In-memory task collection.

    - ids come from a monotonically increasing counter and are never reused
    - insertion order is kept; query helpers re-sort snapshots as needed
    - replace_all swaps the whole collection (used after a successful load)

    Single caller, single thread: create() and replace_all() are check-then-act
    and need a lock if the store is ever shared.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()
        self._tasks: list[Task] = []
        self._next_id = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def clock(self) -> Clock:
        return self._clock

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- public API ----

    def create(
        self,
        *,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        deadline: date | None = None,
    ) -> Task:
        if not title or not title.strip():
            raise ValidationError("title is required")
        title = _single_line("title", title.strip())
        description = _single_line("description", (description or "").strip())

        now = self._clock.now()
        task = Task(
            id=self._next_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            deadline=deadline,
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self._tasks.append(task)
        logger.debug(
            "Task created id=%s status=%s priority=%s deadline=%s",
            task.id,
            status.value,
            priority.value,
            deadline,
        )
        return task

    def find_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def get(self, task_id: int) -> Task:
        task = self.find_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def update(
        self,
        task_id: int,
        *,
        title: str = _UNSET,
        description: str = _UNSET,
        status: TaskStatus = _UNSET,
        priority: TaskPriority = _UNSET,
        deadline: date | None = _UNSET,
    ) -> Task:
        """
        Apply only the supplied fields and refresh updated_at.

        Pass deadline=None to clear the deadline. A blank title, or a line break in
        title or description, is rejected (ValidationError) before anything is changed.
        """
        task = self.get(task_id)

        changes: dict[str, Any] = {}
        if title is not _UNSET:
            if not title or not title.strip():
                raise ValidationError("title must not be empty")
            changes["title"] = _single_line("title", title.strip())
        if description is not _UNSET:
            changes["description"] = _single_line("description", (description or "").strip())
        if status is not _UNSET:
            changes["status"] = status
        if priority is not _UNSET:
            changes["priority"] = priority
        if deadline is not _UNSET:
            changes["deadline"] = deadline

        if not changes:
            return task

        for name, value in changes.items():
            setattr(task, name, value)
        task.updated_at = max(self._clock.now(), task.created_at)

        logger.debug("Task updated id=%s fields=%s", task_id, ",".join(changes))
        return task

    def delete(self, task_id: int) -> bool:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[i]
                logger.debug("Task deleted id=%s", task_id)
                return True
        return False

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Swap in a loaded collection and move next_id past every loaded id."""
        new_tasks = list(tasks)
        self._tasks = new_tasks
        self._next_id = max((t.id for t in new_tasks), default=0) + 1
        logger.info("TaskStore replaced total=%s next_id=%s", len(new_tasks), self._next_id)

    def snapshot(self) -> tuple[Task, ...]:
        """Point-in-time copy of the collection in insertion order."""
        return tuple(replace(t) for t in self._tasks)
