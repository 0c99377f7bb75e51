# src/taskplanner/tasks/task_query.py

"""
Read-only queries over a task snapshot.

Every function takes an iterable of tasks and returns new lists; nothing here
mutates a task or talks to the store. "today" is always passed in by the caller
(usually from the store's clock).
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import StrEnum

from ..core.errors import ValidationError
from .task_models import Task, TaskPriority, TaskStatus

RECENT_LIMIT = 10
UPCOMING_DAYS = 7
OLDEST_OPEN_LIMIT = 3


class DeadlineWindow(StrEnum):
    TODAY = "today"
    THIS_WEEK = "week"
    THIS_MONTH = "month"
    NO_DEADLINE = "none"


def default_sort_key(task: Task) -> tuple[int, date, int]:
    # Tasks without a deadline go after every dated task of the same priority.
    return (task.priority.rank, task.deadline or date.max, task.id)


def sort_default(tasks: Iterable[Task]) -> list[Task]:
    """Priority (HIGH first), then deadline (none last), then id."""
    return sorted(tasks, key=default_sort_key)


def filter_by_status(tasks: Iterable[Task], status: TaskStatus) -> list[Task]:
    return [t for t in tasks if t.status == status]


def filter_by_priority(tasks: Iterable[Task], priority: TaskPriority) -> list[Task]:
    return [t for t in tasks if t.priority == priority]


def _window_bounds(window: DeadlineWindow, today: date) -> tuple[date, date]:
    if window == DeadlineWindow.TODAY:
        return today, today
    if window == DeadlineWindow.THIS_WEEK:
        return today, today + timedelta(days=7)
    if window == DeadlineWindow.THIS_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today, today.replace(day=last_day)
    raise ValueError(f"window {window!r} has no date bounds")


def filter_by_deadline(tasks: Iterable[Task], window: DeadlineWindow, today: date) -> list[Task]:
    """Deadline windows are inclusive on both ends."""
    if window == DeadlineWindow.NO_DEADLINE:
        return [t for t in tasks if t.deadline is None]

    start, end = _window_bounds(window, today)
    return [t for t in tasks if t.deadline is not None and start <= t.deadline <= end]


def filter_overdue(tasks: Iterable[Task], today: date) -> list[Task]:
    return [t for t in tasks if t.is_overdue(today)]


def count_overdue(tasks: Iterable[Task], today: date) -> int:
    return sum(1 for t in tasks if t.is_overdue(today))


def recently_updated(tasks: Iterable[Task], limit: int = RECENT_LIMIT) -> list[Task]:
    ordered = sorted(tasks, key=lambda t: t.updated_at, reverse=True)
    return ordered[: max(0, limit)]


def search(tasks: Iterable[Task], query: str) -> list[Task]:
    """Case-insensitive substring match on title or description."""
    needle = (query or "").strip().casefold()
    if not needle:
        raise ValidationError("search query must not be empty")
    return [
        t
        for t in tasks
        if needle in t.title.casefold() or needle in t.description.casefold()
    ]


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total: int
    done: int
    in_progress: int
    todo: int
    overdue: int
    by_priority: dict[TaskPriority, int] = field(default_factory=dict)
    oldest_open: list[Task] = field(default_factory=list)

    @staticmethod
    def percent(count: int, total: int) -> float:
        if total <= 0:
            return 0.0
        return count * 100.0 / total

    @property
    def done_percent(self) -> float:
        return self.percent(self.done, self.total)

    @property
    def in_progress_percent(self) -> float:
        return self.percent(self.in_progress, self.total)

    @property
    def todo_percent(self) -> float:
        return self.percent(self.todo, self.total)


def compute_statistics(
    tasks: Iterable[Task],
    today: date,
    oldest_limit: int = OLDEST_OPEN_LIMIT,
) -> TaskStatistics:
    """
    Totals over the whole collection.

    CANCELLED tasks count toward `total` but toward none of the done/in_progress/todo
    buckets. `oldest_open` holds the non-DONE tasks with the earliest created_at.
    """
    items = list(tasks)

    by_status = {s: 0 for s in TaskStatus}
    by_priority = {p: 0 for p in TaskPriority}
    for t in items:
        by_status[t.status] += 1
        by_priority[t.priority] += 1

    open_tasks = sorted((t for t in items if t.status != TaskStatus.DONE), key=lambda t: t.created_at)

    return TaskStatistics(
        total=len(items),
        done=by_status[TaskStatus.DONE],
        in_progress=by_status[TaskStatus.IN_PROGRESS],
        todo=by_status[TaskStatus.TODO],
        overdue=count_overdue(items, today),
        by_priority=by_priority,
        oldest_open=open_tasks[: max(0, oldest_limit)],
    )


def upcoming(
    tasks: Iterable[Task],
    today: date,
    days: int = UPCOMING_DAYS,
) -> dict[date, list[Task]]:
    """
    Open tasks due within [today, today + days], grouped by deadline.

    Groups are ordered by date; inside a group tasks keep their snapshot order.
    DONE and CANCELLED tasks are left out.
    """
    end = today + timedelta(days=days)
    selected = [
        (t.deadline, t)
        for t in tasks
        if t.deadline is not None
        and today <= t.deadline <= end
        and t.status not in (TaskStatus.DONE, TaskStatus.CANCELLED)
    ]
    selected.sort(key=lambda pair: pair[0])

    grouped: dict[date, list[Task]] = {}
    for deadline, t in selected:
        grouped.setdefault(deadline, []).append(t)
    return grouped
