# src/taskplanner/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from ..core.errors import ValidationError

# Sentinel used for "no deadline" in days_until_deadline.
UNBOUNDED_DAYS = 2**63 - 1

_DEADLINE_INPUT_RE = re.compile(r"\d{2}\.\d{2}\.\d{4}")


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The enum value is the wire name written to CSV/JSON; `label` is for display only.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_wire(cls, raw: str) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"unknown status {raw!r}") from None


class TaskPriority(StrEnum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]

    @property
    def rank(self) -> int:
        """Sort rank: most urgent first."""
        return _PRIORITY_RANKS[self]

    @classmethod
    def from_wire(cls, raw: str) -> TaskPriority:
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"unknown priority {raw!r}") from None


_STATUS_LABELS = {
    TaskStatus.TODO: "К выполнению",
    TaskStatus.IN_PROGRESS: "В процессе",
    TaskStatus.DONE: "Выполнено",
    TaskStatus.CANCELLED: "Отменено",
}

_PRIORITY_LABELS = {
    TaskPriority.HIGH: "🔴 Высокий",
    TaskPriority.MEDIUM: "🟡 Средний",
    TaskPriority.LOW: "🟢 Низкий",
}

_PRIORITY_RANKS = {
    TaskPriority.HIGH: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.LOW: 2,
}


class DeadlineState(StrEnum):
    NONE = "none"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    OK = "ok"


_FIXED_FIELDS = frozenset({"id", "created_at"})


@dataclass(slots=True)
class Task:
    """
    One unit of trackable work.

    `id` and `created_at` are fixed at construction: assigning them afterwards
    raises AttributeError. Business fields are changed through TaskStore.update,
    which also refreshes `updated_at`.
    """

    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    deadline: date | None
    created_at: datetime
    updated_at: datetime

    def __setattr__(self, name: str, value: object) -> None:
        if name in _FIXED_FIELDS and hasattr(self, name):
            raise AttributeError(f"Task.{name} cannot be changed")
        object.__setattr__(self, name, value)

    def is_overdue(self, today: date) -> bool:
        # CANCELLED tasks with a past deadline count as overdue too.
        return self.deadline is not None and self.deadline < today and self.status != TaskStatus.DONE

    def days_until_deadline(self, today: date) -> int:
        if self.deadline is None:
            return UNBOUNDED_DAYS
        return (self.deadline - today).days


def deadline_state(task: Task, today: date, soon_days: int = 3) -> DeadlineState:
    if task.deadline is None:
        return DeadlineState.NONE
    if task.is_overdue(today):
        return DeadlineState.OVERDUE
    if task.days_until_deadline(today) <= soon_days:
        return DeadlineState.DUE_SOON
    return DeadlineState.OK


def parse_deadline(text: str | None) -> date | None:
    """
    Parse a user-entered deadline in DD.MM.YYYY form.

    Empty input means "no deadline". Anything else that is not a real calendar date
    raises ValidationError.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    if not _DEADLINE_INPUT_RE.fullmatch(raw):
        raise ValidationError(f"Invalid date format {raw!r}, expected DD.MM.YYYY")
    try:
        return datetime.strptime(raw, "%d.%m.%Y").date()
    except ValueError:
        raise ValidationError(f"Invalid date {raw!r}") from None


def is_past_deadline(deadline: date | None, today: date) -> bool:
    return deadline is not None and deadline < today
