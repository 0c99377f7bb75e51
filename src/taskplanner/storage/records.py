# src/taskplanner/storage/records.py

"""
Field conversions shared by the CSV and JSON codecs.

Wire formats:
- status / priority: enum wire names (TODO, HIGH, ...)
- deadline: ISO calendar date or empty string
- timestamps: ISO local date-time, no offset
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from ..core.errors import DecodeRecordError
from ..tasks.task_models import Task, TaskPriority, TaskStatus
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadResult:
    """Outcome of one load call."""

    found: bool
    loaded: int = 0
    skipped: list[DecodeRecordError] = field(default_factory=list)


def format_deadline(deadline: date | None) -> str:
    return deadline.isoformat() if deadline is not None else ""


def format_timestamp(ts: datetime) -> str:
    return ts.isoformat()


def _parse_local_timestamp(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw.strip())
    if ts.tzinfo is not None:
        raise ValueError(f"timestamp {raw!r} carries a UTC offset")
    return ts


def build_task(
    *,
    raw_id: str,
    title: str,
    description: str,
    raw_status: str,
    raw_priority: str,
    raw_deadline: str | None,
    raw_created: str,
    raw_updated: str,
) -> Task:
    """
    Convert wire strings into a Task.

    Raises ValueError on a bad integer, unknown enum name or unparsable date;
    callers turn that into a DecodeRecordError for the one record.
    """
    deadline_str = (raw_deadline or "").strip()
    deadline = None
    if deadline_str and deadline_str != "null":
        deadline = date.fromisoformat(deadline_str)

    created_at = _parse_local_timestamp(raw_created)
    updated_at = _parse_local_timestamp(raw_updated)
    if updated_at < created_at:
        raise ValueError("updatedAt is earlier than createdAt")

    return Task(
        id=int(raw_id.strip()),
        title=title,
        description=description,
        status=TaskStatus.from_wire(raw_status.strip()),
        priority=TaskPriority.from_wire(raw_priority.strip()),
        deadline=deadline,
        created_at=created_at,
        updated_at=updated_at,
    )


def keep_unique_ids(
    tasks: Iterable[tuple[int, str, Task]],
    skipped: list[DecodeRecordError],
) -> list[Task]:
    """
    Drop records whose id was already seen in the same file.

    `tasks` yields (position, raw, task); duplicates are appended to `skipped`.
    """
    seen: set[int] = set()
    out: list[Task] = []
    for position, raw, task in tasks:
        if task.id in seen:
            skipped.append(DecodeRecordError(position, raw, f"duplicate id {task.id}"))
            continue
        seen.add(task.id)
        out.append(task)
    return out


def apply_loaded(
    store: TaskStore,
    tasks: list[Task],
    skipped: list[DecodeRecordError],
    *,
    source: str,
) -> LoadResult:
    for err in skipped:
        logger.warning("Skipping malformed record in %s: %s", source, err)
    store.replace_all(tasks)
    logger.info("Loaded %d tasks from %s (skipped=%d)", len(tasks), source, len(skipped))
    return LoadResult(found=True, loaded=len(tasks), skipped=skipped)
