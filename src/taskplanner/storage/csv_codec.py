# src/taskplanner/storage/csv_codec.py

"""
';'-delimited tabular format.

One header line, then one line per task with 8 fields:
id;title;description;status;priority;deadline;createdAt;updatedAt

There is no quoting: any ';' inside title/description is written as ','.
That substitution is lossy and is kept as-is so existing files stay readable
by every version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import DecodeRecordError
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .files import read_text_if_exists, write_text_atomic
from .records import (
    LoadResult,
    apply_loaded,
    build_task,
    format_deadline,
    format_timestamp,
    keep_unique_ids,
)

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"
CSV_HEADER = "ID;Название;Описание;Статус;Приоритет;Дедлайн;Создано;Обновлено"
CSV_FIELD_COUNT = 8


def _escape_field(value: str) -> str:
    return value.replace(CSV_DELIMITER, ",")


def encode_task(task: Task) -> str:
    return CSV_DELIMITER.join(
        (
            str(task.id),
            _escape_field(task.title),
            _escape_field(task.description),
            task.status.value,
            task.priority.value,
            format_deadline(task.deadline),
            format_timestamp(task.created_at),
            format_timestamp(task.updated_at),
        )
    )


def encode(tasks: Iterable[Task]) -> str:
    """Header plus one line per task; every line, the last included, ends with '\\n'."""
    lines = [CSV_HEADER]
    lines.extend(encode_task(t) for t in tasks)
    return "".join(line + "\n" for line in lines)


def decode(text: str) -> tuple[list[Task], list[DecodeRecordError]]:
    """
    Parse CSV text into tasks.

    The first line is always treated as the header. Blank lines are ignored.
    A line with fewer than 8 fields, or with a field that does not parse, is
    reported in the returned error list and skipped; the rest still load.
    """
    skipped: list[DecodeRecordError] = []
    parsed: list[tuple[int, str, Task]] = []

    lines = text.split("\n")
    for line_no, line in enumerate(lines[1:], start=2):
        line = line.rstrip("\r")
        if not line.strip():
            continue

        # str.split keeps empty trailing fields.
        parts = line.split(CSV_DELIMITER)
        if len(parts) < CSV_FIELD_COUNT:
            skipped.append(
                DecodeRecordError(line_no, line, f"expected {CSV_FIELD_COUNT} fields, got {len(parts)}")
            )
            continue

        try:
            task = build_task(
                raw_id=parts[0],
                title=parts[1],
                description=parts[2],
                raw_status=parts[3],
                raw_priority=parts[4],
                raw_deadline=parts[5],
                raw_created=parts[6],
                raw_updated=parts[7],
            )
        except ValueError as exc:
            skipped.append(DecodeRecordError(line_no, line, str(exc)))
            continue

        parsed.append((line_no, line, task))

    return keep_unique_ids(parsed, skipped), skipped


def save(store: TaskStore, path: str | Path) -> int:
    """Write the whole collection to `path`. Returns the number of records written."""
    tasks = store.snapshot()
    write_text_atomic(path, encode(tasks))
    logger.info("Saved %d tasks to %s", len(tasks), path)
    return len(tasks)


def load(store: TaskStore, path: str | Path) -> LoadResult:
    """
    Replace the store's collection with the contents of `path`.

    A missing file is not an error: the store is left untouched and
    LoadResult.found is False.
    """
    text = read_text_if_exists(path)
    if text is None:
        return LoadResult(found=False)

    tasks, skipped = decode(text)
    return apply_loaded(store, tasks, skipped, source=str(path))
