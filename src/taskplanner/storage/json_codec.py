# src/taskplanner/storage/json_codec.py

"""
JSON-like array format.

The encoder writes a pretty-printed array of flat objects with a fixed key order.
The decoder is NOT a JSON parser. It:

1. joins all lines and strips the outer '[' / ']'
2. splits the remaining text on the literal '},{'
3. splits each object body on ',' and each pair on the first ':'

so a ',' inside a string value corrupts that record and a ':' inside a string
key/value pair may too. Only files produced by `encode` are expected to load.
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

OBJECT_SEPARATOR = "},{"

_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)
_UNESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}

_REQUIRED_KEYS = ("id", "title", "status", "priority", "createdAt", "updatedAt")


def escape_string(value: str) -> str:
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def unescape_string(value: str) -> str:
    """Reverse escape_string. Unknown escapes are kept verbatim."""
    if "\\" not in value:
        return value

    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value) and value[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[value[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def encode_task(task: Task) -> str:
    return (
        "{\n"
        f'  "id": {task.id},\n'
        f'  "title": "{escape_string(task.title)}",\n'
        f'  "description": "{escape_string(task.description)}",\n'
        f'  "status": "{task.status.value}",\n'
        f'  "priority": "{task.priority.value}",\n'
        f'  "deadline": "{format_deadline(task.deadline)}",\n'
        f'  "createdAt": "{format_timestamp(task.created_at)}",\n'
        f'  "updatedAt": "{format_timestamp(task.updated_at)}"\n'
        "}"
    )


def encode(tasks: Iterable[Task]) -> str:
    objects = [encode_task(t) for t in tasks]
    if not objects:
        return "[\n]\n"
    return "[\n" + ",\n".join(objects) + "\n]\n"


def split_objects(text: str) -> list[str]:
    """
    Cut the array text into object bodies (without their braces).

    Line breaks are dropped before splitting, so an encoder-produced "},\\n{"
    becomes the "},{" separator.
    """
    content = text.replace("\r", "").replace("\n", "").strip()
    if content.startswith("["):
        content = content[1:]
    if content.endswith("]"):
        content = content[:-1]
    content = content.strip()
    if not content:
        return []

    bodies = content.split(OBJECT_SEPARATOR)
    bodies[0] = bodies[0].lstrip()
    if bodies[0].startswith("{"):
        bodies[0] = bodies[0][1:]
    bodies[-1] = bodies[-1].rstrip()
    if bodies[-1].endswith("}"):
        bodies[-1] = bodies[-1][:-1]
    return bodies


def parse_object_body(body: str) -> dict[str, str]:
    """
    Split `"key": value, ...` into a dict of raw strings.

    Pairs without a ':' are ignored. Surrounding double quotes are removed from
    values and escapes are reversed; bare values (numbers, null) stay as written.
    """
    fields: dict[str, str] = {}
    for pair in body.split(","):
        key, sep, value = pair.partition(":")
        if not sep:
            continue
        key = key.strip().replace('"', "").strip()
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = unescape_string(value[1:-1])
        fields[key] = value
    return fields


def _task_from_fields(fields: dict[str, str]) -> Task:
    missing = [k for k in _REQUIRED_KEYS if k not in fields]
    if missing:
        raise ValueError(f"missing keys: {', '.join(missing)}")

    return build_task(
        raw_id=fields["id"],
        title=fields["title"],
        description=fields.get("description", ""),
        raw_status=fields["status"],
        raw_priority=fields["priority"],
        raw_deadline=fields.get("deadline"),
        raw_created=fields["createdAt"],
        raw_updated=fields["updatedAt"],
    )


def decode(text: str) -> tuple[list[Task], list[DecodeRecordError]]:
    """
    Parse encoder output back into tasks.

    Each object is converted on its own: a malformed object is reported in the
    returned error list and skipped.
    """
    skipped: list[DecodeRecordError] = []
    parsed: list[tuple[int, str, Task]] = []

    for index, body in enumerate(split_objects(text), start=1):
        try:
            task = _task_from_fields(parse_object_body(body))
        except ValueError as exc:
            skipped.append(DecodeRecordError(index, body, str(exc)))
            continue
        parsed.append((index, body, task))

    return keep_unique_ids(parsed, skipped), skipped


def save(store: TaskStore, path: str | Path) -> int:
    tasks = store.snapshot()
    write_text_atomic(path, encode(tasks))
    logger.info("Saved %d tasks to %s", len(tasks), path)
    return len(tasks)


def load(store: TaskStore, path: str | Path) -> LoadResult:
    """
    Replace the store's collection with the contents of `path`.

    Missing file: store untouched, LoadResult.found is False.
    An empty array loads as zero records (the collection is cleared).
    """
    text = read_text_if_exists(path)
    if text is None:
        return LoadResult(found=False)

    tasks, skipped = decode(text)
    return apply_loaded(store, tasks, skipped, source=str(path))
