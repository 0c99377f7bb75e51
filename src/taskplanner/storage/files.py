# src/taskplanner/storage/files.py

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


def read_text_if_exists(path: str | Path) -> str | None:
    """
    Read a whole UTF-8 file.

    Returns None when the file does not exist; any other OSError
    (permissions, a directory in the way, ...) becomes StorageError.
    """
    p = Path(path)
    if not p.exists():
        logger.info("File not found, nothing to load: %s", p)
        return None
    try:
        with open(p, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(p, f"Failed to read ({exc})") from exc


def write_text_atomic(path: str | Path, text: str) -> None:
    """
    Write `text` next to `path` and rename it into place.

    The temp file is removed on every failure path, so a failed save never
    leaves a truncated data file behind.
    """
    p = Path(path)
    tmp = p.with_name(p.name + ".tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp, p)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise StorageError(p, f"Failed to write ({exc})") from exc
