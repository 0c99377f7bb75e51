# src/taskplanner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
- Core modules (store, queries, codecs) never read settings directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKPLANNER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    csv_path: Path
    json_path: Path

    # ---- Lifecycle ----
    load_on_start: bool
    save_on_exit: bool

    # ---- Query tuning ----
    recent_limit: int
    upcoming_days: int
    due_soon_days: int
    oldest_open_limit: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskplanner") or "taskplanner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskplanner"))
        csv_path = _env_path(_k("CSV_PATH"), data_dir / "tasks.csv")
        json_path = _env_path(_k("JSON_PATH"), data_dir / "tasks.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            csv_path=csv_path,
            json_path=json_path,
            load_on_start=_env_bool(_k("LOAD_ON_START"), True),
            save_on_exit=_env_bool(_k("SAVE_ON_EXIT"), True),
            recent_limit=max(0, _env_int(_k("RECENT_LIMIT"), 10)),
            upcoming_days=max(0, _env_int(_k("UPCOMING_DAYS"), 7)),
            due_soon_days=max(0, _env_int(_k("DUE_SOON_DAYS"), 3)),
            oldest_open_limit=max(0, _env_int(_k("OLDEST_OPEN_LIMIT"), 3)),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
