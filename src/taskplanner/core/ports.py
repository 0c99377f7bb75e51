# src/taskplanner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store and the query helpers never call datetime.now() directly: they ask a Clock.
Tests inject a fixed clock so "today" and "now" are deterministic.
"""

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...
    def today(self) -> date: ...


class SystemClock:
    """Wall-clock time in the local timezone (naive datetimes, as persisted)."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()
