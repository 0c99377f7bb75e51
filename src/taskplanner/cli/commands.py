# src/taskplanner/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..core.errors import TaskPlannerError, ValidationError
from ..core.state import AppState
from ..storage import csv_codec, json_codec
from ..tasks import task_query
from ..tasks.task_models import TaskPriority, TaskStatus, is_past_deadline, parse_deadline
from ..tasks.task_query import DeadlineWindow
from . import formatting

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        TaskPlannerError from a handler becomes an "Error: ..." reply; the
        operation that raised it has not changed the store.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskPlannerError as exc:
            logger.info("Command /%s failed: %s", name, exc)
            return f"Error: {exc}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _setting(state: AppState, name: str, default: int) -> int:
    return int(getattr(state.settings, name, default))


def _parse_id(args: list[str], usage: str) -> int:
    if not args:
        raise ValidationError(f"Usage: {usage}")
    try:
        return int(args[0])
    except ValueError:
        raise ValidationError(f"Invalid task id {args[0]!r}") from None


def _parse_status(raw: str) -> TaskStatus:
    try:
        return TaskStatus.from_wire(raw.upper())
    except ValueError:
        choices = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Unknown status {raw!r} (choose from {choices})") from None


def _parse_priority(raw: str) -> TaskPriority:
    try:
        return TaskPriority.from_wire(raw.upper())
    except ValueError:
        choices = ", ".join(p.value for p in TaskPriority)
        raise ValidationError(f"Unknown priority {raw!r} (choose from {choices})") from None


def _codec_and_path(state: AppState, args: list[str]):
    fmt = (args[0].lower() if args else "csv")
    if fmt == "csv":
        return csv_codec, Path(getattr(state.settings, "csv_path"))
    if fmt == "json":
        return json_codec, Path(getattr(state.settings, "json_path"))
    raise ValidationError(f"Unknown format {fmt!r} (use csv or json)")


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.store.create(title=" ".join(args))
    today = state.store.clock.today()
    return "Задача добавлена.\n" + formatting.format_task(task, today)


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.store.snapshot()
    if not tasks:
        return "Список задач пуст."

    today = state.store.clock.today()
    soon = _setting(state, "due_soon_days", 3)
    text = formatting.format_task_list(task_query.sort_default(tasks), today, soon)
    overdue = task_query.count_overdue(tasks, today)
    if overdue:
        text += f"\n\nВНИМАНИЕ: просрочено задач: {overdue}"
    return text


def cmd_show(state: AppState, args: list[str]) -> str:
    task = state.store.get(_parse_id(args, "/show <id>"))
    return formatting.format_task(task, state.store.clock.today(), _setting(state, "due_soon_days", 3))


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set <id> title <text>
    /set <id> description <text>
    /set <id> status <TODO|IN_PROGRESS|DONE|CANCELLED>
    /set <id> priority <HIGH|MEDIUM|LOW>
    /set <id> deadline <DD.MM.YYYY|->
    """
    usage = "/set <id> <title|description|status|priority|deadline> <value>"
    task_id = _parse_id(args, usage)
    if len(args) < 2:
        raise ValidationError(f"Usage: {usage}")

    field = args[1].lower()
    value = " ".join(args[2:])
    today = state.store.clock.today()
    warning = ""

    if field == "title":
        task = state.store.update(task_id, title=value)
    elif field == "description":
        task = state.store.update(task_id, description=value)
    elif field == "status":
        task = state.store.update(task_id, status=_parse_status(value))
    elif field == "priority":
        task = state.store.update(task_id, priority=_parse_priority(value))
    elif field == "deadline":
        deadline = None if value.strip() in ("", "-") else parse_deadline(value)
        task = state.store.update(task_id, deadline=deadline)
        if is_past_deadline(deadline, today):
            warning = "\nВнимание: указанная дата уже прошла."
    else:
        raise ValidationError(f"Usage: {usage}")

    return "Задача обновлена.\n" + formatting.format_task(task, today) + warning


def cmd_done(state: AppState, args: list[str]) -> str:
    task = state.store.update(_parse_id(args, "/done <id>"), status=TaskStatus.DONE)
    return f"Задача {task.id} выполнена."


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args, "/delete <id>")
    if state.store.delete(task_id):
        return f"Задача {task_id} удалена."
    return f"Задача с ID {task_id} не найдена."


def cmd_find(state: AppState, args: list[str]) -> str:
    found = task_query.search(state.store.snapshot(), " ".join(args))
    return formatting.format_task_list(found, state.store.clock.today())


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter status <STATUS>
    /filter priority <PRIORITY>
    /filter deadline <today|week|month|none>
    /filter overdue
    /filter recent
    """
    usage = "/filter status|priority|deadline|overdue|recent [value]"
    if not args:
        raise ValidationError(f"Usage: {usage}")

    tasks = state.store.snapshot()
    today = state.store.clock.today()
    kind = args[0].lower()
    value = args[1] if len(args) > 1 else ""

    if kind == "status":
        result = task_query.filter_by_status(tasks, _parse_status(value))
    elif kind == "priority":
        result = task_query.filter_by_priority(tasks, _parse_priority(value))
    elif kind == "deadline":
        try:
            window = DeadlineWindow(value.lower())
        except ValueError:
            raise ValidationError("Usage: /filter deadline today|week|month|none") from None
        result = task_query.filter_by_deadline(tasks, window, today)
    elif kind == "overdue":
        result = task_query.filter_overdue(tasks, today)
    elif kind == "recent":
        result = task_query.recently_updated(tasks, _setting(state, "recent_limit", 10))
    else:
        raise ValidationError(f"Usage: {usage}")

    return formatting.format_task_list(result, today, _setting(state, "due_soon_days", 3))


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = task_query.compute_statistics(
        state.store.snapshot(),
        state.store.clock.today(),
        oldest_limit=_setting(state, "oldest_open_limit", 3),
    )
    return formatting.format_statistics(stats)


def cmd_upcoming(state: AppState, args: list[str]) -> str:
    days = _setting(state, "upcoming_days", 7)
    groups = task_query.upcoming(state.store.snapshot(), state.store.clock.today(), days)
    return formatting.format_upcoming(groups, days)


def cmd_save(state: AppState, args: list[str]) -> str:
    codec, path = _codec_and_path(state, args)
    count = codec.save(state.store, path)
    return f"Данные сохранены в файл: {path}\nСохранено задач: {count}"


def cmd_load(state: AppState, args: list[str]) -> str:
    codec, path = _codec_and_path(state, args)
    result = codec.load(state.store, path)
    if not result.found:
        return f"Файл {path} не найден."

    lines = [f"Данные загружены из файла: {path}", f"Загружено задач: {result.loaded}"]
    for err in result.skipped:
        lines.append(f"Пропущена запись: {err}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("list", cmd_list, help_text="Show all tasks (priority, deadline, id order).", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("set", cmd_set, help_text="Edit a field: /set <id> <field> <value>.")
registry.register("done", cmd_done, help_text="Mark a task done: /done <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("find", cmd_find, help_text="Search title/description: /find <text>.")
registry.register("filter", cmd_filter, help_text="Filter: /filter status|priority|deadline|overdue|recent.")
registry.register("stats", cmd_stats, help_text="Show statistics.")
registry.register("upcoming", cmd_upcoming, help_text="Open tasks due in the coming days.")
registry.register("save", cmd_save, help_text="Save tasks: /save csv | /save json.")
registry.register("load", cmd_load, help_text="Load tasks: /load csv | /load json.")
