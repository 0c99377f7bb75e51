# src/taskplanner/cli/formatting.py

"""Plain-text rendering of tasks and query results for the console."""

from __future__ import annotations

from datetime import date

from ..tasks.task_models import DeadlineState, Task, TaskPriority, deadline_state
from ..tasks.task_query import TaskStatistics

DATE_FMT = "%d.%m.%Y"
DATETIME_FMT = "%d.%m.%Y %H:%M"

_RULE = "─" * 49


def _deadline_line(task: Task, today: date, soon_days: int) -> str:
    if task.deadline is None:
        return "Дедлайн: не установлен"

    shown = task.deadline.strftime(DATE_FMT)
    state = deadline_state(task, today, soon_days)
    if state == DeadlineState.OVERDUE:
        return f"Дедлайн: {shown} (ПРОСРОЧЕНО)"
    days = task.days_until_deadline(today)
    if state == DeadlineState.DUE_SOON:
        return f"Дедлайн: {shown} (скоро истекает: {days} дн.)"
    return f"Дедлайн: {shown} (осталось {days} дн.)"


def format_task(task: Task, today: date, soon_days: int = 3) -> str:
    lines = [
        f"┌{_RULE}",
        f"│ ID: {task.id}",
        f"│ {task.title}",
        f"│ {task.description or '(без описания)'}",
        f"│ Статус: {task.status.label}",
        f"│ Приоритет: {task.priority.label}",
        f"│ {_deadline_line(task, today, soon_days)}",
        f"│ Создано: {task.created_at.strftime(DATETIME_FMT)}",
        f"│ Обновлено: {task.updated_at.strftime(DATETIME_FMT)}",
        f"└{_RULE}",
    ]
    return "\n".join(lines)


def format_task_list(tasks: list[Task], today: date, soon_days: int = 3) -> str:
    if not tasks:
        return "Задачи не найдены."
    blocks = [f"Найдено задач: {len(tasks)}"]
    blocks.extend(format_task(t, today, soon_days) for t in tasks)
    return "\n\n".join(blocks)


def format_statistics(stats: TaskStatistics) -> str:
    lines = [
        f"Всего задач: {stats.total}",
        f"Выполнено: {stats.done} ({stats.done_percent:.1f}%)",
        f"В процессе: {stats.in_progress} ({stats.in_progress_percent:.1f}%)",
        f"К выполнению: {stats.todo} ({stats.todo_percent:.1f}%)",
        f"Просрочено: {stats.overdue}",
        "",
        "Распределение по приоритетам:",
    ]
    for priority in TaskPriority:
        lines.append(f"  {priority.label}: {stats.by_priority.get(priority, 0)}")

    if stats.oldest_open:
        lines.append("")
        lines.append("Самые старые невыполненные задачи:")
        for t in stats.oldest_open:
            lines.append(f"  • ID {t.id}: {t.title} (создано: {t.created_at.strftime(DATE_FMT)})")
    return "\n".join(lines)


def format_upcoming(groups: dict[date, list[Task]], days: int) -> str:
    if not groups:
        return "Нет предстоящих задач на ближайшие дни."

    total = sum(len(items) for items in groups.values())
    lines = [f"Задачи на ближайшие {days} дн. ({total}):"]
    for day, items in groups.items():
        lines.append("")
        lines.append(f"{day.strftime(DATE_FMT)}:")
        for t in items:
            lines.append(f"   • [ID {t.id}] {t.title} ({t.priority.label}, {t.status.label})")
    return "\n".join(lines)
