# tests/test_task_query.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from taskplanner.core.errors import ValidationError
from taskplanner.tasks import task_query
from taskplanner.tasks.task_models import Task, TaskPriority, TaskStatus
from taskplanner.tasks.task_query import DeadlineWindow

TODAY = date(2024, 1, 10)
BASE = datetime(2024, 1, 1, 9, 0, 0)


def make_task(
    task_id: int,
    *,
    title: str = "task",
    description: str = "",
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    deadline: date | None = None,
    created_offset_h: int = 0,
    updated_offset_h: int = 0,
) -> Task:
    created = BASE + timedelta(hours=created_offset_h)
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        priority=priority,
        deadline=deadline,
        created_at=created,
        updated_at=created + timedelta(hours=updated_offset_h),
    )


def test_default_order_priority_then_deadline_then_id() -> None:
    tasks = [
        make_task(1, priority=TaskPriority.HIGH, deadline=date(2024, 1, 10)),
        make_task(2, priority=TaskPriority.HIGH, deadline=date(2024, 1, 5)),
        make_task(3, priority=TaskPriority.MEDIUM, deadline=date(2024, 1, 1)),
    ]
    assert [t.id for t in task_query.sort_default(tasks)] == [2, 1, 3]


def test_default_order_puts_missing_deadline_last_and_ties_by_id() -> None:
    tasks = [
        make_task(5, priority=TaskPriority.LOW),
        make_task(4, priority=TaskPriority.LOW),
        make_task(6, priority=TaskPriority.LOW, deadline=date(2030, 1, 1)),
        make_task(7, priority=TaskPriority.HIGH),
    ]
    assert [t.id for t in task_query.sort_default(tasks)] == [7, 6, 4, 5]


def test_filter_by_status_and_priority() -> None:
    tasks = [
        make_task(1, status=TaskStatus.DONE, priority=TaskPriority.LOW),
        make_task(2, status=TaskStatus.TODO, priority=TaskPriority.LOW),
        make_task(3, status=TaskStatus.DONE, priority=TaskPriority.HIGH),
    ]
    assert [t.id for t in task_query.filter_by_status(tasks, TaskStatus.DONE)] == [1, 3]
    assert [t.id for t in task_query.filter_by_priority(tasks, TaskPriority.LOW)] == [1, 2]


@pytest.mark.parametrize(
    ("window", "expected"),
    [
        (DeadlineWindow.TODAY, [2]),
        (DeadlineWindow.THIS_WEEK, [2, 3, 4]),
        (DeadlineWindow.THIS_MONTH, [2, 3, 4, 5]),
        (DeadlineWindow.NO_DEADLINE, [7]),
    ],
)
def test_filter_by_deadline_windows_are_inclusive(window: DeadlineWindow, expected: list[int]) -> None:
    tasks = [
        make_task(1, deadline=TODAY - timedelta(days=1)),
        make_task(2, deadline=TODAY),
        make_task(3, deadline=TODAY + timedelta(days=3)),
        make_task(4, deadline=TODAY + timedelta(days=7)),
        make_task(5, deadline=date(2024, 1, 31)),
        make_task(6, deadline=date(2024, 2, 1)),
        make_task(7, deadline=None),
    ]
    assert [t.id for t in task_query.filter_by_deadline(tasks, window, TODAY)] == expected


def test_this_month_window_handles_short_months() -> None:
    today = date(2024, 2, 20)
    tasks = [make_task(1, deadline=date(2024, 2, 29)), make_task(2, deadline=date(2024, 3, 1))]
    result = task_query.filter_by_deadline(tasks, DeadlineWindow.THIS_MONTH, today)
    assert [t.id for t in result] == [1]


def test_filter_overdue_includes_cancelled_excludes_done() -> None:
    past = TODAY - timedelta(days=1)
    tasks = [
        make_task(1, status=TaskStatus.IN_PROGRESS, deadline=past),
        make_task(2, status=TaskStatus.DONE, deadline=past),
        make_task(3, status=TaskStatus.CANCELLED, deadline=past),
        make_task(4, status=TaskStatus.TODO, deadline=TODAY),
    ]
    assert [t.id for t in task_query.filter_overdue(tasks, TODAY)] == [1, 3]
    assert task_query.count_overdue(tasks, TODAY) == 2


def test_recently_updated_is_descending_and_capped() -> None:
    tasks = [make_task(i, updated_offset_h=i) for i in range(1, 13)]
    result = task_query.recently_updated(tasks)
    assert [t.id for t in result] == [12, 11, 10, 9, 8, 7, 6, 5, 4, 3]
    assert len(task_query.recently_updated(tasks[:3])) == 3


def test_search_is_case_insensitive_over_title_and_description() -> None:
    tasks = [
        make_task(1, title="Купить МОЛОКО"),
        make_task(2, title="Call Bob", description="about the Milk order"),
        make_task(3, title="Other"),
    ]
    assert [t.id for t in task_query.search(tasks, "молоко")] == [1]
    assert [t.id for t in task_query.search(tasks, "MILK")] == [2]
    assert task_query.search(tasks, "absent") == []


def test_search_rejects_empty_query() -> None:
    with pytest.raises(ValidationError):
        task_query.search([make_task(1)], "   ")


def test_statistics_buckets_and_percentages() -> None:
    past = TODAY - timedelta(days=2)
    tasks = [
        make_task(1, status=TaskStatus.DONE, priority=TaskPriority.HIGH, created_offset_h=0),
        make_task(2, status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH, created_offset_h=5, deadline=past),
        make_task(3, status=TaskStatus.TODO, priority=TaskPriority.LOW, created_offset_h=1),
        make_task(4, status=TaskStatus.CANCELLED, priority=TaskPriority.MEDIUM, created_offset_h=3, deadline=past),
        make_task(5, status=TaskStatus.TODO, priority=TaskPriority.LOW, created_offset_h=2),
    ]
    stats = task_query.compute_statistics(tasks, TODAY)

    assert stats.total == 5
    assert (stats.done, stats.in_progress, stats.todo) == (1, 1, 2)
    assert stats.done_percent == pytest.approx(20.0)
    assert stats.todo_percent == pytest.approx(40.0)
    assert stats.overdue == 2
    assert stats.by_priority == {TaskPriority.HIGH: 2, TaskPriority.MEDIUM: 1, TaskPriority.LOW: 2}
    assert [t.id for t in stats.oldest_open] == [3, 5, 4]


def test_statistics_buckets_sum_to_total_without_cancelled() -> None:
    statuses = [TaskStatus.DONE, TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.TODO]
    tasks = [make_task(i, status=s) for i, s in enumerate(statuses, start=1)]
    stats = task_query.compute_statistics(tasks, TODAY)
    assert stats.done + stats.in_progress + stats.todo == stats.total


def test_statistics_on_empty_collection() -> None:
    stats = task_query.compute_statistics([], TODAY)
    assert stats.total == 0
    assert stats.done_percent == 0.0
    assert stats.in_progress_percent == 0.0
    assert stats.todo_percent == 0.0
    assert stats.oldest_open == []


def test_upcoming_groups_by_date_and_skips_closed_tasks() -> None:
    d1 = TODAY + timedelta(days=1)
    d3 = TODAY + timedelta(days=3)
    tasks = [
        make_task(1, deadline=d3),
        make_task(2, deadline=d1, status=TaskStatus.IN_PROGRESS),
        make_task(3, deadline=d3, priority=TaskPriority.HIGH),
        make_task(4, deadline=d1, status=TaskStatus.DONE),
        make_task(5, deadline=d1, status=TaskStatus.CANCELLED),
        make_task(6, deadline=TODAY + timedelta(days=8)),
        make_task(7, deadline=TODAY - timedelta(days=1)),
        make_task(8, deadline=TODAY),
        make_task(9, deadline=None),
    ]
    groups = task_query.upcoming(tasks, TODAY)

    assert list(groups) == [TODAY, d1, d3]
    assert [t.id for t in groups[TODAY]] == [8]
    assert [t.id for t in groups[d1]] == [2]
    assert [t.id for t in groups[d3]] == [1, 3]


def test_queries_do_not_mutate_input() -> None:
    tasks = [make_task(2, priority=TaskPriority.LOW), make_task(1, priority=TaskPriority.HIGH)]
    task_query.sort_default(tasks)
    task_query.recently_updated(tasks)
    assert [t.id for t in tasks] == [2, 1]
