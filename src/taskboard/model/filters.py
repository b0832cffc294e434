"""Task filtering for display.

Filtering is a pure, stable predicate filter: it never reorders and
never raises for a non-matching criterion, it just returns fewer tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from taskboard.model.entities import PRIORITIES, Board, Task

DUE_BUCKETS = ("all", "overdue", "today", "week", "month")

PRIORITY_RANK = {p: i for i, p in enumerate(PRIORITIES)}


@dataclass(frozen=True)
class FilterCriteria:
    """User-chosen filter settings. Empty values mean "don't filter"."""

    search: str = ""
    priority: str = ""
    due: str = "all"

    @property
    def is_active(self) -> bool:
        return bool(self.search) or self.priority not in ("", "all") or self.due not in ("", "all")


def _matches_search(task: Task, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def _matches_priority(task: Task, priority: str) -> bool:
    if priority in ("", "all"):
        return True
    return task.priority == priority


def _matches_due(task: Task, bucket: str, today: date) -> bool:
    if bucket in ("", "all"):
        return True
    due = task.due_date
    if due is None:
        return False
    if bucket == "overdue":
        return due < today
    if bucket == "today":
        return due == today
    if bucket == "week":
        return today <= due <= today + timedelta(days=7)
    if bucket == "month":
        return today <= due <= today + timedelta(days=30)
    return False


def matches(task: Task, criteria: FilterCriteria, today: date | None = None) -> bool:
    """True if task passes every criterion."""
    today = today or date.today()
    return (
        _matches_search(task, criteria.search)
        and _matches_priority(task, criteria.priority)
        and _matches_due(task, criteria.due, today)
    )


def filter_tasks(tasks: Iterable[Task], criteria: FilterCriteria, today: date | None = None) -> list[Task]:
    """Return tasks matching criteria, in their input order.

    ``today`` defaults to the local calendar date.
    """
    today = today or date.today()
    return [t for t in tasks if matches(t, criteria, today)]


def sort_for_display(tasks: Iterable[Task]) -> list[Task]:
    """Sort high before medium before low, then by column order."""
    return sorted(tasks, key=lambda t: (PRIORITY_RANK.get(t.priority, len(PRIORITIES)), t.order))


def priority_stats(tasks: Iterable[Task]) -> dict[str, int]:
    """Count tasks per priority."""
    counts = {p: 0 for p in PRIORITIES}
    for task in tasks:
        counts[task.priority] = counts.get(task.priority, 0) + 1
    return counts


def board_stats(board: Board) -> dict[str, int]:
    """Column and task counts for a board summary."""
    return {
        "columns": len(board.columns),
        "tasks": sum(len(c.tasks) for c in board.columns),
    }
