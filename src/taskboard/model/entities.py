"""Board, column and task values.

Entities are frozen: every change produces a new value, and the whole
collection is swapped in one step by the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

PRIORITIES = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Task:
    """A task, positioned within its column by ``order``."""

    id: str
    column_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    assignee: str = ""
    priority: str = DEFAULT_PRIORITY
    due_date: date | None = None
    order: int = 0


@dataclass(frozen=True)
class Column:
    """A column owning an ordered tuple of tasks."""

    id: str
    board_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    color: str = ""
    order: int = 0
    tasks: tuple[Task, ...] = ()

    @property
    def task_ids(self) -> tuple[str, ...]:
        return tuple(t.id for t in self.tasks)

    def task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None


@dataclass(frozen=True)
class Board:
    """A board owning an ordered tuple of columns."""

    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    columns: tuple[Column, ...] = ()

    @property
    def tasks(self) -> tuple[Task, ...]:
        """All tasks, column by column."""
        return tuple(t for col in self.columns for t in col.tasks)

    def column(self, column_id: str) -> Column | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def find_task_column(self, task_id: str) -> Column | None:
        """Find the column holding a task."""
        for col in self.columns:
            if task_id in col.task_ids:
                return col
        return None
