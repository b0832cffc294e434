"""Create, update and delete operations for boards, columns and tasks.

Every operation runs its lookups and validation inside the store's
``replace`` transform, so a NotFound or ValidationError leaves the
collection untouched.
"""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable

from taskboard.errors import ValidationError
from taskboard.ids import new_id
from taskboard.model.entities import DEFAULT_PRIORITY, PRIORITIES, Board, Column, Task, utc_now
from taskboard.model.store import AggregateStore, Boards
from taskboard.model.tree import (
    find_board,
    find_column,
    find_task,
    renumber,
    touch,
    with_board,
    with_columns,
)
from taskboard.palette import color_for_title

BOARD_FIELDS = ("title", "description")
COLUMN_FIELDS = ("title", "color")
TASK_FIELDS = ("title", "description", "assignee", "priority", "due_date")

# YYYY-MM-DD, optionally followed by a time part
DUE_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}(T.*)?")


def require_title(title: Any) -> str:
    """Return the stripped title. Raises ValidationError if blank."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title must not be empty.")
    return title.strip()


def check_priority(value: Any) -> str:
    """Normalize a priority name, defaulting to medium when unset."""
    if value is None or value == "":
        return DEFAULT_PRIORITY
    priority = str(value).strip().lower()
    if priority not in PRIORITIES:
        raise ValidationError(f"Invalid priority '{value}'. Expected one of: {', '.join(PRIORITIES)}.")
    return priority


def parse_due_date(value: Any) -> date | None:
    """Coerce a due date from a date, datetime or ISO string.

    Strings must be an ISO date, optionally followed by "T" and a time,
    which is dropped. "" and None clear the due date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and DUE_DATE_RE.fullmatch(value.strip()):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ValidationError(f"Invalid due date '{value}'. Expected YYYY-MM-DD.")


def clean_fields(kind: str, fields: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    """Validate and coerce a partial field update."""
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise ValidationError(f"Cannot set {', '.join(unknown)} on a {kind}.")
    cleaned = {}
    for key, value in fields.items():
        if key == "title":
            value = require_title(value)
        elif key == "priority":
            value = check_priority(value)
        elif key == "due_date":
            value = parse_due_date(value)
        else:
            value = "" if value is None else str(value)
        cleaned[key] = value
    return cleaned


class MutationService:
    """Entity lifecycle operations over an AggregateStore."""

    def __init__(self, store: AggregateStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._clock = clock

    def _mint(self) -> str:
        return new_id(self._store.known_ids())

    # --- boards ---

    def create_board(self, title: str, description: str = "") -> Board:
        title = require_title(title)
        now = self._clock()
        board = Board(
            id=self._mint(),
            title=title,
            description=description or "",
            created_at=now,
            updated_at=now,
        )
        self._store.replace(lambda boards: boards + (board,))
        return board

    def update_board(self, board_id: str, **fields: Any) -> Board:
        changes = clean_fields("board", fields, BOARD_FIELDS)
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            return with_board(boards, replace(board, **changes, updated_at=now))

        return find_board(self._store.replace(transform), board_id)

    def delete_board(self, board_id: str) -> None:
        def transform(boards: Boards) -> Boards:
            find_board(boards, board_id)
            return tuple(b for b in boards if b.id != board_id)

        self._store.replace(transform)

    # --- columns ---

    def create_column(self, board_id: str, title: str, color: str | None = None) -> Column:
        title = require_title(title)
        column_id = self._mint()
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = Column(
                id=column_id,
                board_id=board.id,
                title=title,
                color=color or color_for_title(title),
                order=len(board.columns),
                created_at=now,
                updated_at=now,
            )
            board = replace(board, columns=board.columns + (col,), updated_at=now)
            return with_board(boards, board)

        board = find_board(self._store.replace(transform), board_id)
        return find_column(board, column_id)

    def update_column(self, board_id: str, column_id: str, **fields: Any) -> Column:
        changes = clean_fields("column", fields, COLUMN_FIELDS)
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = replace(find_column(board, column_id), **changes)
            board = touch(with_columns(board, col), now, column_ids=[column_id])
            return with_board(boards, board)

        board = find_board(self._store.replace(transform), board_id)
        return find_column(board, column_id)

    def delete_column(self, board_id: str, column_id: str) -> None:
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            find_column(board, column_id)
            remaining = renumber(c for c in board.columns if c.id != column_id)
            return with_board(boards, replace(board, columns=remaining, updated_at=now))

        self._store.replace(transform)

    # --- tasks ---

    def create_task(self, board_id: str, column_id: str, title: str, **fields: Any) -> Task:
        title = require_title(title)
        changes = clean_fields("task", fields, TASK_FIELDS[1:])
        changes.setdefault("priority", DEFAULT_PRIORITY)
        task_id = self._mint()
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = find_column(board, column_id)
            task = Task(
                id=task_id,
                column_id=col.id,
                title=title,
                order=len(col.tasks),
                created_at=now,
                updated_at=now,
                **changes,
            )
            board = with_columns(board, replace(col, tasks=col.tasks + (task,)))
            return with_board(boards, touch(board, now, task_ids=[task_id]))

        board = find_board(self._store.replace(transform), board_id)
        return find_task(find_column(board, column_id), task_id)

    def update_task(self, board_id: str, column_id: str, task_id: str, **fields: Any) -> Task:
        changes = clean_fields("task", fields, TASK_FIELDS)
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = find_column(board, column_id)
            task = replace(find_task(col, task_id), **changes)
            tasks = tuple(task if t.id == task_id else t for t in col.tasks)
            board = with_columns(board, replace(col, tasks=tasks))
            return with_board(boards, touch(board, now, task_ids=[task_id]))

        board = find_board(self._store.replace(transform), board_id)
        return find_task(find_column(board, column_id), task_id)

    def delete_task(self, board_id: str, column_id: str, task_id: str) -> None:
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = find_column(board, column_id)
            find_task(col, task_id)
            remaining = renumber(t for t in col.tasks if t.id != task_id)
            board = with_columns(board, replace(col, tasks=remaining))
            return with_board(boards, touch(board, now, column_ids=[column_id]))

        self._store.replace(transform)
