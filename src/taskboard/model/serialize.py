"""Convert the board collection to and from a JSON-ready tree.

Loading is forgiving: documents written before entities carried an
explicit ``order`` (or parent ids) are accepted, with positions taken
from list order and every sibling list renumbered densely.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Iterable

from taskboard.errors import ValidationError
from taskboard.model.entities import DEFAULT_PRIORITY, PRIORITIES, Board, Column, Task
from taskboard.model.mutations import parse_due_date
from taskboard.model.tree import check_invariants, renumber

FORMAT_VERSION = 1


def _iso(value: datetime) -> str:
    return value.isoformat()


def _parse_datetime(raw: Any) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    text = str(raw)
    # fromisoformat only accepts a trailing Z from 3.11 on
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp '{raw}'.") from None


def _by_stored_order(items: list[dict]) -> list[dict]:
    """Sort raw dicts by their stored order, falling back to list position."""
    keyed = [(item.get("order", i), i, item) for i, item in enumerate(items)]
    keyed.sort(key=lambda k: (k[0] if isinstance(k[0], int) else k[1], k[1]))
    return [item for _, _, item in keyed]


# --- to dict ---


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "columnId": task.column_id,
        "title": task.title,
        "description": task.description,
        "assignee": task.assignee,
        "priority": task.priority,
        "dueDate": task.due_date.isoformat() if task.due_date else "",
        "order": task.order,
        "createdAt": _iso(task.created_at),
        "updatedAt": _iso(task.updated_at),
    }


def column_to_dict(column: Column) -> dict:
    return {
        "id": column.id,
        "boardId": column.board_id,
        "title": column.title,
        "color": column.color,
        "order": column.order,
        "tasks": [task_to_dict(t) for t in column.tasks],
        "createdAt": _iso(column.created_at),
        "updatedAt": _iso(column.updated_at),
    }


def board_to_dict(board: Board) -> dict:
    return {
        "id": board.id,
        "title": board.title,
        "description": board.description,
        "columns": [column_to_dict(c) for c in board.columns],
        "createdAt": _iso(board.created_at),
        "updatedAt": _iso(board.updated_at),
    }


def boards_to_dict(boards: Iterable[Board]) -> dict:
    return {"version": FORMAT_VERSION, "boards": [board_to_dict(b) for b in boards]}


def dumps(boards: Iterable[Board]) -> str:
    """Serialize boards to pretty-printed JSON text."""
    return json.dumps(boards_to_dict(boards), indent=2) + "\n"


# --- from dict ---


def task_from_dict(data: dict, column_id: str) -> Task:
    priority = data.get("priority") or DEFAULT_PRIORITY
    if priority not in PRIORITIES:
        raise ValidationError(f"Invalid priority '{priority}' on task {data.get('id')}.")
    return Task(
        id=str(data["id"]),
        column_id=column_id,
        title=str(data.get("title", "")),
        description=str(data.get("description") or ""),
        assignee=str(data.get("assignee") or data.get("createdBy") or ""),
        priority=priority,
        due_date=parse_due_date(data.get("dueDate")),
        order=0,
        created_at=_parse_datetime(data.get("createdAt")),
        updated_at=_parse_datetime(data.get("updatedAt")),
    )


def column_from_dict(data: dict, board_id: str) -> Column:
    column_id = str(data["id"])
    tasks = [task_from_dict(t, column_id) for t in _by_stored_order(data.get("tasks") or [])]
    return Column(
        id=column_id,
        board_id=board_id,
        title=str(data.get("title", "")),
        color=str(data.get("color") or ""),
        order=0,
        tasks=renumber(tasks),
        created_at=_parse_datetime(data.get("createdAt")),
        updated_at=_parse_datetime(data.get("updatedAt")),
    )


def board_from_dict(data: dict) -> Board:
    board_id = str(data["id"])
    columns = [column_from_dict(c, board_id) for c in _by_stored_order(data.get("columns") or [])]
    return Board(
        id=board_id,
        title=str(data.get("title", "")),
        description=str(data.get("description") or ""),
        columns=renumber(columns),
        created_at=_parse_datetime(data.get("createdAt")),
        updated_at=_parse_datetime(data.get("updatedAt")),
    )


def boards_from_dict(data: dict | list) -> list[Board]:
    """Build boards from a document; a bare list of boards is accepted too.

    Raises ValidationError if an id appears more than once.
    """
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("boards") or []
    else:
        raise ValidationError("Board document must be an object or a list.")
    try:
        boards = [board_from_dict(b) for b in items]
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Malformed board document: {e}") from e
    problems = check_invariants(boards)
    if problems:
        raise ValidationError(f"Malformed board document: {'; '.join(problems)}")
    return boards


def loads(text: str) -> list[Board]:
    """Parse JSON text into boards. Blank text is an empty collection."""
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Board document is not valid JSON: {e}") from e
    return boards_from_dict(data)
