"""Structural helpers over the board collection.

Lookups raise NotFound; the rebuild helpers return new values and never
modify their arguments.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, TypeVar

from taskboard.errors import NotFound
from taskboard.model.entities import Board, Column, Task

Ordered = TypeVar("Ordered", Column, Task)


def find_board(boards: Iterable[Board], board_id: str) -> Board:
    for board in boards:
        if board.id == board_id:
            return board
    raise NotFound("board", board_id)


def find_column(board: Board, column_id: str) -> Column:
    col = board.column(column_id)
    if col is None:
        raise NotFound("column", column_id)
    return col


def find_task(column: Column, task_id: str) -> Task:
    task = column.task(task_id)
    if task is None:
        raise NotFound("task", task_id)
    return task


def renumber(items: Iterable[Ordered]) -> tuple[Ordered, ...]:
    """Set ``order`` to each item's position, keeping relative order."""
    result = []
    for i, item in enumerate(items):
        if item.order != i:
            item = replace(item, order=i)
        result.append(item)
    return tuple(result)


def clamp(index: int, length: int) -> int:
    """Clamp an insertion index to [0, length]."""
    return max(0, min(index, length))


def with_board(boards: tuple[Board, ...], board: Board) -> tuple[Board, ...]:
    """Swap in a board by id."""
    return tuple(board if b.id == board.id else b for b in boards)


def with_columns(board: Board, *columns: Column) -> Board:
    """Swap in columns by id."""
    by_id = {c.id: c for c in columns}
    return replace(board, columns=tuple(by_id.get(c.id, c) for c in board.columns))


def touch(
    board: Board,
    now: datetime,
    column_ids: Iterable[str] = (),
    task_ids: Iterable[str] = (),
) -> Board:
    """Bump updated_at on the given tasks, their columns, and the board.

    A column holding a touched task is always touched too, so callers
    only name the entities they changed.
    """
    column_ids = set(column_ids)
    task_ids = set(task_ids)
    columns = []
    for col in board.columns:
        hit = [t for t in col.tasks if t.id in task_ids]
        if hit:
            tasks = tuple(replace(t, updated_at=now) if t.id in task_ids else t for t in col.tasks)
            col = replace(col, tasks=tasks, updated_at=now)
        elif col.id in column_ids:
            col = replace(col, updated_at=now)
        columns.append(col)
    return replace(board, columns=tuple(columns), updated_at=now)


def iter_ids(boards: Iterable[Board]) -> Iterable[str]:
    """Yield every board, column and task id."""
    for board in boards:
        yield board.id
        for col in board.columns:
            yield col.id
            for task in col.tasks:
                yield task.id


def check_invariants(boards: Iterable[Board]) -> list[str]:
    """Return a list of structural problems, empty when consistent."""
    boards = tuple(boards)
    problems = []
    seen: set[str] = set()
    for id_ in iter_ids(boards):
        if id_ in seen:
            problems.append(f"duplicate id {id_}")
        seen.add(id_)
    for board in boards:
        orders = [c.order for c in board.columns]
        if orders != list(range(len(orders))):
            problems.append(f"board {board.id}: column orders {orders}")
        for col in board.columns:
            if col.board_id != board.id:
                problems.append(f"column {col.id}: board_id {col.board_id} != {board.id}")
            orders = [t.order for t in col.tasks]
            if orders != list(range(len(orders))):
                problems.append(f"column {col.id}: task orders {orders}")
            for task in col.tasks:
                if task.column_id != col.id:
                    problems.append(f"task {task.id}: column_id {task.column_id} != {col.id}")
    return problems
