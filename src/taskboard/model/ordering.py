"""Task and column moves with dense renumbering."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable

from taskboard.model.entities import Column, Task, utc_now
from taskboard.model.store import AggregateStore, Boards
from taskboard.model.tree import (
    clamp,
    find_board,
    find_column,
    find_task,
    renumber,
    touch,
    with_board,
    with_columns,
)


class OrderingService:
    """Moves tasks between and within columns, and columns within a board.

    Out-of-range target indexes are clamped, never rejected: negative
    goes to the front, past the end goes to the back.
    """

    def __init__(self, store: AggregateStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._clock = clock

    def move_task(
        self,
        board_id: str,
        task_id: str,
        from_column_id: str,
        to_column_id: str,
        target_index: int,
    ) -> Task:
        """Move a task to target_index in another column."""
        if from_column_id == to_column_id:
            return self.reorder_task(board_id, from_column_id, task_id, target_index)

        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            source = find_column(board, from_column_id)
            target = find_column(board, to_column_id)
            task = find_task(source, task_id)

            remaining = renumber(t for t in source.tasks if t.id != task_id)
            tasks = list(target.tasks)
            tasks.insert(clamp(target_index, len(tasks)), replace(task, column_id=target.id))

            board = with_columns(
                board,
                replace(source, tasks=remaining),
                replace(target, tasks=renumber(tasks)),
            )
            board = touch(board, now, column_ids=[source.id], task_ids=[task_id])
            return with_board(boards, board)

        board = find_board(self._store.replace(transform), board_id)
        return find_task(find_column(board, to_column_id), task_id)

    def reorder_task(self, board_id: str, column_id: str, task_id: str, target_index: int) -> Task:
        """Move a task to target_index within its own column."""
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = find_column(board, column_id)
            task = find_task(col, task_id)

            tasks = [t for t in col.tasks if t.id != task_id]
            tasks.insert(clamp(target_index, len(tasks)), task)

            board = with_columns(board, replace(col, tasks=renumber(tasks)))
            return with_board(boards, touch(board, now, task_ids=[task_id]))

        board = find_board(self._store.replace(transform), board_id)
        return find_task(find_column(board, column_id), task_id)

    def move_column(self, board_id: str, column_id: str, target_index: int) -> Column:
        """Move a column to target_index within its board."""
        now = self._clock()

        def transform(boards: Boards) -> Boards:
            board = find_board(boards, board_id)
            col = find_column(board, column_id)

            columns = [c for c in board.columns if c.id != column_id]
            columns.insert(clamp(target_index, len(columns)), col)

            board = replace(board, columns=renumber(columns))
            return with_board(boards, touch(board, now, column_ids=[column_id]))

        board = find_board(self._store.replace(transform), board_id)
        return find_column(board, column_id)
