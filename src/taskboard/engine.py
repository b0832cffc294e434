"""Consumer-facing board engine.

Each action applies its in-memory mutation as soon as it starts running,
then waits for the committed snapshot to be persisted. Saves go through a
FIFO lock, so they land in the same order the mutations were committed
and the last save always carries the latest state.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Callable

from taskboard.demo import seed_demo_board
from taskboard.errors import PersistenceFailure
from taskboard.model.entities import Board, Column, Task, utc_now
from taskboard.model.filters import filter_tasks
from taskboard.model.mutations import MutationService
from taskboard.model.ordering import OrderingService
from taskboard.model.store import AggregateStore
from taskboard.model.tree import find_board
from taskboard.storage.base import PersistenceGateway

logger = logging.getLogger(__name__)


class BoardEngine:
    """Boards, the current-board selector, and every mutating action.

    Validation and lookup errors (NotFound, ValidationError) are raised
    before anything changes. A PersistenceFailure means the change is
    already live in memory but was not stored; call ``save`` to retry.
    """

    filter_tasks = staticmethod(filter_tasks)

    def __init__(self, gateway: PersistenceGateway, clock: Callable[[], datetime] = utc_now) -> None:
        self.gateway = gateway
        self.store = AggregateStore()
        self.mutations = MutationService(self.store, clock)
        self.ordering = OrderingService(self.store, clock)
        self._save_lock = asyncio.Lock()
        self._current_id: str | None = None
        self.store.watch(self._on_commit)

    async def open(self, seed_demo: bool = False, today: date | None = None) -> tuple[Board, ...]:
        """Load boards from the gateway, seeding the demo board if empty."""
        boards = await asyncio.to_thread(self.gateway.load)
        self.store.replace(lambda _: boards)
        logger.debug("loaded %d boards", len(boards))
        if not boards and seed_demo:
            self._current_id = seed_demo_board(self.mutations, today)
            await self._persist()
        return self.boards

    def _on_commit(self, old: tuple[Board, ...], new: tuple[Board, ...]) -> None:
        logger.debug("committed %d boards", len(new))
        if self._current_id is not None and all(b.id != self._current_id for b in new):
            self._current_id = None

    # --- reads ---

    @property
    def boards(self) -> tuple[Board, ...]:
        return self.store.get_all()

    @property
    def current_board(self) -> Board | None:
        """The selected board, or None if nothing is selected."""
        if self._current_id is None:
            return None
        for board in self.store.get_all():
            if board.id == self._current_id:
                return board
        return None

    def select_board(self, board_id: str | None) -> Board | None:
        """Select a board by id, or clear the selection with None."""
        if board_id is None:
            self._current_id = None
            return None
        board = find_board(self.store.get_all(), board_id)
        self._current_id = board.id
        return board

    # --- persistence ---

    async def _persist(self) -> None:
        snapshot = self.store.get_all()
        async with self._save_lock:
            try:
                await asyncio.to_thread(self.gateway.save, snapshot)
            except PersistenceFailure:
                logger.warning("keeping unsaved state in memory (%d boards)", len(snapshot))
                raise
        logger.debug("saved %d boards", len(snapshot))

    async def save(self) -> None:
        """Persist the current state, e.g. to retry after a PersistenceFailure."""
        await self._persist()

    # --- boards ---

    async def create_board(self, title: str, description: str = "") -> Board:
        board = self.mutations.create_board(title, description)
        await self._persist()
        return board

    async def update_board(self, board_id: str, **fields) -> Board:
        board = self.mutations.update_board(board_id, **fields)
        await self._persist()
        return board

    async def delete_board(self, board_id: str) -> None:
        self.mutations.delete_board(board_id)
        await self._persist()

    # --- columns ---

    async def create_column(self, board_id: str, title: str, color: str | None = None) -> Column:
        column = self.mutations.create_column(board_id, title, color)
        await self._persist()
        return column

    async def update_column(self, board_id: str, column_id: str, **fields) -> Column:
        column = self.mutations.update_column(board_id, column_id, **fields)
        await self._persist()
        return column

    async def delete_column(self, board_id: str, column_id: str) -> None:
        self.mutations.delete_column(board_id, column_id)
        await self._persist()

    async def move_column(self, board_id: str, column_id: str, target_index: int) -> Column:
        column = self.ordering.move_column(board_id, column_id, target_index)
        await self._persist()
        return column

    # --- tasks ---

    async def create_task(self, board_id: str, column_id: str, title: str, **fields) -> Task:
        task = self.mutations.create_task(board_id, column_id, title, **fields)
        await self._persist()
        return task

    async def update_task(self, board_id: str, column_id: str, task_id: str, **fields) -> Task:
        task = self.mutations.update_task(board_id, column_id, task_id, **fields)
        await self._persist()
        return task

    async def delete_task(self, board_id: str, column_id: str, task_id: str) -> None:
        self.mutations.delete_task(board_id, column_id, task_id)
        await self._persist()

    async def move_task(
        self,
        board_id: str,
        task_id: str,
        from_column_id: str,
        to_column_id: str,
        target_index: int,
    ) -> Task:
        task = self.ordering.move_task(board_id, task_id, from_column_id, to_column_id, target_index)
        await self._persist()
        return task

    async def reorder_task(self, board_id: str, column_id: str, task_id: str, target_index: int) -> Task:
        task = self.ordering.reorder_task(board_id, column_id, task_id, target_index)
        await self._persist()
        return task
