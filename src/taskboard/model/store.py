"""The canonical in-memory board collection."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from taskboard.model.entities import Board
from taskboard.model.tree import find_board, iter_ids

logger = logging.getLogger(__name__)

Boards = tuple[Board, ...]
Transform = Callable[[Boards], Iterable[Board]]
Callback = Callable[[Boards, Boards], None]


class AggregateStore:
    """Holds the board collection and commits whole-collection swaps.

    ``replace`` runs read, transform and commit under one lock, so two
    writers can never both build on the same stale collection. Readers
    get immutable snapshots and never see a half-applied change.
    """

    def __init__(self, boards: Iterable[Board] = ()) -> None:
        self._boards: Boards = tuple(boards)
        self._lock = threading.RLock()
        self._watchers: list[Callback] = []
        self._known_ids: set[str] = set(iter_ids(self._boards))

    def get_all(self) -> Boards:
        """Return the current collection."""
        return self._boards

    def get_board(self, board_id: str) -> Board:
        """Return a board by id. Raises NotFound."""
        return find_board(self._boards, board_id)

    def known_ids(self) -> frozenset[str]:
        """Every id this store has ever held, including deleted ones."""
        with self._lock:
            return frozenset(self._known_ids)

    def replace(self, transform: Transform) -> Boards:
        """Apply transform to the current collection and commit the result.

        If transform raises, nothing is committed and the exception
        propagates. Watchers fire after the commit, outside the lock; a
        watcher that raises is logged and does not fail the commit.
        """
        with self._lock:
            old = self._boards
            new = tuple(transform(old))
            self._boards = new
            self._known_ids.update(iter_ids(new))
            watchers = list(self._watchers)
        for cb in watchers:
            try:
                cb(old, new)
            except Exception:
                logger.exception("board watcher %r failed", cb)
        return new

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Call callback(old, new) after each commit. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)
