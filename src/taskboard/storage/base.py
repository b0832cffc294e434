"""Persistence gateway contract and in-process gateways."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Sequence

from taskboard.model.entities import Board

logger = logging.getLogger(__name__)


class PersistenceGateway(ABC):
    """Loads and saves the whole board collection.

    ``load`` returns an empty list when nothing has been stored yet.
    ``save`` raises PersistenceFailure when the state could not be stored.
    """

    @abstractmethod
    def load(self) -> list[Board]:
        raise NotImplementedError

    @abstractmethod
    def save(self, boards: Sequence[Board]) -> None:
        raise NotImplementedError


class MemoryGateway(PersistenceGateway):
    """Keeps the last saved collection in memory."""

    def __init__(self, boards: Sequence[Board] = ()) -> None:
        self.boards: tuple[Board, ...] = tuple(boards)
        self.saves = 0

    def load(self) -> list[Board]:
        return list(self.boards)

    def save(self, boards: Sequence[Board]) -> None:
        self.boards = tuple(boards)
        self.saves += 1


class DelayedGateway(PersistenceGateway):
    """Adds a fixed write latency in front of another gateway."""

    def __init__(self, inner: PersistenceGateway, delay: float) -> None:
        self.inner = inner
        self.delay = delay

    def load(self) -> list[Board]:
        return self.inner.load()

    def save(self, boards: Sequence[Board]) -> None:
        if self.delay > 0:
            logger.debug("delaying save by %.3fs", self.delay)
            time.sleep(self.delay)
        self.inner.save(boards)
