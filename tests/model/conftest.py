"""Shared test helpers for model tests."""

import pytest

from taskboard.model.mutations import MutationService
from taskboard.model.ordering import OrderingService
from taskboard.model.store import AggregateStore


def _build_board(mutations, layout, title="Board", **task_fields):
    """Create a board from {column title: [task titles]}.

    Returns (board_id, ids) where ids maps every column and task title to its id.
    """
    board = mutations.create_board(title)
    ids = {}
    for column_title, task_titles in layout.items():
        col = mutations.create_column(board.id, column_title)
        ids[column_title] = col.id
        for task_title in task_titles:
            ids[task_title] = mutations.create_task(board.id, col.id, task_title, **task_fields).id
    return board.id, ids


def _titles(column):
    return [t.title for t in column.tasks]


def _orders(items):
    return [item.order for item in items]


@pytest.fixture
def store():
    return AggregateStore()


@pytest.fixture
def mutations(store, clock):
    return MutationService(store, clock)


@pytest.fixture
def ordering(store, clock):
    return OrderingService(store, clock)
