"""Tests for task and column moves."""

import pytest

from taskboard.errors import NotFound
from taskboard.model.tree import check_invariants

from .conftest import _build_board, _orders, _titles

LAYOUT = {"To Do": ["T0", "T1", "T2"], "Done": ["T3"]}


@pytest.fixture
def board(mutations):
    return _build_board(mutations, LAYOUT)


def _column(store, board_id, column_id):
    return store.get_board(board_id).column(column_id)


# --- reorder_task ---


def test_reorder_to_front(ordering, store, board):
    board_id, ids = board
    ordering.reorder_task(board_id, ids["To Do"], ids["T2"], 0)
    col = _column(store, board_id, ids["To Do"])
    assert _titles(col) == ["T2", "T0", "T1"]
    assert _orders(col.tasks) == [0, 1, 2]


def test_reorder_to_end(ordering, store, board):
    board_id, ids = board
    ordering.reorder_task(board_id, ids["To Do"], ids["T0"], 2)
    assert _titles(_column(store, board_id, ids["To Do"])) == ["T1", "T2", "T0"]


def test_reorder_same_position_keeps_order(ordering, store, board):
    board_id, ids = board
    ordering.reorder_task(board_id, ids["To Do"], ids["T1"], 1)
    assert _titles(_column(store, board_id, ids["To Do"])) == ["T0", "T1", "T2"]


@pytest.mark.parametrize(
    "index, expected",
    [
        (-5, ["T1", "T0", "T2"]),
        (99, ["T0", "T2", "T1"]),
    ],
)
def test_reorder_clamps(ordering, store, board, index, expected):
    board_id, ids = board
    ordering.reorder_task(board_id, ids["To Do"], ids["T1"], index)
    col = _column(store, board_id, ids["To Do"])
    assert _titles(col) == expected
    assert _orders(col.tasks) == [0, 1, 2]


def test_reorder_touches_task_column_board(ordering, store, board):
    board_id, ids = board
    task = ordering.reorder_task(board_id, ids["To Do"], ids["T2"], 0)
    after = store.get_board(board_id)
    assert after.updated_at == task.updated_at
    assert after.column(ids["To Do"]).updated_at == task.updated_at


def test_reorder_missing_task(ordering, store, board):
    board_id, ids = board
    before = store.get_all()
    with pytest.raises(NotFound):
        ordering.reorder_task(board_id, ids["To Do"], ids["T3"], 0)
    assert store.get_all() is before


# --- move_task ---


def test_move_between_columns(ordering, store, board):
    board_id, ids = board
    task = ordering.move_task(board_id, ids["T1"], ids["To Do"], ids["Done"], 0)
    source = _column(store, board_id, ids["To Do"])
    target = _column(store, board_id, ids["Done"])

    assert _titles(source) == ["T0", "T2"]
    assert _orders(source.tasks) == [0, 1]
    assert _titles(target) == ["T1", "T3"]
    assert _orders(target.tasks) == [0, 1]
    assert task.column_id == ids["Done"]
    assert task.order == 0


def test_move_to_end_of_target(ordering, store, board):
    board_id, ids = board
    ordering.move_task(board_id, ids["T0"], ids["To Do"], ids["Done"], 99)
    assert _titles(_column(store, board_id, ids["Done"])) == ["T3", "T0"]


def test_move_negative_index_goes_to_front(ordering, store, board):
    board_id, ids = board
    ordering.move_task(board_id, ids["T0"], ids["To Do"], ids["Done"], -1)
    assert _titles(_column(store, board_id, ids["Done"])) == ["T0", "T3"]


def test_move_into_empty_column(ordering, mutations, store, board):
    board_id, ids = board
    empty = mutations.create_column(board_id, "Review")
    task = ordering.move_task(board_id, ids["T3"], ids["Done"], empty.id, 3)
    assert task.order == 0
    assert _column(store, board_id, ids["Done"]).tasks == ()
    assert _titles(_column(store, board_id, empty.id)) == ["T3"]


def test_move_conserves_task_count(ordering, store, board):
    board_id, ids = board
    ordering.move_task(board_id, ids["T0"], ids["To Do"], ids["Done"], 1)
    ordering.move_task(board_id, ids["T3"], ids["Done"], ids["To Do"], 0)
    ordering.move_task(board_id, ids["T2"], ids["To Do"], ids["Done"], 0)
    board_after = store.get_board(board_id)
    assert sorted(t.title for t in board_after.tasks) == ["T0", "T1", "T2", "T3"]
    assert check_invariants(store.get_all()) == []


def test_move_same_column_is_reorder(ordering, store, board):
    board_id, ids = board
    ordering.move_task(board_id, ids["T2"], ids["To Do"], ids["To Do"], 0)
    assert _titles(_column(store, board_id, ids["To Do"])) == ["T2", "T0", "T1"]


def test_move_touches_both_columns(ordering, store, board):
    board_id, ids = board
    task = ordering.move_task(board_id, ids["T1"], ids["To Do"], ids["Done"], 0)
    after = store.get_board(board_id)
    assert after.column(ids["To Do"]).updated_at == task.updated_at
    assert after.column(ids["Done"]).updated_at == task.updated_at
    assert after.updated_at == task.updated_at


def test_move_keeps_task_fields(ordering, mutations, store, board):
    board_id, ids = board
    mutations.update_task(board_id, ids["To Do"], ids["T0"], priority="high", assignee="kim")
    task = ordering.move_task(board_id, ids["T0"], ids["To Do"], ids["Done"], 0)
    assert task.priority == "high"
    assert task.assignee == "kim"
    assert task.title == "T0"


def test_move_task_not_in_source(ordering, store, board):
    board_id, ids = board
    before = store.get_all()
    with pytest.raises(NotFound, match=f"Task '{ids['T3']}' not found"):
        ordering.move_task(board_id, ids["T3"], ids["To Do"], ids["Done"], 0)
    assert store.get_all() is before


def test_move_missing_target_column(ordering, store, board):
    board_id, ids = board
    before = store.get_all()
    with pytest.raises(NotFound, match="Column 'zzz' not found"):
        ordering.move_task(board_id, ids["T0"], ids["To Do"], "zzz", 0)
    assert store.get_all() is before


def test_move_missing_board(ordering, board):
    _, ids = board
    with pytest.raises(NotFound, match="Board 'zzz' not found"):
        ordering.move_task("zzz", ids["T0"], ids["To Do"], ids["Done"], 0)


# --- move_column ---


def test_move_column(ordering, mutations, store, board):
    board_id, ids = board
    review = mutations.create_column(board_id, "Review")
    ordering.move_column(board_id, review.id, 0)
    columns = store.get_board(board_id).columns
    assert [c.title for c in columns] == ["Review", "To Do", "Done"]
    assert _orders(columns) == [0, 1, 2]


def test_move_column_clamps(ordering, store, board):
    board_id, ids = board
    col = ordering.move_column(board_id, ids["To Do"], 10)
    assert col.order == 1
    assert [c.title for c in store.get_board(board_id).columns] == ["Done", "To Do"]


def test_move_column_keeps_tasks(ordering, store, board):
    board_id, ids = board
    col = ordering.move_column(board_id, ids["Done"], 0)
    assert _titles(col) == ["T3"]
    assert check_invariants(store.get_all()) == []
