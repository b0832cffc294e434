"""Tests for argument parsing and dispatch."""

import pytest

from taskboard.__main__ import main
from taskboard.cli import build_parser
from taskboard.cli.board import board_list, board_show
from taskboard.cli.column import column_move
from taskboard.cli.task import task_list, task_move


def test_noun_without_verb_lists():
    parser = build_parser()
    assert parser.parse_args(["board"]).func is board_list
    args = parser.parse_args(["task"])
    assert args.func is task_list
    assert args.sort == "order"
    assert args.due is None


def test_board_show_optional_id():
    args = build_parser().parse_args(["board", "show"])
    assert args.func is board_show
    assert args.id is None


def test_task_move_flags():
    args = build_parser().parse_args(["task", "move", "abc", "--column", "Done", "--position", "2", "--json"])
    assert args.func is task_move
    assert args.column == "Done"
    assert args.position == 2
    assert args.json is True


def test_column_move_requires_position():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["column", "move", "Done"])
    args = build_parser().parse_args(["column", "move", "Done", "--position", "1", "--board", "Main"])
    assert args.func is column_move
    assert args.board == "Main"


def test_task_list_rejects_unknown_bucket():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["task", "list", "--due", "someday"])


def test_main_without_command_prints_help(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["taskboard"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    assert "usage: taskboard" in capsys.readouterr().out


def test_main_runs_command(initialized_repo, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["taskboard", "board", "list", "--repo", str(initialized_repo)])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 0
    assert "Test Board" in capsys.readouterr().out
