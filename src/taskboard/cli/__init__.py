"""CLI argument parser and dispatch for taskboard."""

import argparse

from taskboard.cli.board import board_add, board_list, board_rm, board_set, board_show, board_use
from taskboard.cli.column import column_add, column_list, column_move, column_rm, column_set
from taskboard.cli.init import init_board
from taskboard.cli.task import task_add, task_edit, task_get, task_list, task_move, task_rm, task_set
from taskboard.config import STORAGE_BACKENDS
from taskboard.model.entities import PRIORITIES
from taskboard.model.filters import DUE_BUCKETS


def _add_task_field_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--description", help="Task description")
    parser.add_argument("--assignee", help="Person responsible")
    parser.add_argument("--priority", choices=PRIORITIES, help="Task priority (default: medium)")
    parser.add_argument("--due", help="Due date, YYYY-MM-DD ('' clears it)")


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to board repository (default: .)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    on_board = argparse.ArgumentParser(add_help=False)
    on_board.add_argument("--board", help="Board ID or title (default: current board)")

    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Kanban boards with ordered columns and tasks",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Initialize a board repository", parents=[common])
    init_p.add_argument("--storage", choices=STORAGE_BACKENDS, help="Storage backend (default: git)")
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show a board", parents=[common])
    board_show_p.add_argument("id", nargs="?", help="Board ID or title (default: current board)")
    board_show_p.set_defaults(func=board_show)

    board_add_p = board_verbs.add_parser("add", help="Create a board", parents=[common])
    board_add_p.add_argument("title", help="Board title")
    board_add_p.add_argument("--description", default="", help="Board description")
    board_add_p.set_defaults(func=board_add)

    board_set_p = board_verbs.add_parser("set", help="Update a board", parents=[common])
    board_set_p.add_argument("id", help="Board ID or title")
    board_set_p.add_argument("--title", help="New title")
    board_set_p.add_argument("--description", help="New description")
    board_set_p.set_defaults(func=board_set)

    board_rm_p = board_verbs.add_parser("rm", help="Delete a board", parents=[common])
    board_rm_p.add_argument("id", help="Board ID or title")
    board_rm_p.set_defaults(func=board_rm)

    board_use_p = board_verbs.add_parser("use", help="Select the current board", parents=[common])
    board_use_p.add_argument("id", help="Board ID or title")
    board_use_p.set_defaults(func=board_use)

    # board with no verb = list
    board_p.set_defaults(func=board_list)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common, on_board])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common, on_board])
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common, on_board])
    col_add_p.add_argument("title", help="Column title")
    col_add_p.add_argument("--color", help="Display color (default: picked from title)")
    col_add_p.set_defaults(func=column_add)

    col_set_p = col_verbs.add_parser("set", help="Rename or recolor a column", parents=[common, on_board])
    col_set_p.add_argument("id", help="Column ID or title")
    col_set_p.add_argument("--title", help="New title")
    col_set_p.add_argument("--color", help="New color")
    col_set_p.set_defaults(func=column_set)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common, on_board])
    col_move_p.add_argument("id", help="Column ID or title")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    col_rm_p = col_verbs.add_parser("rm", help="Delete a column and its tasks", parents=[common, on_board])
    col_rm_p.add_argument("id", help="Column ID or title")
    col_rm_p.set_defaults(func=column_rm)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common, on_board])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common, on_board])
    task_list_p.add_argument("--column", help="Only this column")
    task_list_p.add_argument("--search", help="Match title or description (case-insensitive)")
    task_list_p.add_argument("--priority", choices=("all", *PRIORITIES), help="Only this priority")
    task_list_p.add_argument("--due", choices=DUE_BUCKETS, help="Only tasks due in this range")
    task_list_p.add_argument("--sort", choices=("order", "priority"), default="order", help="Display order")
    task_list_p.set_defaults(func=task_list)

    task_get_p = task_verbs.add_parser("get", help="Dump task markdown", parents=[common, on_board])
    task_get_p.add_argument("id", help="Task ID")
    task_get_p.set_defaults(func=task_get)

    task_set_p = task_verbs.add_parser("set", help="Write task markdown from stdin", parents=[common, on_board])
    task_set_p.add_argument("id", help="Task ID")
    task_set_p.set_defaults(func=task_set)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common, on_board])
    task_add_p.add_argument("title", help="Task title")
    task_add_p.add_argument("--column", help="Target column ID or title (default: first column)")
    _add_task_field_flags(task_add_p)
    task_add_p.set_defaults(func=task_add)

    task_edit_p = task_verbs.add_parser("edit", help="Update task fields", parents=[common, on_board])
    task_edit_p.add_argument("id", help="Task ID")
    task_edit_p.add_argument("--title", help="New title")
    _add_task_field_flags(task_edit_p)
    task_edit_p.set_defaults(func=task_edit)

    task_move_p = task_verbs.add_parser("move", help="Move a task", parents=[common, on_board])
    task_move_p.add_argument("id", help="Task ID")
    task_move_p.add_argument("--column", help="Target column ID or title (default: same column)")
    task_move_p.add_argument("--position", type=int, help="Position in column (1-indexed, default: last)")
    task_move_p.set_defaults(func=task_move)

    task_rm_p = task_verbs.add_parser("rm", help="Delete a task", parents=[common, on_board])
    task_rm_p.add_argument("id", help="Task ID")
    task_rm_p.set_defaults(func=task_rm)

    # task with no verb = list
    task_p.set_defaults(func=task_list, column=None, search=None, priority=None, due=None, sort="order")

    return parser
