"""Shared helpers for CLI command handlers."""

import asyncio
import json
import sys

from taskboard.config import Settings, build_gateway, load_settings
from taskboard.engine import BoardEngine
from taskboard.errors import TaskboardError
from taskboard.ids import match_ids
from taskboard.model.entities import Board, Column, Task
from taskboard.model.filters import board_stats


def open_engine_or_die(args, seed_demo: bool = False) -> tuple[BoardEngine, Settings]:
    """Load settings and boards for args.repo. Exit 1 with message on failure.

    The configured current board is selected, falling back to the first board.
    """
    try:
        settings = load_settings(args.repo)
        engine = BoardEngine(build_gateway(settings))
        asyncio.run(engine.open(seed_demo=seed_demo))
    except TaskboardError as e:
        error(str(e), args.json)

    ids = [b.id for b in engine.boards]
    if settings.current_board in ids:
        engine.select_board(settings.current_board)
    elif ids:
        engine.select_board(ids[0])
    return engine, settings


def perform(coro, json_mode: bool):
    """Run an engine action to completion. Exit 1 on TaskboardError."""
    try:
        return asyncio.run(coro)
    except TaskboardError as e:
        error(str(e), json_mode)


def _match_one(kind: str, candidates: dict[str, str], key: str, json_mode: bool) -> str:
    """Resolve key to one id, by id prefix or case-insensitive title."""
    matches = match_ids(candidates, key)
    if not matches:
        lowered = key.strip().lower()
        matches = [id_ for id_, title in candidates.items() if title.lower() == lowered]
    if len(matches) == 1:
        return matches[0]
    if matches:
        error(f"{kind.capitalize()} '{key}' is ambiguous: {', '.join(matches)}", json_mode)
    available = [f"  {id_}  {title}" for id_, title in candidates.items()]
    msg = f"{kind.capitalize()} '{key}' not found."
    if available:
        msg += " Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_board(engine: BoardEngine, key: str | None, json_mode: bool) -> Board:
    """Lookup board by id prefix or title; None means the current board."""
    if key is None:
        board = engine.current_board
        if board is None:
            error("No board selected. Create one with 'taskboard board add'.", json_mode)
        return board
    board_id = _match_one("board", {b.id: b.title for b in engine.boards}, key, json_mode)
    return engine.store.get_board(board_id)


def find_column(board: Board, key: str, json_mode: bool) -> Column:
    """Lookup column by id prefix or title. Exit 1 listing columns if not found."""
    column_id = _match_one("column", {c.id: c.title for c in board.columns}, key, json_mode)
    return board.column(column_id)


def find_task(board: Board, key: str, json_mode: bool) -> tuple[Column, Task]:
    """Lookup task by id prefix. Returns (column, task)."""
    titles = {t.id: t.title for t in board.tasks}
    matches = match_ids(titles, key)
    if len(matches) != 1:
        problem = "is ambiguous" if matches else "not found"
        error(f"Task '{key}' {problem}.", json_mode)
    column = board.find_task_column(matches[0])
    return column, column.task(matches[0])


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def build_column_summaries(board: Board) -> list[dict]:
    """Build column summary dicts from board."""
    return [
        {"id": col.id, "title": col.title, "color": col.color, "position": col.order + 1, "tasks": len(col.tasks)}
        for col in board.columns
    ]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    tasks = "task" if c["tasks"] == 1 else "tasks"
    return f"{indent}{c['id']}  {c['title']:<16} {c['tasks']} {tasks}"


def build_board_summary(board: Board, current: bool = False) -> dict:
    return {"id": board.id, "title": board.title, "current": current, **board_stats(board)}


def format_board_line(b: dict) -> str:
    marker = "*" if b["current"] else " "
    columns = "column" if b["columns"] == 1 else "columns"
    tasks = "task" if b["tasks"] == 1 else "tasks"
    return f"{marker} {b['id']}  {b['title']:<24} {b['columns']} {columns}, {b['tasks']} {tasks}"
