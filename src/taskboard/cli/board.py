"""Handlers for 'taskboard board' commands."""

from taskboard.cli._common import (
    build_board_summary,
    build_column_summaries,
    error,
    find_board,
    format_board_line,
    format_column_line,
    open_engine_or_die,
    output_json,
    output_result,
    perform,
)
from taskboard.git import write_config_key
from taskboard.model.filters import priority_stats


def board_list(args) -> int:
    """List boards, marking the current one."""
    engine, _ = open_engine_or_die(args)
    current = engine.current_board
    items = [build_board_summary(b, current is not None and b.id == current.id) for b in engine.boards]

    if args.json:
        output_json(items)
    else:
        for b in items:
            print(format_board_line(b))

    return 0


def board_show(args) -> int:
    """Show a board: title, description, columns with task counts."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.id, args.json)
    columns = build_column_summaries(board)

    if args.json:
        for c, col in zip(columns, board.columns):
            c["priorities"] = priority_stats(col.tasks)
        output_json({"id": board.id, "title": board.title, "description": board.description, "columns": columns})
    else:
        print(board.title)
        if board.description:
            print(board.description)
        for c in columns:
            print(format_column_line(c, indent="  "))

    return 0


def board_add(args) -> int:
    """Create a new board."""
    engine, _ = open_engine_or_die(args)
    board = perform(engine.create_board(args.title, args.description), args.json)

    output_result(
        {"id": board.id, "title": board.title},
        f'Created board "{board.title}" ({board.id})',
        args.json,
    )

    return 0


def board_set(args) -> int:
    """Update a board's title and/or description."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.id, args.json)

    fields = {}
    if args.title is not None:
        fields["title"] = args.title
    if args.description is not None:
        fields["description"] = args.description
    if not fields:
        error("Nothing to update. Pass --title and/or --description.", args.json)

    board = perform(engine.update_board(board.id, **fields), args.json)

    output_result(
        {"id": board.id, "title": board.title, "description": board.description},
        f'Updated board "{board.title}" ({board.id})',
        args.json,
    )

    return 0


def board_rm(args) -> int:
    """Delete a board with all its columns and tasks."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.id, args.json)

    perform(engine.delete_board(board.id), args.json)

    output_result(
        {"id": board.id, "title": board.title},
        f'Deleted board "{board.title}" ({board.id})',
        args.json,
    )

    return 0


def board_use(args) -> int:
    """Select the current board for column and task commands."""
    engine, settings = open_engine_or_die(args)
    board = find_board(engine, args.id, args.json)

    if not settings.in_git:
        error(f"{settings.repo_path} is not a git repository; run 'taskboard init' first.", args.json)
    write_config_key(settings.repo_path, "current_board", board.id)

    output_result(
        {"id": board.id, "title": board.title},
        f'Using board "{board.title}" ({board.id})',
        args.json,
    )

    return 0
