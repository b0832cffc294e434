"""Handlers for 'taskboard column' commands."""

from taskboard.cli._common import (
    build_column_summaries,
    error,
    find_board,
    find_column,
    format_column_line,
    open_engine_or_die,
    output_json,
    output_result,
    perform,
)


def column_list(args) -> int:
    """List the columns of a board."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    items = build_column_summaries(board)

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0


def column_add(args) -> int:
    """Append a new column to a board."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)

    col = perform(engine.create_column(board.id, args.title, args.color), args.json)

    output_result(
        {"id": col.id, "title": col.title, "color": col.color, "position": col.order + 1},
        f'Created column "{col.title}" (id {col.id}) in "{board.title}"',
        args.json,
    )

    return 0


def column_set(args) -> int:
    """Rename or recolor a column."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col = find_column(board, args.id, args.json)

    fields = {}
    if args.title is not None:
        fields["title"] = args.title
    if args.color is not None:
        fields["color"] = args.color
    if not fields:
        error("Nothing to update. Pass --title and/or --color.", args.json)

    old_title = col.title
    col = perform(engine.update_column(board.id, col.id, **fields), args.json)

    output_result(
        {"id": col.id, "old_title": old_title, "title": col.title, "color": col.color},
        f'Updated column "{col.title}" (id {col.id})',
        args.json,
    )

    return 0


def column_move(args) -> int:
    """Move a column to a new position."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col = find_column(board, args.id, args.json)

    # CLI uses 1-indexed positions, model uses 0-indexed
    col = perform(engine.move_column(board.id, col.id, args.position - 1), args.json)

    output_result(
        {"id": col.id, "title": col.title, "position": col.order + 1},
        f'Moved column "{col.title}" to position {col.order + 1}',
        args.json,
    )

    return 0


def column_rm(args) -> int:
    """Delete a column and all its tasks."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col = find_column(board, args.id, args.json)

    perform(engine.delete_column(board.id, col.id), args.json)

    count = len(col.tasks)
    tasks = "task" if count == 1 else "tasks"
    output_result(
        {"id": col.id, "title": col.title, "deleted_tasks": count},
        f'Deleted column "{col.title}" and {count} {tasks}',
        args.json,
    )

    return 0
