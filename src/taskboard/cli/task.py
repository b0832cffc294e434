"""Handlers for 'taskboard task' commands."""

import sys

from taskboard.cli._common import (
    error,
    find_board,
    find_column,
    find_task,
    open_engine_or_die,
    output_json,
    output_result,
    perform,
)
from taskboard.model.filters import FilterCriteria, filter_tasks, sort_for_display
from taskboard.model.serialize import task_to_dict
from taskboard.parser import markdown_to_fields, task_to_markdown

TASK_FLAGS = ("title", "description", "assignee", "priority", "due")


def _flag_fields(args) -> dict:
    """Collect the task field flags that were given on the command line."""
    fields = {}
    for flag in TASK_FLAGS:
        value = getattr(args, flag, None)
        if value is not None:
            fields["due_date" if flag == "due" else flag] = value
    return fields


def _format_task_line(task: dict) -> str:
    due = f"  due {task['dueDate']}" if task["dueDate"] else ""
    return f"  {task['id']}  [{task['priority']}] {task['title']}{due}"


def task_list(args) -> int:
    """List tasks grouped by column, with optional filters."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    criteria = FilterCriteria(
        search=args.search or "",
        priority=args.priority or "",
        due=args.due or "all",
    )

    columns = board.columns
    if args.column:
        columns = (find_column(board, args.column, args.json),)

    groups = []
    for col in columns:
        tasks = filter_tasks(col.tasks, criteria)
        if args.sort == "priority":
            tasks = sort_for_display(tasks)
        groups.append((col, [task_to_dict(t) for t in tasks]))

    if args.json:
        output_json(
            [
                {**t, "column": {"id": col.id, "title": col.title}}
                for col, tasks in groups
                for t in tasks
            ]
        )
    else:
        if criteria.is_active:
            print("(filtered)")
        for col, tasks in groups:
            print(f"{col.id}  {col.title}")
            for t in tasks:
                print(_format_task_line(t))

    return 0


def task_get(args) -> int:
    """Dump task markdown content."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col, task = find_task(board, args.id, args.json)

    markdown = task_to_markdown(task)

    if args.json:
        data = task_to_dict(task)
        data["column"] = {"id": col.id, "title": col.title}
        data["markdown"] = markdown
        output_json(data)
    else:
        sys.stdout.write(markdown)

    return 0


def task_add(args) -> int:
    """Create a task, in the first column unless --column is given."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)

    if args.column:
        col = find_column(board, args.column, args.json)
    elif board.columns:
        col = board.columns[0]
    else:
        error(f'Board "{board.title}" has no columns. Add one with \'taskboard column add\'.', args.json)

    fields = _flag_fields(args)
    title = fields.pop("title", args.title)
    task = perform(engine.create_task(board.id, col.id, title, **fields), args.json)

    output_result(
        {"id": task.id, "title": task.title, "column": {"id": col.id, "title": col.title}},
        f"Created task {task.id} in {col.title}",
        args.json,
    )

    return 0


def task_set(args) -> int:
    """Replace a task's fields from markdown on stdin."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col, task = find_task(board, args.id, args.json)

    fields = markdown_to_fields(sys.stdin.read())
    task = perform(engine.update_task(board.id, col.id, task.id, **fields), args.json)

    output_result(
        {"id": task.id, "title": task.title},
        f"Updated task {task.id}",
        args.json,
    )

    return 0


def task_edit(args) -> int:
    """Update individual task fields from flags."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col, task = find_task(board, args.id, args.json)

    fields = _flag_fields(args)
    if not fields:
        error("Nothing to update. Pass at least one field flag.", args.json)

    task = perform(engine.update_task(board.id, col.id, task.id, **fields), args.json)

    output_result(
        task_to_dict(task),
        f"Updated task {task.id}",
        args.json,
    )

    return 0


def task_move(args) -> int:
    """Move a task to a column, or to a new position in its own column."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    source, task = find_task(board, args.id, args.json)
    target = find_column(board, args.column, args.json) if args.column else source

    # CLI uses 1-indexed positions, model uses 0-indexed; no position means the end
    index = args.position - 1 if args.position is not None else len(target.tasks)
    task = perform(engine.move_task(board.id, task.id, source.id, target.id, index), args.json)

    output_result(
        {
            "id": task.id,
            "column": {"id": target.id, "title": target.title},
            "position": task.order + 1,
        },
        f"Moved task {task.id} to {target.title} at position {task.order + 1}",
        args.json,
    )

    return 0


def task_rm(args) -> int:
    """Delete a task."""
    engine, _ = open_engine_or_die(args)
    board = find_board(engine, args.board, args.json)
    col, task = find_task(board, args.id, args.json)

    perform(engine.delete_task(board.id, col.id, task.id), args.json)

    output_result(
        {"id": task.id, "title": task.title},
        f"Deleted task {task.id} from {col.title}",
        args.json,
    )

    return 0
