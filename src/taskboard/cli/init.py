"""Handler for 'taskboard init'."""

from pathlib import Path

from taskboard.cli._common import error, open_engine_or_die, output_json
from taskboard.errors import TaskboardError
from taskboard.git import init_repo, is_git_repo, read_config, write_config_key


def init_board(args) -> int:
    """Initialize a board repository, seeding the demo board when empty."""
    repo_path = Path(args.repo).resolve()

    if not is_git_repo(repo_path):
        repo_path.mkdir(parents=True, exist_ok=True)
        init_repo(repo_path)
    if args.storage:
        write_config_key(repo_path, "storage", args.storage)

    try:
        config = read_config(repo_path)
    except TaskboardError as e:
        error(str(e), args.json)
    existing = bool(config["current_board"])

    engine, settings = open_engine_or_die(args, seed_demo=config["seed_demo"])
    board = engine.current_board
    if board is not None and not existing:
        write_config_key(repo_path, "current_board", board.id)

    created = not existing
    columns = [c.title for c in board.columns] if board else []
    if args.json:
        output_json(
            {
                "repo_path": str(repo_path),
                "storage": settings.storage,
                "board": {"id": board.id, "title": board.title} if board else None,
                "columns": columns,
                "created": created,
            }
        )
    elif not created:
        print(f"Board repository already initialized at {repo_path}")
    else:
        print(f"Initialized board repository at {repo_path}")
        if board:
            print(f'Board: "{board.title}" ({board.id})')
            print(f"Columns: {', '.join(columns)}")

    return 0
