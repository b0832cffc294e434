"""Shared fixtures for CLI tests."""

import asyncio
from argparse import Namespace

import pytest
from git import Repo

from taskboard.engine import BoardEngine
from taskboard.git import write_config_key
from taskboard.storage import GitGateway


def _load(repo_path):
    """Load the saved board collection from a repo."""
    return GitGateway(repo_path).load()


def _args(repo_path, **kwargs):
    """Namespace with every option a handler may read, defaulting to unset."""
    defaults = dict(
        repo=str(repo_path),
        json=False,
        board=None,
        id=None,
        title=None,
        description=None,
        color=None,
        position=None,
        column=None,
        search=None,
        priority=None,
        assignee=None,
        due=None,
        sort="order",
        storage=None,
    )
    defaults.update(kwargs)
    return Namespace(**defaults)


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    repo = Repo.init(tmp_path)
    (tmp_path / ".gitkeep").write_text("")
    repo.index.add([".gitkeep"])
    repo.index.commit("Initial commit")
    return tmp_path


@pytest.fixture
def initialized_repo(empty_repo):
    """Create a repo with a current board (3 columns, 2 tasks in Backlog)."""

    async def build():
        engine = BoardEngine(GitGateway(empty_repo))
        await engine.open()
        board = await engine.create_board("Test Board", "A test board.")
        backlog = await engine.create_column(board.id, "Backlog")
        await engine.create_column(board.id, "Doing")
        await engine.create_column(board.id, "Done")
        await engine.create_task(board.id, backlog.id, "First task", description="Description one.", priority="high")
        await engine.create_task(board.id, backlog.id, "Second task", description="Description two.")
        return board.id

    board_id = asyncio.run(build())
    write_config_key(empty_repo, "current_board", board_id)
    return empty_repo
