"""Tests for the persistence gateways."""

import json

import pytest
from git import Repo

from taskboard.errors import PersistenceFailure, ValidationError
from taskboard.model.mutations import MutationService
from taskboard.model.store import AggregateStore
from taskboard.storage import DelayedGateway, GitGateway, JsonFileGateway, MemoryGateway


@pytest.fixture
def boards(clock):
    """A small collection: one board with a column and two tasks."""
    store = AggregateStore()
    mutations = MutationService(store, clock)
    board = mutations.create_board("Launch")
    col = mutations.create_column(board.id, "To Do")
    mutations.create_task(board.id, col.id, "First", priority="high")
    mutations.create_task(board.id, col.id, "Second", due_date="2026-02-01")
    return store.get_all()


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    Repo.init(tmp_path)
    return tmp_path


# --- MemoryGateway ---


def test_memory_gateway(boards):
    gateway = MemoryGateway()
    assert gateway.load() == []
    gateway.save(boards)
    assert gateway.load() == list(boards)
    assert gateway.saves == 1


# --- DelayedGateway ---


def test_delayed_gateway_sleeps(boards, monkeypatch):
    slept = []
    monkeypatch.setattr("taskboard.storage.base.time.sleep", slept.append)
    inner = MemoryGateway()
    gateway = DelayedGateway(inner, 0.25)
    gateway.save(boards)
    assert slept == [0.25]
    assert inner.boards == boards
    assert gateway.load() == list(boards)


def test_delayed_gateway_zero_delay(boards, monkeypatch):
    slept = []
    monkeypatch.setattr("taskboard.storage.base.time.sleep", slept.append)
    DelayedGateway(MemoryGateway(), 0).save(boards)
    assert slept == []


# --- JsonFileGateway ---


def test_json_missing_file(tmp_path):
    assert JsonFileGateway(tmp_path / "boards.json").load() == []


def test_json_save_and_load(tmp_path, boards):
    path = tmp_path / "data" / "boards.json"
    gateway = JsonFileGateway(path)
    gateway.save(boards)

    assert path.exists()
    assert not path.with_suffix(".json.tmp").exists()
    assert json.loads(path.read_text())["boards"][0]["title"] == "Launch"
    assert JsonFileGateway(path).load() == list(boards)


def test_json_save_replaces(tmp_path, boards):
    gateway = JsonFileGateway(tmp_path / "boards.json")
    gateway.save(boards)
    gateway.save(())
    assert gateway.load() == []


def test_json_save_failure(tmp_path, boards):
    blocker = tmp_path / "file"
    blocker.write_text("")
    gateway = JsonFileGateway(blocker / "boards.json")
    with pytest.raises(PersistenceFailure, match="Could not write"):
        gateway.save(boards)


def test_json_load_corrupt(tmp_path):
    path = tmp_path / "boards.json"
    path.write_text("{not json")
    with pytest.raises(ValidationError):
        JsonFileGateway(path).load()


# --- GitGateway ---


def test_git_empty_repo_loads_nothing(empty_repo):
    assert GitGateway(empty_repo).load() == []


def test_git_save_and_load(empty_repo, boards):
    gateway = GitGateway(empty_repo)
    gateway.save(boards)

    assert gateway.commit is not None
    repo = Repo(empty_repo)
    assert "taskboard" in [h.name for h in repo.heads]
    assert GitGateway(empty_repo).load() == list(boards)


def test_git_save_leaves_working_tree_alone(empty_repo, boards):
    GitGateway(empty_repo).save(boards)
    assert not (empty_repo / "boards.json").exists()


def test_git_saves_are_chained(empty_repo, boards):
    gateway = GitGateway(empty_repo, branch="data", filename="state.json")
    gateway.save(boards)
    first = gateway.commit
    gateway.save(())
    head = Repo(empty_repo).heads["data"].commit
    assert head.hexsha == gateway.commit
    assert [p.hexsha for p in head.parents] == [first]
    assert head.message.strip() == "Update boards"
    assert gateway.load() == []


def test_git_missing_file_on_branch(empty_repo, boards):
    GitGateway(empty_repo, filename="a.json").save(boards)
    assert GitGateway(empty_repo, filename="b.json").load() == []


def test_git_save_failure(tmp_path, boards):
    gateway = GitGateway(tmp_path / "not-a-repo")
    with pytest.raises(PersistenceFailure, match="Could not commit"):
        gateway.save(boards)
