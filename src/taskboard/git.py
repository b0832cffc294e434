"""Git operations for taskboard: repo setup, config, and object plumbing."""

import subprocess
from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

from taskboard.errors import ValidationError

SECTION = "taskboard"

TASKBOARD_DEFAULTS = {
    "storage": "git",
    "branch": "taskboard",
    "data-file": "boards.json",
    "write-delay": 0,
    "seed-demo": True,
    "current-board": "",
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(git_key: str, raw: Any):
    """Type-coerce taskboard section values using defaults."""
    default = TASKBOARD_DEFAULTS.get(git_key)
    if default is None or not isinstance(raw, str):
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(
                f"Invalid {SECTION}.{git_key} '{raw}' in git config. Expected a whole number."
            ) from None
    return raw


def default_config() -> dict[str, Any]:
    """The taskboard defaults with Python-style keys."""
    return {_python_key(k): v for k, v in TASKBOARD_DEFAULTS.items()}


def read_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [taskboard] git config section merged over the defaults.

    Keys come back underscored and type-coerced.
    """
    config = default_config()
    reader = _get_repo(repo_path).config_reader()
    if reader.has_section(SECTION):
        for git_k, raw in reader.items(SECTION):
            config[_python_key(git_k)] = _coerce_value(git_k, raw)
    return config


def write_config_key(repo_path: str | Path, key: str, value) -> None:
    """Write one key to the repository's git config. key is python-style."""
    git_k = _git_key(key)
    writer = _get_repo(repo_path).config_writer("repository")
    try:
        if isinstance(value, bool):
            writer.set_value(SECTION, git_k, str(value).lower())
        else:
            writer.set_value(SECTION, git_k, str(value))
    finally:
        writer.release()


def _get_repo(repo_path: str | Path) -> Repo:
    return Repo(repo_path)


def is_git_repo(path: str | Path) -> bool:
    """Check if path is the root of a git repository."""
    try:
        Repo(path)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def init_repo(path: str | Path) -> Repo:
    """Initialize a new git repository at path."""
    return Repo.init(path)


def has_branch(repo_path: str | Path, branch: str) -> bool:
    """Check if a local branch exists."""
    return branch in [h.name for h in _get_repo(repo_path).heads]


# --- Plumbing ---


def run_git(repo_path: Path, args: list[str], stdin: str | None = None) -> str:
    """Run a git command and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        input=stdin.encode("utf-8") if stdin is not None else None,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def get_branch_tip(repo_path: Path, branch: str) -> str | None:
    """Get the current commit hash of a branch, or None if it doesn't exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
        cwd=repo_path,
        capture_output=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8").strip()


def commit_file(repo_path: Path, branch: str, filename: str, content: str, message: str) -> str:
    """Commit a single-file tree on branch without touching the working tree.

    The branch is created as an orphan on first use. Returns the commit hash.
    """
    blob = run_git(repo_path, ["hash-object", "-w", "--stdin"], stdin=content)
    tree = run_git(repo_path, ["mktree"], stdin=f"100644 blob {blob}\t{filename}\n")

    parent = get_branch_tip(repo_path, branch)
    parent_args = ["-p", parent] if parent else []
    commit = run_git(repo_path, ["commit-tree", tree, *parent_args, "-m", message])

    run_git(repo_path, ["update-ref", f"refs/heads/{branch}", commit])
    return commit


def read_file(repo_path: str | Path, branch: str, filename: str) -> str | None:
    """Read filename from the tip of branch, or None if either is missing."""
    if not has_branch(repo_path, branch):
        return None
    tree = _get_repo(repo_path).heads[branch].commit.tree
    try:
        blob = tree[filename]
    except KeyError:
        return None
    return blob.data_stream.read().decode("utf-8")
