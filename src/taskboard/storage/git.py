"""Store boards as a JSON blob on a dedicated git branch."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from git import GitError

from taskboard.errors import PersistenceFailure
from taskboard.git import commit_file, read_file
from taskboard.model.entities import Board
from taskboard.model.serialize import dumps, loads
from taskboard.storage.base import PersistenceGateway

logger = logging.getLogger(__name__)


class GitGateway(PersistenceGateway):
    """One commit per save on an orphan branch; the working tree is never touched."""

    def __init__(self, repo_path: str | Path, branch: str = "taskboard", filename: str = "boards.json") -> None:
        self.repo_path = Path(repo_path)
        self.branch = branch
        self.filename = filename
        self.commit: str | None = None

    def load(self) -> list[Board]:
        text = read_file(self.repo_path, self.branch, self.filename)
        if text is None:
            return []
        return loads(text)

    def save(self, boards: Sequence[Board]) -> None:
        try:
            self.commit = commit_file(self.repo_path, self.branch, self.filename, dumps(boards), "Update boards")
        except (subprocess.CalledProcessError, OSError, GitError) as e:
            logger.warning("commit to %s failed: %s", self.branch, e)
            raise PersistenceFailure(f"Could not commit to branch '{self.branch}': {e}") from e
        logger.debug("saved boards as %s", self.commit)
