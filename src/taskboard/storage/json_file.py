"""Store boards in a JSON file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from taskboard.errors import PersistenceFailure
from taskboard.model.entities import Board
from taskboard.model.serialize import dumps, loads
from taskboard.storage.base import PersistenceGateway

logger = logging.getLogger(__name__)


class JsonFileGateway(PersistenceGateway):
    """Pretty-printed JSON document, replaced atomically on every save."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[Board]:
        if not self.path.exists():
            return []
        return loads(self.path.read_text(encoding="utf-8"))

    def save(self, boards: Sequence[Board]) -> None:
        tmp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(dumps(boards))
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning("saving %s failed: %s", self.path, e)
            raise PersistenceFailure(f"Could not write {self.path}: {e}") from e
