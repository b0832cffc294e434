"""Repository settings and gateway selection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from taskboard.errors import ValidationError
from taskboard.git import default_config, is_git_repo, read_config
from taskboard.storage import DelayedGateway, GitGateway, JsonFileGateway, PersistenceGateway

STORAGE_BACKENDS = ("git", "json")


@dataclass
class Settings:
    """Settings for one board repository.

    Read from the ``[taskboard]`` git config section when the path is a
    git repository; outside one, defaults apply with JSON file storage.
    """

    repo_path: Path
    storage: str = "git"
    branch: str = "taskboard"
    data_file: str = "boards.json"
    write_delay: int = 0
    seed_demo: bool = True
    current_board: str = ""
    in_git: bool = False


def load_settings(repo_path: str | Path) -> Settings:
    path = Path(repo_path).resolve()
    if is_git_repo(path):
        values = read_config(path)
        in_git = True
    else:
        values = default_config()
        values["storage"] = "json"
        in_git = False
    known = {k: v for k, v in values.items() if k in Settings.__dataclass_fields__}
    return Settings(repo_path=path, in_git=in_git, **known)


def build_gateway(settings: Settings) -> PersistenceGateway:
    """Create the gateway named by settings.storage, with optional write delay."""
    if settings.storage == "git":
        if not settings.in_git:
            raise ValidationError(f"{settings.repo_path} is not a git repository.")
        gateway: PersistenceGateway = GitGateway(settings.repo_path, settings.branch, settings.data_file)
    elif settings.storage == "json":
        gateway = JsonFileGateway(settings.repo_path / settings.data_file)
    else:
        raise ValidationError(
            f"Unknown storage '{settings.storage}'. Expected one of: {', '.join(STORAGE_BACKENDS)}."
        )
    if settings.write_delay > 0:
        gateway = DelayedGateway(gateway, settings.write_delay / 1000)
    return gateway
