"""Persistence gateways for the board collection."""

from taskboard.storage.base import DelayedGateway, MemoryGateway, PersistenceGateway
from taskboard.storage.git import GitGateway
from taskboard.storage.json_file import JsonFileGateway

__all__ = [
    "DelayedGateway",
    "GitGateway",
    "JsonFileGateway",
    "MemoryGateway",
    "PersistenceGateway",
]
