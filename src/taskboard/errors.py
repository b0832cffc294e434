"""Exceptions raised by taskboard operations."""


class TaskboardError(Exception):
    """Base class for all taskboard errors."""


class NotFound(TaskboardError):
    """A referenced board, column or task does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind.capitalize()} '{entity_id}' not found.")
        self.kind = kind
        self.entity_id = entity_id


class ValidationError(TaskboardError):
    """A field value was rejected before any change was made."""


class PersistenceFailure(TaskboardError):
    """The new state could not be stored.

    The in-memory state has already been updated and stays authoritative.
    """
