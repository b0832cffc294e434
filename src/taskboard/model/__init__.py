"""Board aggregate: entities, store, and the operations over them."""

from taskboard.model.entities import PRIORITIES, Board, Column, Task
from taskboard.model.filters import FilterCriteria, filter_tasks, sort_for_display
from taskboard.model.mutations import MutationService
from taskboard.model.ordering import OrderingService
from taskboard.model.store import AggregateStore

__all__ = [
    "PRIORITIES",
    "AggregateStore",
    "Board",
    "Column",
    "FilterCriteria",
    "MutationService",
    "OrderingService",
    "Task",
    "filter_tasks",
    "sort_for_display",
]
