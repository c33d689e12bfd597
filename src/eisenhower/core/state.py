# src/eisenhower/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Quadrant
from ..tasks.task_store import TaskStore
from ..tasks.task_views import TaskFilter


@dataclass
class AppState:
    """
    Everything one session owns.

    View state (filter, sort flags, drag source) lives here, not in the
    store: it changes what is shown, never what is persisted.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any
    task_store: TaskStore

    active_filter: TaskFilter = field(default_factory=TaskFilter)
    sorted_quadrants: set[Quadrant] = field(default_factory=set)

    # Set by a drag-start, consumed by the next drop.
    dragged_task_id: str | None = None
