# src/simpletodo/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..tasks.task_models import Task

if TYPE_CHECKING:
    from ..db.client import QueryClient
    from ..tasks.todo_list import TodoList


@dataclass(slots=True)
class TodoState:
    """
    Everything the UI renders.

    Only TodoList operations write to it; `todos` is replaced wholesale
    after every successful full fetch.
    """

    todos: list[Task] = field(default_factory=list)
    task_input: str = ""
    error: str | None = None
    loading: bool = False


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    client: QueryClient
    todo_list: TodoList

    @property
    def view(self) -> TodoState:
        return self.todo_list.state
