# src/simpletodo/tasks/todo_list.py

from __future__ import annotations

"""
Task list client.

The remote table is the only source of truth. Every mutation is sent as
SQL and then followed by a full fetch (SELECT *) that replaces the local
list; nothing is flipped or removed locally.
"""

import logging
import time
from collections.abc import Callable

from ..core.ports import QueryTransport
from ..core.state import TodoState
from ..db.client import QueryResult
from ..db.sql import (
    create_table_sql,
    delete_todo_sql,
    insert_todo_sql,
    select_all_sql,
    set_done_sql,
)
from ..errors import SimpleTodoError, TransportError
from .task_models import Task, next_task_id

logger = logging.getLogger(__name__)

CONNECT_ERROR_TEMPLATE = "Failed to connect to database. Ensure the database server is running at {url}."


def connect_error_message(url: str) -> str:
    return CONNECT_ERROR_TEMPLATE.format(url=url)


class TodoList:
    def __init__(
        self,
        transport: QueryTransport,
        *,
        table: str = "todos",
        endpoint: str = "",
        state: TodoState | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transport = transport
        self.table = table
        self.endpoint = endpoint or "the configured query URL"
        self.state = state if state is not None else TodoState()
        self._clock = clock
        self._issued_ids: set[int] = set()

    # ---- lookups ----

    def get(self, task_id: int) -> Task | None:
        for t in self.state.todos:
            if t.id == task_id:
                return t
        return None

    # ---- startup ----

    async def initialize(self) -> None:
        """Ensure the table exists (failures tolerated), then load it."""
        self.state.loading = True
        try:
            try:
                result = await self._transport.execute(create_table_sql(self.table))
            except SimpleTodoError as e:
                logger.info("CREATE TABLE %s failed, continuing with fetch: %s", self.table, e)
            else:
                if result.success:
                    logger.info("Created table %s", self.table)
                else:
                    logger.info("CREATE TABLE %s not applied (probably exists): %s", self.table, result.error)

            try:
                await self._load()
            except TransportError as e:
                logger.warning("Initial fetch failed: %s", e)
                self.state.error = connect_error_message(self.endpoint)
            except SimpleTodoError as e:
                self.state.error = str(e)
        finally:
            self.state.loading = False

    # ---- synchronization ----

    async def _load(self) -> bool:
        result = await self._transport.execute(select_all_sql(self.table))
        if not result.success:
            self.state.error = result.error
            return False

        try:
            todos = [Task.from_record(r) for r in result.records()]
        except ValueError as e:
            logger.warning("Unusable row in %s: %s", self.table, e)
            self.state.error = f"Unexpected row in table {self.table}: {e}"
            return False

        self.state.todos = todos
        self.state.error = None
        logger.debug("Fetched %d tasks", len(todos))
        return True

    async def fetch_todos(self) -> bool:
        """Full fetch: replace the local list with the whole remote table."""
        try:
            return await self._load()
        except SimpleTodoError as e:
            self.state.error = str(e)
            return False

    async def _mutate(self, render: Callable[[], str]) -> bool:
        """Render and send one statement. A statement that cannot be rendered is never sent."""
        try:
            result = await self._transport.execute(render())
            result.raise_for_error()
        except SimpleTodoError as e:
            self.state.error = str(e)
            return False
        return True

    # ---- mutations ----

    def _next_id(self) -> int:
        now_ms = int(self._clock() * 1000)
        taken = {t.id for t in self.state.todos} | self._issued_ids
        task_id = next_task_id(now_ms, taken)
        self._issued_ids.add(task_id)
        return task_id

    async def add_todo(self, text: str | None = None) -> bool:
        """
        Insert the input text as a new pending task.

        Blank input is ignored without touching the transport. The input is
        cleared only after the insert succeeded.
        """
        if text is None:
            text = self.state.task_input
        if not text.strip():
            return False

        self.state.task_input = text
        if not await self._mutate(lambda: insert_todo_sql(self._next_id(), text, self.table)):
            return False

        self.state.task_input = ""
        await self.fetch_todos()
        return True

    async def toggle_todo(self, task: Task) -> bool:
        new_status = 0 if task.is_done == 1 else 1
        if not await self._mutate(lambda: set_done_sql(task.id, new_status, self.table)):
            return False
        await self.fetch_todos()
        return True

    async def delete_todo(self, task_id: int) -> bool:
        if not await self._mutate(lambda: delete_todo_sql(task_id, self.table)):
            return False
        await self.fetch_todos()
        return True

    # ---- ad-hoc ----

    async def run_sql(self, sql: str) -> QueryResult | None:
        """Run arbitrary SQL. The task list is left alone; use fetch_todos to resync."""
        try:
            result = await self._transport.execute(sql)
        except TransportError as e:
            self.state.error = str(e)
            return None
        self.state.error = None if result.success else result.error
        return result
