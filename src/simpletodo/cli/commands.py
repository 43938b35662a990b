# src/simpletodo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from .render import render_result, render_todos

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, str, CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        The argument text is passed through as typed (task text keeps its spacing).
        """
        if not line.startswith("/"):
            return None

        head, _, rest = line[1:].partition(" ")
        name = head.strip().lower()
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, rest, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Any other line is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: str) -> int | None:
    try:
        return int(args.strip())
    except ValueError:
        return None


async def cmd_help(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    return render_todos(state.view)


async def cmd_refresh(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    if emit is not None:
        emit("Loading...")
    await state.todo_list.fetch_todos()
    return render_todos(state.view)


async def cmd_add(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    if state.view.loading:
        return "Still loading, try again in a moment."
    if not args.strip():
        return "Usage: /add <task text>"
    await state.todo_list.add_todo(args)
    return render_todos(state.view)


async def cmd_toggle(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    task = state.todo_list.get(task_id)
    if task is None:
        return f"No task with id={task_id}. Use /refresh to reload the list."
    await state.todo_list.toggle_todo(task)
    return render_todos(state.view)


async def cmd_delete(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    await state.todo_list.delete_todo(task_id)
    return render_todos(state.view)


async def cmd_sql(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /sql <statement>  -> run it as-is and show the result table
    The task list is not refreshed; use /refresh afterwards if the table changed.
    """
    sql = args.strip()
    if not sql:
        return "Usage: /sql <statement>"
    logger.debug("Ad-hoc query requested: %s", sql)
    result = await state.todo_list.run_sql(sql)
    if result is None:
        return f"Error: {state.view.error}"
    return render_result(result)


async def cmd_status(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    view = state.view
    settings = state.settings
    done = sum(1 for t in view.todos if t.done)
    return (
        "Status:\n"
        f"  Endpoint: {getattr(settings, 'query_url', state.todo_list.endpoint)}\n"
        f"  Table: {state.todo_list.table}\n"
        f"  Tasks: {len(view.todos)} ({done} done)\n"
        f"  Loading: {'yes' if view.loading else 'no'}\n"
        f"  Last error: {view.error or '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload the task list from the database.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("toggle", cmd_toggle, help_text="Mark a task done/pending: /toggle <id>.", aliases=["done", "t"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["del", "rm"])
registry.register("sql", cmd_sql, help_text="Run a raw SQL statement: /sql <statement>.")
registry.register("status", cmd_status, help_text="Show endpoint, table and list summary.")
