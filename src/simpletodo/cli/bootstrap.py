# src/simpletodo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the HTTP query client and the task list into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..config import get_settings
from ..core.state import AppState
from ..db.client import QueryClient
from ..tasks.todo_list import TodoList

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, transport: httpx.AsyncBaseTransport | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the HTTP transport) injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    client = QueryClient.from_settings(settings, transport=transport)
    todo_list = TodoList(client, table=settings.table_name, endpoint=settings.query_url)
    logger.debug("State wired endpoint=%s table=%s", settings.query_url, settings.table_name)

    return AppState(settings=settings, client=client, todo_list=todo_list)
