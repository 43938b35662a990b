# src/simpletodo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TodoList depends on this Protocol instead of the concrete HTTP client,
so tests can drive it with a scripted transport.
"""

from typing import TYPE_CHECKING, Awaitable, Protocol

if TYPE_CHECKING:
    from ..db.client import QueryResult


class QueryTransport(Protocol):
    """
    Executes one SQL string against the remote store.

    Returns the parsed envelope for both success and success=false;
    raises TransportError when the endpoint cannot be reached.
    """

    def execute(self, sql: str) -> Awaitable[QueryResult]: ...
