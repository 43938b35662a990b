# src/simpletodo/errors.py

from __future__ import annotations


class SimpleTodoError(Exception):
    """Base class for errors surfaced to the user as a message string."""


class TransportError(SimpleTodoError):
    """The query endpoint could not be reached or answered with garbage."""


class QueryError(SimpleTodoError):
    """The remote store executed the query and reported success=false."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SqlRenderError(SimpleTodoError):
    """A value cannot be rendered as a SQL literal the remote lexer accepts."""
