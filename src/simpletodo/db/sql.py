# src/simpletodo/db/sql.py

"""
SQL text for the query endpoint.

The endpoint accepts only raw statement text, so parameters are bound here:
statements are written with `?` placeholders and every value is rendered as
an escaped literal. The remote lexer understands exactly one escape inside a
quoted string, a backslash before the closing quote character.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Any

from ..errors import SqlRenderError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_identifier(name: str) -> str:
    """Validate a table/column name. The remote dialect has no identifier quoting."""
    if not _IDENTIFIER_RE.match(name or ""):
        raise SqlRenderError(f"Invalid SQL identifier: {name!r}")
    return name


def quote_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SqlRenderError(f"Cannot render non-finite number: {value!r}")
        return repr(value)
    if isinstance(value, str):
        if value.endswith("\\"):
            # '\' right before the closing quote would escape it.
            raise SqlRenderError("Text cannot end with a backslash.")
        return "'" + value.replace("'", "\\'") + "'"
    raise SqlRenderError(f"Unsupported SQL parameter type: {type(value).__name__}")


def bind_params(template: str, params: Sequence[Any] = ()) -> str:
    """Replace each `?` outside quoted literals with the rendered parameter."""
    out: list[str] = []
    quote: str | None = None
    used = 0
    i = 0
    n = len(template)

    while i < n:
        ch = template[i]
        if quote is not None:
            out.append(ch)
            if ch == "\\" and i + 1 < n and template[i + 1] == quote:
                out.append(template[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
            out.append(ch)
        elif ch == "?":
            if used >= len(params):
                raise SqlRenderError(
                    f"Not enough parameters: template needs more than {len(params)}"
                )
            out.append(quote_literal(params[used]))
            used += 1
        else:
            out.append(ch)
        i += 1

    if used != len(params):
        raise SqlRenderError(f"Too many parameters: used {used} of {len(params)}")
    return "".join(out)


# ---- statements for the todo table ----


def create_table_sql(table: str = "todos") -> str:
    t = quote_identifier(table)
    return f"CREATE TABLE {t} (id INTEGER PRIMARY KEY, task VARCHAR(255), is_done INTEGER)"


def select_all_sql(table: str = "todos") -> str:
    return f"SELECT * FROM {quote_identifier(table)}"


def insert_todo_sql(task_id: int, text: str, table: str = "todos") -> str:
    t = quote_identifier(table)
    return bind_params(f"INSERT INTO {t} (id, task, is_done) VALUES (?, ?, 0)", (task_id, text))


def set_done_sql(task_id: int, is_done: int, table: str = "todos") -> str:
    t = quote_identifier(table)
    return bind_params(f"UPDATE {t} SET is_done = ? WHERE id = ?", (is_done, task_id))


def delete_todo_sql(task_id: int, table: str = "todos") -> str:
    t = quote_identifier(table)
    return bind_params(f"DELETE FROM {t} WHERE id = ?", (task_id,))
