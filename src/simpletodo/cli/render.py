# src/simpletodo/cli/render.py

from __future__ import annotations

from typing import Any

from ..core.state import TodoState
from ..db.client import QueryResult

DONE_MARK = "✅"
PENDING_MARK = "⬜"


def render_todos(view: TodoState) -> str:
    lines: list[str] = []
    if view.error:
        lines.append(f"Error: {view.error}")

    if view.loading:
        lines.append("Loading...")
        return "\n".join(lines)

    if not view.todos:
        lines.append("No tasks yet. Add one with /add <text> or just type it.")
        return "\n".join(lines)

    width = max(len(str(t.id)) for t in view.todos)
    for t in view.todos:
        mark = DONE_MARK if t.done else PENDING_MARK
        lines.append(f"  {mark} {str(t.id).rjust(width)}  {t.task}")
    return "\n".join(lines)


def _cell(value: Any) -> str:
    return "NULL" if value is None else str(value)


def render_result(result: QueryResult) -> str:
    """Aligned text table for row results, a one-liner otherwise."""
    if not result.success:
        return f"Error: {result.error}"

    if not result.columns:
        return f"OK ({result.affected_rows} rows affected)"

    table = [[_cell(v) for v in row] for row in result.rows]
    widths = [len(c) for c in result.columns]
    for row in table:
        for i, v in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(v))

    def fmt(cells: list[str]) -> str:
        padded = [(cells[i] if i < len(cells) else "").ljust(w) for i, w in enumerate(widths)]
        return " | ".join(padded).rstrip()

    lines = [fmt(result.columns), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(row) for row in table)
    lines.append(f"({len(table)} rows)")
    return "\n".join(lines)
