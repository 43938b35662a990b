# src/simpletodo/tasks/task_models.py

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any

ID_MODULUS = 1_000_000


def _as_int(raw: Any) -> int:
    """The server sends every cell as text ("42"), so accept both forms."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        s = raw.strip()
        try:
            return int(s)
        except ValueError:
            f = float(s)
            if f.is_integer():
                return int(f)
    raise ValueError(f"not an integer: {raw!r}")


def _as_flag(raw: Any) -> int:
    try:
        return 1 if _as_int(raw) == 1 else 0
    except ValueError:
        return 0


@dataclass(slots=True, frozen=True)
class Task:
    """One row of the todos table."""

    id: int
    task: str
    is_done: int = 0

    @property
    def done(self) -> bool:
        return self.is_done == 1

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Task:
        """
        Build a Task from a name->value record.

        Raises ValueError when the record has no usable id.
        """
        if "id" not in record:
            raise ValueError("row has no 'id' column")
        text = record.get("task")
        return cls(
            id=_as_int(record["id"]),
            task="" if text is None else str(text),
            is_done=_as_flag(record.get("is_done")),
        )


def next_task_id(now_ms: int, taken: Collection[int] = ()) -> int:
    """
    Time-based id: milliseconds modulo 1,000,000.

    Ids already in `taken` are skipped by counting upward (wrapping at the modulus).
    """
    candidate = now_ms % ID_MODULUS
    if len(taken) >= ID_MODULUS:
        raise ValueError("no free task ids left")
    while candidate in taken:
        candidate = (candidate + 1) % ID_MODULUS
    return candidate
