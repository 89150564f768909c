# src/todo_palette/todos/todo_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

MAX_TEXT_LENGTH = 100


class Filter(StrEnum):
    """View predicate over the todo collection (process-wide, never persisted)."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: str | None) -> Filter | None:
        if not raw:
            return None
        key = raw.strip().lower()
        return _FILTER_ALIASES.get(key)


_FILTER_ALIASES: dict[str, Filter] = {
    "all": Filter.ALL,
    "1": Filter.ALL,
    "todas": Filter.ALL,
    "pending": Filter.PENDING,
    "2": Filter.PENDING,
    "pendentes": Filter.PENDING,
    "completed": Filter.COMPLETED,
    "done": Filter.COMPLETED,
    "3": Filter.COMPLETED,
    "concluidas": Filter.COMPLETED,
}


@dataclass(slots=True, frozen=True)
class Todo:
    id: int
    text: str
    completed: bool
    created_at: str

    def to_record(self) -> dict[str, Any]:
        """Storage representation (field names are part of the on-disk format)."""
        return {
            "id": self.id,
            "texto": self.text,
            "concluida": self.completed,
            "criadaEm": self.created_at,
        }

    @classmethod
    def from_record(cls, raw: Any, max_length: int = MAX_TEXT_LENGTH) -> Todo | None:
        """Parse one stored record; returns None for anything malformed.

        Text is trimmed and capped like user input, so hand-edited slots
        cannot bring padded or oversized text into the store.
        """
        if not isinstance(raw, dict):
            return None

        todo_id = raw.get("id")
        text = raw.get("texto")
        completed = raw.get("concluida", False)
        created_at = raw.get("criadaEm")

        # bool is an int subclass; an id of True is not an id.
        if isinstance(todo_id, bool) or not isinstance(todo_id, (int, float)):
            return None
        if not isinstance(text, str):
            return None
        text = clean_text(text, max_length)
        if not text:
            return None
        if not isinstance(created_at, str):
            return None

        return cls(
            id=int(todo_id),
            text=text,
            completed=bool(completed),
            created_at=created_at,
        )


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-02T03:04:05.678Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clean_text(text: str | None, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Trim and cap todo text. Returns "" when nothing usable is left."""
    if not text:
        return ""
    return text.strip()[: max(1, int(max_length))].strip()
