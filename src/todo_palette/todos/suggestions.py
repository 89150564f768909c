# src/todo_palette/todos/suggestions.py

from __future__ import annotations

"""
Add-palette helpers: suggested entries and the rotating input placeholder.

The placeholder rotation is purely cosmetic. It never touches the todo
collection, the filter, the selection or the interaction mode.
"""

import asyncio
import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTIONS: tuple[str, ...] = (
    "Buy milk",
    "Study Python",
    "Exercise",
    "Read a book",
    "Tidy the desk",
)

DEFAULT_PLACEHOLDERS: tuple[str, ...] = (
    "Add a new task...",
    "What needs to be done?",
    "e.g. Buy bread",
    "e.g. Study Python",
    "e.g. Call the client",
)


def filter_suggestions(suggestions: Sequence[str], draft: str | None, limit: int = 5) -> list[str]:
    """
    Suggestions matching the current draft.

    - empty draft -> the first `limit` suggestions
    - otherwise case-insensitive substring match, minus exact matches
    """
    limit = max(0, int(limit))
    needle = (draft or "").strip().lower()
    if not needle:
        return list(suggestions[:limit])
    out = [s for s in suggestions if needle in s.lower() and s.lower() != needle]
    return out[:limit]


class PlaceholderRotator:
    def __init__(self, placeholders: Sequence[str] = DEFAULT_PLACEHOLDERS) -> None:
        self._placeholders = tuple(p for p in placeholders if p) or DEFAULT_PLACEHOLDERS
        self._index = 0

    @property
    def current(self) -> str:
        return self._placeholders[self._index]

    def advance(self) -> str:
        self._index = (self._index + 1) % len(self._placeholders)
        return self.current


async def run_placeholder_rotation(rotator: PlaceholderRotator, *, interval_seconds: float = 3.0) -> None:
    """
    Advance the placeholder every interval_seconds.

    To stop the rotation, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    while True:
        await asyncio.sleep(sleep_s)
        placeholder = rotator.advance()
        logger.debug("Placeholder -> %r", placeholder)
