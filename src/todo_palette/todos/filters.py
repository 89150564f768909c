# src/todo_palette/todos/filters.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .todo_models import Filter, Todo


@dataclass(slots=True, frozen=True)
class TodoCounts:
    total: int
    pending: int
    completed: int


def visible(todos: Iterable[Todo], active: Filter) -> list[Todo]:
    """Todos shown under the active filter, in collection order. Always recompute; never cache."""
    if active == Filter.PENDING:
        return [t for t in todos if not t.completed]
    if active == Filter.COMPLETED:
        return [t for t in todos if t.completed]
    return list(todos)


def counts(todos: Iterable[Todo]) -> TodoCounts:
    total = 0
    completed = 0
    for t in todos:
        total += 1
        if t.completed:
            completed += 1
    return TodoCounts(total=total, pending=total - completed, completed=completed)


def parse_filter(raw: str | None) -> Filter | None:
    return Filter.from_raw(raw)
