# src/todo_palette/todos/todo_store.py

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable

from ..core.ports import StorageGateway
from .todo_models import MAX_TEXT_LENGTH, Todo, clean_text, utc_now_iso

logger = logging.getLogger(__name__)


class TodoStore:
    """
    Canonical, ordered todo collection.

    Ordering:
    - add() prepends (most recent first)
    - toggle()/edit() never reorder
    - delete() keeps the order of the remainder

    Todos are frozen; toggle()/edit() swap in an updated copy at the same index.
    Every mutation is followed by a full-state gateway write before returning.
    Write failures are logged; the in-memory collection stays authoritative.
    """

    def __init__(
        self,
        gateway: StorageGateway,
        *,
        max_text_length: int = MAX_TEXT_LENGTH,
        clock_ms: Callable[[], int] | None = None,
        now_iso: Callable[[], str] | None = None,
    ) -> None:
        self._gateway = gateway
        self._todos: list[Todo] = []
        self._max_text_length = max(1, int(max_text_length))
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._now_iso = now_iso or utc_now_iso

    # ---- low-level helpers ----

    def _persist(self) -> None:
        try:
            self._gateway.save(self._todos)
        except Exception:
            logger.exception("Failed to persist %d todos", len(self._todos))

    def _index_of(self, todo_id: int) -> int | None:
        for i, t in enumerate(self._todos):
            if t.id == todo_id:
                return i
        return None

    def _next_id(self) -> int:
        # Millisecond timestamps collide on fast adds; keep ids strictly increasing.
        candidate = int(self._clock_ms())
        if self._todos:
            candidate = max(candidate, max(t.id for t in self._todos) + 1)
        return candidate

    # ---- public API ----

    def load(self) -> int:
        """Replace the collection with what the gateway holds. Returns the count."""
        self._todos = list(self._gateway.load())
        logger.info("TodoStore loaded total=%d", len(self._todos))
        return len(self._todos)

    def all(self) -> tuple[Todo, ...]:
        return tuple(self._todos)

    def get(self, todo_id: int | None) -> Todo | None:
        if todo_id is None:
            return None
        idx = self._index_of(todo_id)
        return None if idx is None else self._todos[idx]

    def __len__(self) -> int:
        return len(self._todos)

    def add(self, text: str | None) -> Todo | None:
        cleaned = clean_text(text, self._max_text_length)
        if not cleaned:
            logger.debug("add ignored: empty text")
            return None

        todo = Todo(
            id=self._next_id(),
            text=cleaned,
            completed=False,
            created_at=self._now_iso(),
        )
        self._todos.insert(0, todo)
        self._persist()
        logger.debug("Todo added id=%s", todo.id)
        return todo

    def toggle(self, todo_id: int | None) -> bool:
        idx = None if todo_id is None else self._index_of(todo_id)
        if idx is None:
            logger.debug("toggle ignored: unknown id=%s", todo_id)
            return False
        todo = dataclasses.replace(self._todos[idx], completed=not self._todos[idx].completed)
        self._todos[idx] = todo
        self._persist()
        logger.debug("Todo toggled id=%s completed=%s", todo.id, todo.completed)
        return True

    def edit(self, todo_id: int | None, new_text: str | None) -> bool:
        """Replace the text; an empty (after trim) edit is discarded, not applied."""
        idx = None if todo_id is None else self._index_of(todo_id)
        if idx is None:
            logger.debug("edit ignored: unknown id=%s", todo_id)
            return False
        todo = self._todos[idx]
        cleaned = clean_text(new_text, self._max_text_length)
        if not cleaned:
            logger.debug("edit discarded: empty text id=%s", todo.id)
            return False
        todo = dataclasses.replace(todo, text=cleaned)
        self._todos[idx] = todo
        self._persist()
        logger.debug("Todo edited id=%s", todo.id)
        return True

    def delete(self, todo_id: int | None) -> bool:
        idx = None if todo_id is None else self._index_of(todo_id)
        if idx is None:
            logger.debug("delete ignored: unknown id=%s", todo_id)
            return False
        del self._todos[idx]
        self._persist()
        logger.debug("Todo deleted id=%s", todo_id)
        return True
