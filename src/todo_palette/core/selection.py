# src/todo_palette/core/selection.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..todos.filters import visible
from ..todos.todo_models import Filter, Todo
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)


class Selection:
    """
    Single keyboard cursor over the *visible* todos.

    The selected id is only meaningful while that todo is visible under the
    current filter; navigation always recomputes the visible list from the store.
    """

    def __init__(self, store: TodoStore, current_filter: Callable[[], Filter]) -> None:
        self._store = store
        self._current_filter = current_filter
        self._selected_id: int | None = None

    @property
    def selected_id(self) -> int | None:
        return self._selected_id

    def _visible(self) -> list[Todo]:
        return visible(self._store.all(), self._current_filter())

    def _visible_index(self, items: list[Todo]) -> int | None:
        if self._selected_id is None:
            return None
        for i, t in enumerate(items):
            if t.id == self._selected_id:
                return i
        return None

    def clear(self) -> None:
        self._selected_id = None

    def current(self) -> Todo | None:
        items = self._visible()
        idx = self._visible_index(items)
        return None if idx is None else items[idx]

    def select(self, todo_id: int) -> bool:
        if any(t.id == todo_id for t in self._visible()):
            self._selected_id = todo_id
            return True
        logger.debug("select ignored: id=%s not visible", todo_id)
        return False

    def move_next(self) -> int | None:
        items = self._visible()
        if not items:
            return self._selected_id
        idx = self._visible_index(items)
        idx = 0 if idx is None else (idx + 1) % len(items)
        self._selected_id = items[idx].id
        return self._selected_id

    def move_previous(self) -> int | None:
        items = self._visible()
        if not items:
            return self._selected_id
        n = len(items)
        idx = self._visible_index(items)
        idx = n - 1 if idx is None else (idx - 1 + n) % n
        self._selected_id = items[idx].id
        return self._selected_id

    def toggle_selected(self) -> bool:
        if self._selected_id is None:
            return False
        return self._store.toggle(self._selected_id)

    def delete_selected(self) -> bool:
        if self._selected_id is None:
            return False
        deleted = self._store.delete(self._selected_id)
        self._selected_id = None
        return deleted

    def prune(self) -> None:
        """Drop the selection once its todo left the visible set (toggled out of the filter, deleted)."""
        if self._selected_id is not None and self._visible_index(self._visible()) is None:
            self._selected_id = None

    def forget(self, todo_id: int) -> None:
        """Called after a todo is deleted through any path."""
        if self._selected_id == todo_id:
            self._selected_id = None
