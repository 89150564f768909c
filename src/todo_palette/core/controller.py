# src/todo_palette/core/controller.py

from __future__ import annotations

"""
Todo controller: the interaction state machine.

It owns every cursor of the UI:
- the todo store (through its mutation API only),
- the active filter,
- the selection,
- the interaction mode (exactly one of Browsing / Editing / AddSession / HelpOverlay).

Surfaces feed events into dispatch() and re-render from view(). dispatch()
returns True when the event was consumed and False when the surface should let
the default field behaviour happen (typing into a text input, for example).
"""

import dataclasses
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..todos.filters import TodoCounts, counts, visible
from ..todos.suggestions import DEFAULT_SUGGESTIONS, PlaceholderRotator, filter_suggestions
from ..todos.todo_models import MAX_TEXT_LENGTH, Filter, Todo
from ..todos.todo_store import TodoStore
from . import events as ev
from .modes import BROWSING, HELP_OVERLAY, AddSession, Browsing, Editing, HelpOverlay, Mode
from .selection import Selection

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TodoView:
    """Everything a surface needs to draw one frame."""

    todos: tuple[Todo, ...]
    selected_id: int | None
    mode: Mode
    filter: Filter
    counts: TodoCounts
    placeholder: str
    suggestions: tuple[str, ...]


class TodoController:
    def __init__(
        self,
        store: TodoStore,
        *,
        suggestions: Sequence[str] = DEFAULT_SUGGESTIONS,
        placeholder: PlaceholderRotator | None = None,
        max_text_length: int = MAX_TEXT_LENGTH,
    ) -> None:
        self._store = store
        self._filter = Filter.ALL
        self._selection = Selection(store, lambda: self._filter)
        self._mode: Mode = BROWSING
        self._suggestions = tuple(suggestions)
        self._placeholder = placeholder or PlaceholderRotator()
        self._max_text_length = max(1, int(max_text_length))

        self._handlers: dict[type, Callable[[Any], bool]] = {
            ev.KeyDown: self._on_key,
            ev.Activate: self._on_activate,
            ev.Toggle: self._on_toggle,
            ev.Delete: self._on_delete,
            ev.StartEdit: self._on_start_edit,
            ev.UpdateDraft: self._on_update_draft,
            ev.SubmitEdit: self._on_submit_edit,
            ev.Blur: self._on_blur,
            ev.CancelEdit: self._on_cancel_edit,
            ev.OpenAdd: self._on_open_add,
            ev.SubmitAdd: self._on_submit_add,
            ev.SelectSuggestion: self._on_select_suggestion,
            ev.SetFilter: self._on_set_filter,
            ev.OpenHelp: self._on_open_help,
            ev.CloseHelp: self._on_close_help,
        }

    # ---- read side ----

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def filter(self) -> Filter:
        return self._filter

    @property
    def selected_id(self) -> int | None:
        return self._selection.selected_id

    @property
    def placeholder(self) -> PlaceholderRotator:
        return self._placeholder

    def todos(self) -> tuple[Todo, ...]:
        return self._store.all()

    def visible(self) -> list[Todo]:
        return visible(self._store.all(), self._filter)

    def view(self) -> TodoView:
        all_todos = self._store.all()
        draft = self._mode.draft if isinstance(self._mode, AddSession) else ""
        return TodoView(
            todos=tuple(visible(all_todos, self._filter)),
            selected_id=self._selection.selected_id,
            mode=self._mode,
            filter=self._filter,
            counts=counts(all_todos),
            placeholder=self._placeholder.current,
            suggestions=tuple(filter_suggestions(self._suggestions, draft)),
        )

    # ---- lifecycle ----

    def load(self) -> int:
        """Reload the collection from storage and reset every cursor."""
        total = self._store.load()
        self._filter = Filter.ALL
        self._selection.clear()
        self._mode = BROWSING
        return total

    # ---- dispatch ----

    def dispatch(self, event: ev.Event) -> bool:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.debug("Unknown event ignored: %r", event)
            return False

        before = self._mode
        handled = handler(event)
        self._selection.prune()

        if type(before) is not type(self._mode):
            logger.debug("Mode %s -> %s (%s)", before.kind, self._mode.kind, type(event).__name__)
        return handled

    # ---- transitions ----

    def _set_filter(self, new_filter: Filter) -> None:
        self._filter = new_filter
        self._selection.clear()
        logger.debug("Filter -> %s", new_filter.value)

    def _cap(self, text: str) -> str:
        return text[: self._max_text_length]

    def _escape(self) -> bool:
        if isinstance(self._mode, AddSession):
            logger.debug("Add session cancelled")
        elif isinstance(self._mode, Editing):
            logger.debug("Edit cancelled id=%s", self._mode.todo_id)
        self._mode = BROWSING
        return True

    def _commit_edit(self, text: str | None) -> bool:
        mode = self._mode
        if not isinstance(mode, Editing):
            return False
        self._store.edit(mode.todo_id, mode.draft if text is None else text)
        self._mode = BROWSING
        return True

    def _commit_add(self, text: str | None) -> bool:
        mode = self._mode
        if not isinstance(mode, AddSession):
            return False
        self._store.add(mode.draft if text is None else text)
        self._mode = BROWSING
        return True

    def _open_add_session(self) -> None:
        # The palette takes focus: an open edit commits as on blur, an add draft resets.
        if isinstance(self._mode, Editing):
            self._commit_edit(None)
        self._mode = AddSession(draft="")
        self._selection.clear()

    # ---- handlers ----

    def _on_key(self, e: ev.KeyDown) -> bool:
        if e.is_open_shortcut:
            self._open_add_session()
            return True
        if e.key == ev.KEY_ESCAPE:
            return self._escape()

        mode = self._mode
        if isinstance(mode, AddSession):
            if e.key == ev.KEY_ENTER:
                return self._commit_add(None)
            return False
        if isinstance(mode, Editing):
            if e.key == ev.KEY_ENTER:
                return self._commit_edit(None)
            return False
        if isinstance(mode, HelpOverlay):
            return True

        # Browsing: keys typed into a text field belong to the field.
        if e.target_is_text_field:
            return False

        target = e.filter_shortcut
        if target is not None:
            self._set_filter(target)
            return True

        if e.key == ev.KEY_ARROW_DOWN:
            self._selection.move_next()
            return True
        if e.key == ev.KEY_ARROW_UP:
            self._selection.move_previous()
            return True

        has_selection = self._selection.selected_id is not None
        if e.key == ev.KEY_DELETE:
            if has_selection:
                self._selection.delete_selected()
            return has_selection
        if e.key == ev.KEY_SPACE:
            if has_selection:
                self._selection.toggle_selected()
            return has_selection
        if e.key == ev.KEY_ENTER:
            # Confirms the current selection; editing starts through StartEdit.
            return has_selection
        if e.key == ev.KEY_HELP and not (e.ctrl or e.meta):
            self._mode = HELP_OVERLAY
            return True
        return False

    def _on_activate(self, e: ev.Activate) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        return self._selection.select(e.todo_id)

    def _on_toggle(self, e: ev.Toggle) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        return self._store.toggle(e.todo_id)

    def _on_delete(self, e: ev.Delete) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        deleted = self._store.delete(e.todo_id)
        self._selection.forget(e.todo_id)
        return deleted

    def _on_start_edit(self, e: ev.StartEdit) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        todo = self._store.get(e.todo_id)
        if todo is None:
            logger.debug("start edit ignored: unknown id=%s", e.todo_id)
            return False
        self._mode = Editing(todo_id=todo.id, draft=todo.text)
        return True

    def _on_update_draft(self, e: ev.UpdateDraft) -> bool:
        mode = self._mode
        if isinstance(mode, (AddSession, Editing)):
            self._mode = dataclasses.replace(mode, draft=self._cap(e.text or ""))
            return True
        return False

    def _on_submit_edit(self, e: ev.SubmitEdit) -> bool:
        return self._commit_edit(e.text)

    def _on_blur(self, e: ev.Blur) -> bool:
        return self._commit_edit(None)

    def _on_cancel_edit(self, e: ev.CancelEdit) -> bool:
        if not isinstance(self._mode, Editing):
            return False
        return self._escape()

    def _on_open_add(self, e: ev.OpenAdd) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        self._open_add_session()
        return True

    def _on_submit_add(self, e: ev.SubmitAdd) -> bool:
        return self._commit_add(e.text)

    def _on_select_suggestion(self, e: ev.SelectSuggestion) -> bool:
        return self._commit_add(e.text)

    def _on_set_filter(self, e: ev.SetFilter) -> bool:
        if not isinstance(self._mode, Browsing):
            return False
        self._set_filter(e.filter)
        return True

    def _on_open_help(self, e: ev.OpenHelp) -> bool:
        # The add palette lists "help and shortcuts" as one of its items.
        if not isinstance(self._mode, (Browsing, AddSession)):
            return False
        self._mode = HELP_OVERLAY
        return True

    def _on_close_help(self, e: ev.CloseHelp) -> bool:
        if not isinstance(self._mode, HelpOverlay):
            return False
        self._mode = BROWSING
        return True
