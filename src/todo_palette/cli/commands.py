# src/todo_palette/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core import events as ev
from ..core.modes import AddSession, Editing, HelpOverlay
from ..core.state import AppState
from ..todos.filters import parse_filter
from ..todos.todo_models import Todo

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console surface (/help, /add, /key, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the re-rendered list says it all) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _row(state: AppState, args: list[str]) -> Todo | None:
    """Resolve a 1-based row number of the visible list."""
    if not args:
        return None
    try:
        n = int(args[0])
    except ValueError:
        return None
    items = state.controller.visible()
    if 1 <= n <= len(items):
        return items[n - 1]
    return None


def open_add_palette(state: AppState) -> None:
    ctl = state.controller
    if not ctl.dispatch(ev.OpenAdd()):
        # Not browsing: the global shortcut still forces the palette open.
        ctl.dispatch(ev.KeyDown(key="k", ctrl=True))


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    view = state.controller.view()
    backend = getattr(state.settings, "storage_backend", "sqlite")
    return (
        "Status:\n"
        f"  Todos: {view.counts.total} total, {view.counts.pending} pending, "
        f"{view.counts.completed} completed\n"
        f"  Filter: {view.filter.value}\n"
        f"  Mode: {view.mode.kind.value}\n"
        f"  Storage: {backend}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return ""


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add          -> open the add palette
    /add <text>   -> add right away
    """
    open_add_palette(state)
    if not args:
        return "Type the new task and press Enter (Esc to cancel)."
    text = " ".join(args)
    before = len(state.controller.todos())
    state.controller.dispatch(ev.SubmitAdd(text))
    if len(state.controller.todos()) == before:
        return "Nothing added (empty text)."
    return ""


def cmd_suggest(state: AppState, args: list[str]) -> str:
    ctl = state.controller
    if not isinstance(ctl.mode, AddSession):
        return "Open the add palette first (/add or /key ctrl+k)."
    suggestions = ctl.view().suggestions
    try:
        n = int(args[0]) if args else 0
    except ValueError:
        n = 0
    if not 1 <= n <= len(suggestions):
        return "Usage: /suggest <n> (see the numbered suggestions)."
    ctl.dispatch(ev.SelectSuggestion(suggestions[n - 1]))
    return ""


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n>          -> start editing row n (type the new text next)
    /edit <n> <text>   -> replace the text right away
    """
    todo = _row(state, args)
    if todo is None:
        return "Usage: /edit <n> [text]"
    if not state.controller.dispatch(ev.StartEdit(todo.id)):
        return "Cannot edit right now (finish or cancel the current action first)."
    if len(args) > 1:
        state.controller.dispatch(ev.SubmitEdit(" ".join(args[1:])))
        return ""
    return f'Editing "{todo.text}". Type the new text and press Enter (Esc to cancel).'


def cmd_select(state: AppState, args: list[str]) -> str:
    todo = _row(state, args)
    if todo is None:
        return "Usage: /select <n>"
    state.controller.dispatch(ev.Activate(todo.id))
    return ""


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        if not state.controller.dispatch(ev.KeyDown(key=ev.KEY_SPACE)):
            return "Nothing selected."
        return ""
    todo = _row(state, args)
    if todo is None:
        return "Usage: /toggle [n]"
    state.controller.dispatch(ev.Toggle(todo.id))
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        if not state.controller.dispatch(ev.KeyDown(key=ev.KEY_DELETE)):
            return "Nothing selected."
        return ""
    todo = _row(state, args)
    if todo is None:
        return "Usage: /delete [n]"
    state.controller.dispatch(ev.Delete(todo.id))
    return ""


def cmd_filter(state: AppState, args: list[str]) -> str:
    target = parse_filter(args[0]) if args else None
    if target is None:
        return "Usage: /filter all|pending|completed"
    if not state.controller.dispatch(ev.SetFilter(target)):
        return "Cannot switch filters right now (press Esc first)."
    return ""


def cmd_key(state: AppState, args: list[str]) -> str:
    """
    /key <combo>  -> feed a raw key press, e.g. ctrl+k, down, up, space, delete, enter, esc, ctrl+2
    """
    key = ev.parse_key_combo(" ".join(args))
    if key is None:
        return "Usage: /key <combo>  (e.g. ctrl+k, down, space, ctrl+2)"
    if not state.controller.dispatch(key):
        return f"Key {key.key!r} had no effect."
    return ""


def cmd_draft(state: AppState, args: list[str]) -> str:
    if not isinstance(state.controller.mode, (AddSession, Editing)):
        return "No text field is open."
    state.controller.dispatch(ev.UpdateDraft(" ".join(args)))
    return ""


def cmd_cancel(state: AppState, args: list[str]) -> str:
    state.controller.dispatch(ev.KeyDown(key=ev.KEY_ESCAPE))
    return ""


def cmd_shortcuts(state: AppState, args: list[str]) -> str:
    if not state.controller.dispatch(ev.OpenHelp()):
        return "Press Esc first."
    return ""


def cmd_close(state: AppState, args: list[str]) -> str:
    if not isinstance(state.controller.mode, HelpOverlay):
        return "Nothing to close."
    state.controller.dispatch(ev.CloseHelp())
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h"])
registry.register("status", cmd_status, help_text="Show counts, filter, mode and storage backend.")
registry.register("list", cmd_list, help_text="Show the list again.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add [text] (no text opens the palette).", aliases=["a"])
registry.register("suggest", cmd_suggest, help_text="Add a suggested task: /suggest <n>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> [text].", aliases=["e"])
registry.register("select", cmd_select, help_text="Select a task: /select <n>.", aliases=["s"])
registry.register("toggle", cmd_toggle, help_text="Complete/reopen: /toggle [n] (no n = selected).", aliases=["t"])
registry.register("delete", cmd_delete, help_text="Delete: /delete [n] (no n = selected).", aliases=["d", "rm"])
registry.register("filter", cmd_filter, help_text="Switch filter: /filter all|pending|completed.", aliases=["f"])
registry.register("key", cmd_key, help_text="Press a key: /key ctrl+k | up | down | space | delete | enter | esc | ctrl+1..3.", aliases=["k"])
registry.register("draft", cmd_draft, help_text="Set the text of the open field without submitting.")
registry.register("cancel", cmd_cancel, help_text="Same as Esc.", aliases=["esc"])
registry.register("shortcuts", cmd_shortcuts, help_text="Show keyboard shortcuts.", aliases=["?"])
registry.register("close", cmd_close, help_text="Close the shortcuts overlay.")
