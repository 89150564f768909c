# src/todo_palette/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from ..cli.commands import open_add_palette
from ..cli.commands import registry as command_registry
from ..core import events as ev
from ..core.controller import TodoView
from ..core.modes import AddSession, Editing, HelpOverlay
from ..core.state import AppState
from ..todos.suggestions import run_placeholder_rotation
from ..todos.todo_models import Filter

logger = logging.getLogger(__name__)

SHORTCUTS = (
    ("Ctrl+K / Cmd+K", "open the add palette", "/key ctrl+k"),
    ("Esc", "close / cancel", "/key esc"),
    ("Enter", "confirm", "/key enter"),
    ("Up / Down", "move the selection (wraps)", "/key up, /key down"),
    ("Space", "complete / reopen the selected task", "/key space"),
    ("Delete", "delete the selected task", "/key delete"),
    ("Ctrl+1 / 2 / 3", "show all / pending / completed", "/key ctrl+1"),
    ("?", "show these shortcuts", "/shortcuts"),
)

_FILTER_LABELS = {
    Filter.ALL: "All",
    Filter.PENDING: "Pending",
    Filter.COMPLETED: "Completed",
}

ReadLine = Callable[[str], str]


class ConsoleRenderer:
    """Plain-text rendering surface. ANSI styling only when writing to a TTY."""

    def __init__(self, stream: TextIO | None = None, *, color: bool = True) -> None:
        self._stream = stream or sys.stdout
        try:
            is_tty = self._stream.isatty()
        except Exception:
            is_tty = False
        self._color = color and is_tty

    def _style(self, text: str, code: str) -> str:
        if not self._color:
            return text
        return f"\033[{code}m{text}\033[0m"

    def _write(self, text: str = "") -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

    def message(self, text: str) -> None:
        self._write(text)

    def render(self, view: TodoView) -> None:
        c = view.counts
        badges = []
        for f, n in ((Filter.ALL, c.total), (Filter.PENDING, c.pending), (Filter.COMPLETED, c.completed)):
            label = f"{_FILTER_LABELS[f]} ({n})"
            badges.append(self._style(f"[{label}]", "1") if f == view.filter else f" {label} ")
        self._write("")
        self._write(" ".join(badges))

        mode = view.mode
        if not view.todos:
            self._write("  No tasks found.")
        for i, todo in enumerate(view.todos, start=1):
            marker = ">" if todo.id == view.selected_id else " "
            box = "[x]" if todo.completed else "[ ]"
            if isinstance(mode, Editing) and mode.todo_id == todo.id:
                text = self._style(f"{mode.draft}_", "4")
            elif todo.completed:
                text = self._style(todo.text, "9")
            else:
                text = todo.text
            line = f"{marker} {i:>2}. {box} {text}"
            self._write(self._style(line, "7") if marker == ">" else line)

        if isinstance(mode, AddSession):
            self._write("")
            self._write(f"  New task: {mode.draft or view.placeholder}")
            if view.suggestions:
                self._write("  Suggestions:")
                for i, s in enumerate(view.suggestions, start=1):
                    self._write(f"    {i}. {s}")
        elif isinstance(mode, HelpOverlay):
            self._write("")
            self._write("  Keyboard shortcuts (Esc or /close to dismiss):")
            for keys, what, console in SHORTCUTS:
                self._write(f"    {keys:<16} {what:<38} {console}")


def _prompt(view: TodoView) -> str:
    mode = view.mode
    if isinstance(mode, AddSession):
        return "add> "
    if isinstance(mode, Editing):
        return "edit> "
    if isinstance(mode, HelpOverlay):
        return "help> "
    return "todo> "


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one console line.

    - "/..."                     -> slash command
    - text in AddSession/Editing -> draft submitted with Enter
    - text while browsing        -> quick add
    - empty line                 -> Enter
    """
    ctl = state.controller

    if line.startswith("/"):
        try:
            return command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            return "Internal error while handling a command."

    mode = ctl.mode
    if not line:
        if isinstance(mode, (AddSession, Editing)):
            ctl.dispatch(ev.KeyDown(key=ev.KEY_ENTER, target_is_text_field=True))
        return None

    if isinstance(mode, (AddSession, Editing)):
        ctl.dispatch(ev.UpdateDraft(line))
        ctl.dispatch(ev.KeyDown(key=ev.KEY_ENTER, target_is_text_field=True))
        return None
    if isinstance(mode, HelpOverlay):
        return "Press Esc (/cancel) or /close to dismiss the shortcuts."

    open_add_palette(state)
    ctl.dispatch(ev.SubmitAdd(line))
    return None


def _default_read_line(prompt: str) -> str:
    return input(prompt)


async def run_console_loop(
    state: AppState,
    *,
    read_line: ReadLine | None = None,
    stream: TextIO | None = None,
) -> None:
    settings = state.settings
    ctl = state.controller
    read = read_line or _default_read_line
    renderer = ConsoleRenderer(stream, color=bool(getattr(settings, "console_color", True)))

    logger.info("Console connector started.")
    renderer.message("Type a task to add it. Use /help for commands, /shortcuts for keys, /exit to quit.")

    rotation = asyncio.create_task(
        run_placeholder_rotation(
            ctl.placeholder,
            interval_seconds=float(getattr(settings, "placeholder_interval", 3.0)),
        )
    )

    try:
        renderer.render(ctl.view())
        while True:
            try:
                # Only the blocking read runs off-loop; state is touched on the loop alone.
                raw = await asyncio.to_thread(read, _prompt(ctl.view()))
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                renderer.message("")
                break

            line = raw.strip()
            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            reply = handle_line(state, line)
            if reply:
                renderer.message(reply)
            renderer.render(ctl.view())
    finally:
        rotation.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await rotation

    logger.info("Console connector finished.")
