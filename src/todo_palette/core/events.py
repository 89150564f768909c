# src/todo_palette/core/events.py

from __future__ import annotations

"""
Events a rendering surface feeds into TodoController.dispatch().

Pointer/widget events carry ids or text; KeyDown carries a raw key press.
Key names follow DOM KeyboardEvent.key values ("ArrowUp", "Escape", " ", ...).
"""

from dataclasses import dataclass

from ..todos.todo_models import Filter

KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"
KEY_DELETE = "Delete"
KEY_SPACE = " "
KEY_ARROW_UP = "ArrowUp"
KEY_ARROW_DOWN = "ArrowDown"
KEY_HELP = "?"

FILTER_KEYS: dict[str, Filter] = {
    "1": Filter.ALL,
    "2": Filter.PENDING,
    "3": Filter.COMPLETED,
}


@dataclass(slots=True, frozen=True)
class Activate:
    todo_id: int


@dataclass(slots=True, frozen=True)
class Toggle:
    todo_id: int


@dataclass(slots=True, frozen=True)
class Delete:
    todo_id: int


@dataclass(slots=True, frozen=True)
class StartEdit:
    todo_id: int


@dataclass(slots=True, frozen=True)
class UpdateDraft:
    text: str


@dataclass(slots=True, frozen=True)
class SubmitEdit:
    text: str | None = None


@dataclass(slots=True, frozen=True)
class Blur:
    pass


@dataclass(slots=True, frozen=True)
class CancelEdit:
    pass


@dataclass(slots=True, frozen=True)
class OpenAdd:
    pass


@dataclass(slots=True, frozen=True)
class SubmitAdd:
    text: str | None = None


@dataclass(slots=True, frozen=True)
class SelectSuggestion:
    text: str


@dataclass(slots=True, frozen=True)
class SetFilter:
    filter: Filter


@dataclass(slots=True, frozen=True)
class OpenHelp:
    pass


@dataclass(slots=True, frozen=True)
class CloseHelp:
    pass


@dataclass(slots=True, frozen=True)
class KeyDown:
    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    target_is_text_field: bool = False

    @property
    def is_open_shortcut(self) -> bool:
        # Ctrl+K or Cmd+K
        return (self.ctrl or self.meta) and self.key.lower() == "k"

    @property
    def filter_shortcut(self) -> Filter | None:
        if not self.ctrl:
            return None
        return FILTER_KEYS.get(self.key)


Event = (
    Activate
    | Toggle
    | Delete
    | StartEdit
    | UpdateDraft
    | SubmitEdit
    | Blur
    | CancelEdit
    | OpenAdd
    | SubmitAdd
    | SelectSuggestion
    | SetFilter
    | OpenHelp
    | CloseHelp
    | KeyDown
)


def parse_key_combo(combo: str, *, target_is_text_field: bool = False) -> KeyDown | None:
    """
    Parse a human key combo ("ctrl+k", "cmd+k", "down", "space", "ctrl+2") into a KeyDown.
    Returns None for an empty combo.
    """
    parts = [p.strip() for p in (combo or "").split("+")]
    name = parts[-1]
    if not name:
        return None

    ctrl = meta = shift = False
    for mod in parts[:-1]:
        m = mod.lower()
        if m in ("ctrl", "control", "ctl"):
            ctrl = True
        elif m in ("cmd", "meta", "command", "super", "win"):
            meta = True
        elif m == "shift":
            shift = True

    key = _KEY_ALIASES.get(name.lower(), name)
    return KeyDown(
        key=key,
        ctrl=ctrl,
        meta=meta,
        shift=shift,
        target_is_text_field=target_is_text_field,
    )


_KEY_ALIASES: dict[str, str] = {
    "enter": KEY_ENTER,
    "return": KEY_ENTER,
    "esc": KEY_ESCAPE,
    "escape": KEY_ESCAPE,
    "del": KEY_DELETE,
    "delete": KEY_DELETE,
    "space": KEY_SPACE,
    "up": KEY_ARROW_UP,
    "arrowup": KEY_ARROW_UP,
    "down": KEY_ARROW_DOWN,
    "arrowdown": KEY_ARROW_DOWN,
    "?": KEY_HELP,
    "help": KEY_HELP,
}
