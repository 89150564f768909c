# src/todo_palette/core/modes.py

from __future__ import annotations

"""
Interaction modes.

Exactly one mode is active at a time. Modes are immutable values; a
transition replaces the controller's mode instead of flipping flags.
"""

from dataclasses import dataclass
from enum import StrEnum


class ModeKind(StrEnum):
    BROWSING = "browsing"
    EDITING = "editing"
    ADD_SESSION = "add_session"
    HELP_OVERLAY = "help_overlay"


@dataclass(slots=True, frozen=True)
class Browsing:
    kind = ModeKind.BROWSING


@dataclass(slots=True, frozen=True)
class Editing:
    todo_id: int
    draft: str = ""

    kind = ModeKind.EDITING


@dataclass(slots=True, frozen=True)
class AddSession:
    draft: str = ""

    kind = ModeKind.ADD_SESSION


@dataclass(slots=True, frozen=True)
class HelpOverlay:
    kind = ModeKind.HELP_OVERLAY


Mode = Browsing | Editing | AddSession | HelpOverlay

BROWSING = Browsing()
HELP_OVERLAY = HelpOverlay()
