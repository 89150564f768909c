# src/todo_palette/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps storage backends and rendering surfaces swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..todos.todo_models import Todo
    from .controller import TodoView


class StorageGateway(Protocol):
    """
    Durable key/value slot holding the whole todo collection.

    load() never raises: missing or corrupt data is an empty collection.
    """

    def load(self) -> list[Todo]: ...

    def save(self, todos: Sequence[Todo]) -> None: ...


class RenderSurface(Protocol):
    """Surface-side port: show the current view. Emitting events is the surface's business."""

    def render(self, view: TodoView) -> None: ...
