# src/todo_palette/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .controller import TodoController
from .ports import StorageGateway


@dataclass
class AppState:
    # Settings object (real Settings or a test double with the same attributes).
    settings: Any

    gateway: StorageGateway
    controller: TodoController
