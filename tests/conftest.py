# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_palette.cli.bootstrap import create_initial_state
from todo_palette.core.controller import TodoController
from todo_palette.core.state import AppState
from todo_palette.todos.todo_store import TodoStore

from .fakes import FakeClock, FakeStorageGateway


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console connector.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todo-palette-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="sqlite",
        db_path=tmp_path / "todos.sqlite3",
        json_path=tmp_path / "todos.json",
        storage_key="todos-shadcn",
        max_text_length=100,
        suggestions=["Buy milk", "Study Python", "Exercise", "Read a book", "Tidy the desk"],
        placeholder_interval=0.01,
        console_color=False,
    )


@pytest.fixture()
def gateway() -> FakeStorageGateway:
    return FakeStorageGateway()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(gateway: FakeStorageGateway, clock: FakeClock) -> TodoStore:
    return TodoStore(gateway, clock_ms=clock, now_iso=lambda: "2025-01-02T03:04:05.678Z")


@pytest.fixture()
def controller(store: TodoStore) -> TodoController:
    return TodoController(store)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState built by the real composition root.

    NOTE: We keep the real SQLite gateway here because durability is part of
    what we want to test.
    """
    return create_initial_state(settings=settings)
