# src/todo_palette/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage gateway, store and controller into AppState,
- loads the persisted collection.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.controller import TodoController
from ..core.state import AppState
from ..storage.gateway import create_gateway
from ..todos.suggestions import DEFAULT_SUGGESTIONS, PlaceholderRotator
from ..todos.todo_models import MAX_TEXT_LENGTH
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, gateway=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the gateway) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if gateway is None:
        gateway = create_gateway(
            getattr(settings, "storage_backend", "sqlite"),
            db_path=settings.db_path,
            json_path=settings.json_path,
            key=settings.storage_key,
        )

    max_len = int(getattr(settings, "max_text_length", MAX_TEXT_LENGTH))
    store = TodoStore(gateway, max_text_length=max_len)
    controller = TodoController(
        store,
        suggestions=getattr(settings, "suggestions", None) or DEFAULT_SUGGESTIONS,
        placeholder=PlaceholderRotator(),
        max_text_length=max_len,
    )
    total = controller.load()
    logger.info("State ready: %d todos (backend=%s)", total, getattr(settings, "storage_backend", "sqlite"))

    return AppState(settings=settings, gateway=gateway, controller=controller)
