# src/todo_palette/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from .storage.gateway import DEFAULT_STORAGE_KEY
from .todos.suggestions import DEFAULT_SUGGESTIONS
from .todos.todo_models import MAX_TEXT_LENGTH

ENV_PREFIX = "TODO_PALETTE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    # Suggestions contain spaces, so only commas separate items.
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    db_path: Path
    json_path: Path
    storage_key: str

    # ---- Behaviour ----
    max_text_length: int
    suggestions: List[str]
    placeholder_interval: float

    # ---- Console ----
    console_color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-palette")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-palette"))
        storage_backend = _env(_k("STORAGE_BACKEND"), "sqlite").strip().lower() or "sqlite"
        db_path = _env_path(_k("DB_PATH"), data_dir / "todos.sqlite3")
        json_path = _env_path(_k("JSON_PATH"), data_dir / "todos.json")
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY

        max_text_length = _env_int(_k("MAX_TEXT_LENGTH"), MAX_TEXT_LENGTH)
        if max_text_length <= 0:
            max_text_length = MAX_TEXT_LENGTH
        suggestions = _env_list(_k("SUGGESTIONS"), list(DEFAULT_SUGGESTIONS))
        placeholder_interval = _env_float(_k("PLACEHOLDER_INTERVAL"), 3.0)

        console_color = _env_bool(_k("CONSOLE_COLOR"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            db_path=db_path,
            json_path=json_path,
            storage_key=storage_key,
            max_text_length=max_text_length,
            suggestions=suggestions,
            placeholder_interval=placeholder_interval,
            console_color=console_color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
