# src/todo_palette/storage/gateway.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..todos.todo_models import Todo

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos-shadcn"


def encode_todos(todos: Sequence[Todo]) -> str:
    return json.dumps([t.to_record() for t in todos], ensure_ascii=False)


def decode_todos(raw: str | None) -> list[Todo]:
    """
    Parse the serialized collection.

    - missing / unparsable / non-list payload -> []
    - malformed entries inside a valid list are skipped
    """
    if not raw:
        return []
    try:
        data: Any = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored todos are not valid JSON; starting empty.")
        return []
    if not isinstance(data, list):
        logger.warning("Stored todos are not a JSON array (got %s); starting empty.", type(data).__name__)
        return []

    out: list[Todo] = []
    seen: set[int] = set()
    for item in data:
        todo = Todo.from_record(item)
        if todo is None or todo.id in seen:
            logger.debug("Skipping malformed stored todo: %r", item)
            continue
        seen.add(todo.id)
        out.append(todo)
    return out


class SqliteStorageGateway:
    """
    SQLite key/value slot.

    The collection lives as one JSON value under a fixed key in kv_store.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "todos.sqlite3", key: str = DEFAULT_STORAGE_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteStorageGateway ready db=%s key=%s", self._db_path, self._key)

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        # Unreadable file: load() yields [] and save() errors reach the store's log.
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at REAL NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Failed to prepare todo storage at %s", self._db_path)

    # ---- public API ----

    def load(self) -> list[Todo]:
        try:
            conn = self._get_conn()
            try:
                cur = conn.execute("SELECT value FROM kv_store WHERE key = ?", (self._key,))
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Failed to read todos from %s", self._db_path)
            return []

        todos = decode_todos(row[0] if row else None)
        logger.debug("Loaded %d todos from %s", len(todos), self._db_path)
        return todos

    def save(self, todos: Sequence[Todo]) -> None:
        payload = encode_todos(todos)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv_store(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (self._key, payload, time.time()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved %d todos to %s", len(todos), self._db_path)


class JsonFileStorageGateway:
    """
    JSON file slot: {"<key>": [...records...]}.

    Other keys in the same file are preserved on save.
    """

    def __init__(self, path: str | Path = "todos.json", key: str = DEFAULT_STORAGE_KEY) -> None:
        self._path = Path(path)
        self._key = key
        logger.info("JsonFileStorageGateway ready path=%s key=%s", self._path, self._key)

    @property
    def key(self) -> str:
        return self._key

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read todos file %s", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> list[Todo]:
        doc = self._read_document()
        value = doc.get(self._key)
        if value is None:
            return []
        # Re-encode so both backends share one decoder.
        todos = decode_todos(json.dumps(value))
        logger.debug("Loaded %d todos from %s", len(todos), self._path)
        return todos

    def save(self, todos: Sequence[Todo]) -> None:
        doc = self._read_document()
        doc[self._key] = [t.to_record() for t in todos]

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(Exception):
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d todos to %s", len(todos), self._path)


def create_gateway(backend: str, *, db_path: Path, json_path: Path, key: str):
    """Build the configured gateway. Unknown backends fall back to SQLite."""
    name = (backend or "").strip().lower()
    if name == "json":
        return JsonFileStorageGateway(json_path, key=key)
    if name not in ("", "sqlite"):
        logger.warning("Unknown storage backend %r; using sqlite.", backend)
    return SqliteStorageGateway(db_path, key=key)
