# tests/test_storage_gateway.py

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest

from todo_palette.storage.gateway import (
    JsonFileStorageGateway,
    SqliteStorageGateway,
    create_gateway,
    decode_todos,
    encode_todos,
)
from todo_palette.todos.todo_models import Todo


def _sample() -> list[Todo]:
    return [
        Todo(id=1_700_000_000_003, text="Ler um livro", completed=False, created_at="2025-01-02T03:04:07.000Z"),
        Todo(id=1_700_000_000_002, text="Study Python", completed=True, created_at="2025-01-02T03:04:06.000Z"),
        Todo(id=1_700_000_000_001, text="Buy milk", completed=False, created_at="2025-01-02T03:04:05.678Z"),
    ]


@pytest.fixture(params=["sqlite", "json"])
def any_gateway(request, tmp_path: Path):
    if request.param == "sqlite":
        return SqliteStorageGateway(tmp_path / "todos.sqlite3")
    return JsonFileStorageGateway(tmp_path / "todos.json")


def test_round_trip_preserves_fields_and_order(any_gateway) -> None:
    todos = _sample()
    any_gateway.save(todos)
    assert any_gateway.load() == todos


def test_save_overwrites_previous_state(any_gateway) -> None:
    any_gateway.save(_sample())
    any_gateway.save(_sample()[:1])
    assert [t.text for t in any_gateway.load()] == ["Ler um livro"]

    any_gateway.save([])
    assert any_gateway.load() == []


def test_load_missing_slot_is_empty(any_gateway) -> None:
    assert any_gateway.load() == []


def test_record_field_names() -> None:
    payload = json.loads(encode_todos(_sample()[2:]))
    assert payload == [
        {"id": 1_700_000_000_001, "texto": "Buy milk", "concluida": False, "criadaEm": "2025-01-02T03:04:05.678Z"}
    ]


@pytest.mark.parametrize("raw", [None, "", "{not json", '{"a": 1}', "42", '"text"'])
def test_decode_corrupt_payload_is_empty(raw) -> None:
    assert decode_todos(raw) == []


def test_decode_skips_malformed_entries() -> None:
    raw = json.dumps(
        [
            {"id": 1, "texto": "ok", "concluida": True, "criadaEm": "2025-01-01T00:00:00.000Z"},
            {"id": "x", "texto": "bad id", "concluida": False, "criadaEm": "2025-01-01T00:00:00.000Z"},
            {"id": 2, "texto": "   ", "concluida": False, "criadaEm": "2025-01-01T00:00:00.000Z"},
            {"id": 3, "texto": "no date", "concluida": False},
            {"id": 1, "texto": "duplicate id", "concluida": False, "criadaEm": "2025-01-01T00:00:00.000Z"},
            "junk",
            {"id": 4.0, "texto": "float id", "criadaEm": "2025-01-01T00:00:00.000Z"},
        ]
    )
    todos = decode_todos(raw)
    assert [(t.id, t.text, t.completed) for t in todos] == [(1, "ok", True), (4, "float id", False)]


def test_sqlite_corrupt_value_loads_empty(tmp_path: Path) -> None:
    db = tmp_path / "todos.sqlite3"
    gw = SqliteStorageGateway(db, key="todos-shadcn")

    conn = sqlite3.connect(str(db))
    try:
        conn.execute(
            "INSERT INTO kv_store(key, value, updated_at) VALUES (?, ?, ?)",
            ("todos-shadcn", "]]garbage[[", 0.0),
        )
        conn.commit()
    finally:
        conn.close()

    assert gw.load() == []


def test_sqlite_keys_are_isolated(tmp_path: Path) -> None:
    db = tmp_path / "todos.sqlite3"
    a = SqliteStorageGateway(db, key="a")
    b = SqliteStorageGateway(db, key="b")

    a.save(_sample())
    assert b.load() == []
    assert len(a.load()) == 3


def test_json_file_corrupt_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    path.write_text("{oops", "utf-8")
    assert JsonFileStorageGateway(path).load() == []


def test_json_file_preserves_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    path.write_text(json.dumps({"theme": "dark"}), "utf-8")

    gw = JsonFileStorageGateway(path, key="todos-shadcn")
    gw.save(_sample())

    doc = json.loads(path.read_text("utf-8"))
    assert doc["theme"] == "dark"
    assert len(doc["todos-shadcn"]) == 3
    assert not path.with_suffix(".tmp").exists()


def test_create_gateway_picks_backend(tmp_path: Path) -> None:
    kwargs = dict(db_path=tmp_path / "t.sqlite3", json_path=tmp_path / "t.json", key="k")
    assert isinstance(create_gateway("json", **kwargs), JsonFileStorageGateway)
    assert isinstance(create_gateway("sqlite", **kwargs), SqliteStorageGateway)
    assert isinstance(create_gateway("mystery", **kwargs), SqliteStorageGateway)


def test_sqlite_file_that_is_not_a_database_loads_empty(tmp_path: Path) -> None:
    db = tmp_path / "todos.sqlite3"
    db.write_bytes(b"this is not a database" * 100)

    gw = SqliteStorageGateway(db)
    assert gw.load() == []
    with pytest.raises(sqlite3.DatabaseError):
        gw.save(_sample())


def test_loaded_text_is_trimmed_and_capped() -> None:
    raw = json.dumps(
        [
            {"id": 2, "texto": "  padded  ", "concluida": False, "criadaEm": "2025-01-01T00:00:00.000Z"},
            {"id": 1, "texto": "x" * 300, "concluida": False, "criadaEm": "2025-01-01T00:00:00.000Z"},
        ]
    )
    todos = decode_todos(raw)
    assert todos[0].text == "padded"
    assert todos[1].text == "x" * 100
