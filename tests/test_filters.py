# tests/test_filters.py

from __future__ import annotations

import dataclasses

import pytest

from todo_palette.todos.filters import counts, parse_filter, visible
from todo_palette.todos.todo_models import Filter, Todo


def _todos() -> list[Todo]:
    return [
        Todo(id=5, text="e", completed=False, created_at="2025-01-01T00:00:05.000Z"),
        Todo(id=4, text="d", completed=True, created_at="2025-01-01T00:00:04.000Z"),
        Todo(id=3, text="c", completed=False, created_at="2025-01-01T00:00:03.000Z"),
        Todo(id=2, text="b", completed=True, created_at="2025-01-01T00:00:02.000Z"),
        Todo(id=1, text="a", completed=False, created_at="2025-01-01T00:00:01.000Z"),
    ]


def test_all_is_identity() -> None:
    todos = _todos()
    assert visible(todos, Filter.ALL) == todos


def test_pending_and_completed_partition_all_in_order() -> None:
    todos = _todos()
    pending = visible(todos, Filter.PENDING)
    completed = visible(todos, Filter.COMPLETED)

    assert [t.id for t in pending] == [5, 3, 1]
    assert [t.id for t in completed] == [4, 2]

    pending_ids = {t.id for t in pending}
    completed_ids = {t.id for t in completed}
    assert pending_ids.isdisjoint(completed_ids)
    assert pending_ids | completed_ids == {t.id for t in todos}
    assert len(visible(todos, Filter.ALL)) >= max(len(pending), len(completed))


def test_visible_of_empty_collection() -> None:
    for f in Filter:
        assert visible([], f) == []


def test_visible_reflects_mutations_without_caching() -> None:
    todos = _todos()
    assert len(visible(todos, Filter.COMPLETED)) == 2
    todos[0] = dataclasses.replace(todos[0], completed=True)
    assert len(visible(todos, Filter.COMPLETED)) == 3


def test_counts() -> None:
    c = counts(_todos())
    assert (c.total, c.pending, c.completed) == (5, 3, 2)
    assert counts([]).total == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("all", Filter.ALL),
        ("1", Filter.ALL),
        ("Pending", Filter.PENDING),
        ("pendentes", Filter.PENDING),
        (" completed ", Filter.COMPLETED),
        ("3", Filter.COMPLETED),
        ("concluidas", Filter.COMPLETED),
        ("nope", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_filter(raw, expected) -> None:
    assert parse_filter(raw) == expected
